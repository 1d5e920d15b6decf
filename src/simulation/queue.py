from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class OrderedQueue(Generic[T]):
    """FIFO container with value- and predicate-based extraction.

    Used for passengers waiting on a floor, riding in the car and delivered
    to a floor. Lookups that find nothing return ``None`` rather than
    raising, so callers must compare with ``is None`` (floor ``0`` is a
    valid passenger).
    """

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: Deque[T] = deque(items or ())

    def enqueue(self, *values: T) -> "OrderedQueue[T]":
        self._items.extend(values)
        return self

    def dequeue(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.popleft()

    def dequeue_matching(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Remove and return the first element satisfying ``predicate``."""
        for index, item in enumerate(self._items):
            if predicate(item):
                del self._items[index]
                return item
        return None

    def dequeue_value(self, value: T) -> Optional[T]:
        return self.dequeue_matching(lambda item: item == value)

    def remove_all(self, value: T) -> List[T]:
        """Remove every element equal to ``value`` and return them in order."""
        removed = [item for item in self._items if item == value]
        if removed:
            self._items = deque(item for item in self._items if item != value)
        return removed

    def any(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self._items)

    def all(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(item) for item in self._items)

    @property
    def size(self) -> int:
        return len(self._items)

    def peek_at(self, index: int) -> Optional[T]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def to_list(self) -> List[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"OrderedQueue({self.to_list()!r})"
