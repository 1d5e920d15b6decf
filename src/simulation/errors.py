class LiftError(Exception):
    pass


class InvalidCapacityError(LiftError, ValueError):
    """Raised when the car capacity is not a positive integer"""

    def __init__(self, capacity) -> None:
        super().__init__(f"capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity


class InvalidLayoutError(LiftError, ValueError):
    """Raised when the waiting layout is empty or names an unknown floor"""

    pass
