from __future__ import annotations

import asyncio
import contextlib
import json
import os
from typing import AsyncIterator, List, Optional, Set, Tuple

import structlog
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from simulation import DEMO_LAYOUT, LiftConstraints, LiftController, LiftError, configure_logging

logger = structlog.get_logger(__name__)


def compute_run(layout: List[List[int]], capacity: int) -> Tuple[List[int], List[dict], dict]:
    """Run a dispatch to completion, returning history, snapshots and final state."""
    snapshots: List[dict] = []
    controller = LiftController(layout, capacity, lambda snapshot: snapshots.append(snapshot.to_dict()))
    history = controller.run()
    return history, snapshots, controller.snapshot().to_dict()


class RunRequest(BaseModel):
    layout: List[List[int]] = Field(default_factory=lambda: [list(floor) for floor in DEMO_LAYOUT])
    capacity: int = Field(default=LiftConstraints.capacity, ge=1)


class SimulationManager:
    """Replays lift snapshots to WebSocket clients one at a time.

    Runs are computed up front; their snapshots go through a single
    worker that applies one, broadcasts it and then waits ``step_delay``
    seconds before taking the next.
    """

    def __init__(self, step_delay: float = 2.0) -> None:
        self.step_delay = step_delay
        self.clients: Set[WebSocket] = set()
        self.snapshot: Optional[dict] = None
        self.queue: asyncio.Queue = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            payload = await self.queue.get()
            try:
                self.snapshot = payload
                await self.broadcast(self.current_state())
                await asyncio.sleep(self.step_delay)
            except Exception:
                logger.exception("replay_step_failed", current_floor=payload.get("current_floor"))
            finally:
                self.queue.task_done()

    async def submit_run(self, layout: List[List[int]], capacity: int) -> dict:
        # Dispatch off the event loop so replay keeps its pace
        history, snapshots, final_state = await asyncio.to_thread(compute_run, layout, capacity)
        for payload in snapshots:
            self.queue.put_nowait(payload)
        logger.info("run_submitted", floors=len(layout), capacity=capacity, stops=len(history))
        return {"floor_history": history, "steps": len(snapshots), "final_state": final_state}

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
            except Exception:
                logger.warning("client_send_failed", exc_info=True)
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return {
            "snapshot": self.snapshot,
            "pending": self.queue.qsize(),
            "step_delay": self.step_delay,
        }


def create_app(step_delay: float = 2.0) -> FastAPI:
    manager = SimulationManager(step_delay=step_delay)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        await manager.start()
        try:
            yield
        finally:
            await manager.stop()

    app = FastAPI(title="Lift Dispatch Simulation API", lifespan=lifespan)
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/runs")
    async def create_run(request: RunRequest) -> dict:
        try:
            return await manager.submit_run(request.layout, request.capacity)
        except LiftError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.register(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.unregister(websocket)

    return app


app = create_app(step_delay=float(os.getenv("LIFT_STEP_DELAY", "2.0")))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
