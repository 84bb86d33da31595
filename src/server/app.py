from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from typing import Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ValidationError

from elevator import ControllerConfig, ElevatorController
from elevator.logging_config import configure_from_env

from .page import INDEX_HTML
from .view import render

logger = logging.getLogger(__name__)


class FloorRequest(BaseModel):
    floor: int


class SessionManager:
    """Owns the controller for one browser session and fans state out to clients."""

    def __init__(self, config: Optional[ControllerConfig] = None) -> None:
        self.config = config or ControllerConfig()
        self.controller: Optional[ElevatorController] = None
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._changed = asyncio.Event()

    async def start(self) -> None:
        if self.controller is not None:
            return
        self.controller = ElevatorController(asyncio.get_running_loop(), self.config)
        self.controller.on_event("dispatch", self._on_dispatch)
        self._changed = asyncio.Event()
        self._task = asyncio.create_task(self._run())
        logger.info("Session started with %d floors", self.config.total_floors)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if self.controller is not None:
            self.controller.close()
            self.controller = None
            logger.info("Session stopped")

    def _on_dispatch(self, payload: object) -> None:
        self._changed.set()

    async def _run(self) -> None:
        while True:
            await self._changed.wait()
            self._changed.clear()
            await self.broadcast(self.current_state())

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except (WebSocketDisconnect, RuntimeError):
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

    def require_controller(self) -> ElevatorController:
        if self.controller is None:
            raise HTTPException(status_code=503, detail="Session is not running")
        return self.controller

    def current_state(self) -> dict:
        controller = self.require_controller()
        state = controller.snapshot()
        state["view"] = render(controller.state, controller.travel_duration)
        return state

    def request_floor(self, floor: int) -> dict:
        self.require_controller().request_floor(floor)
        return self.current_state()

    def open_doors(self) -> dict:
        self.require_controller().open_doors()
        return self.current_state()

    def close_doors(self) -> dict:
        self.require_controller().close_doors()
        return self.current_state()


manager = SessionManager(ControllerConfig(total_floors=int(os.environ.get("LIFTCAR_FLOORS", "5"))))
app = FastAPI(title="LiftCar Elevator API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/", response_class=HTMLResponse)
async def index() -> str:
    return INDEX_HTML


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/floors/{floor}/request")
async def request_floor(floor: int) -> dict:
    return manager.request_floor(floor)


@app.post("/doors/open")
async def open_doors() -> dict:
    return manager.open_doors()


@app.post("/doors/close")
async def close_doors() -> dict:
    return manager.close_doors()


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            message = await websocket.receive_text()
            try:
                request = FloorRequest.model_validate_json(message)
            except ValidationError as exc:
                errors = exc.errors(include_url=False, include_context=False)
                await websocket.send_text(json.dumps({"error": errors}))
                continue
            manager.request_floor(request.floor)
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    configure_from_env()
    uvicorn.run(
        "server.app:app",
        host=os.environ.get("LIFTCAR_HOST", "0.0.0.0"),
        port=int(os.environ.get("LIFTCAR_PORT", "8000")),
        reload=False,
    )
