"""WebSocket gateway: lets browsers and devices receive live events.

Protocol (JSON text frames):

    client → {"event": "register", "data": {"recipientId": "<id>"}}
    server → {"event": "register", "data": {"success": true, "message": "Registered successfully"}}
    server → {"event": "<name>", "data": <payload>}    # every emitted event

Emits may come from any thread (request handlers, the scheduler thread), so
each connection owns an ``asyncio.Queue`` drained by a single writer task on
the connection's event loop.
"""

import asyncio
import json
from uuid import uuid4

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from engagement.realtime.registry import LiveConnection, get_registry

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["realtime"])

REGISTER_EVENT = "register"


class WebSocketConnection(LiveConnection):
    """Live connection backed by a FastAPI ``WebSocket``."""

    def __init__(self, websocket: WebSocket, loop: asyncio.AbstractEventLoop):
        self.websocket = websocket
        self._loop = loop
        self._queue: asyncio.Queue = asyncio.Queue()
        self._connection_id = f"ws-{uuid4().hex[:12]}"

    @property
    def connection_id(self) -> str:
        return self._connection_id

    def send(self, event, payload):
        if self._loop.is_closed():
            raise ConnectionError(f"Event loop for {self._connection_id} is closed")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, {"event": event, "data": payload})

    async def pump(self):
        """Write queued frames to the socket until cancelled."""
        while True:
            frame = await self._queue.get()
            await self.websocket.send_json(frame)


def _error_frame(message: str) -> dict:
    return {"event": "error", "data": {"success": False, "message": message}}


def _handle_frame(connection: WebSocketConnection, raw: str) -> dict:
    """Process one client frame and return the reply frame."""
    try:
        frame = json.loads(raw)
    except ValueError:
        return _error_frame("Frames must be JSON objects")

    if not isinstance(frame, dict):
        return _error_frame("Frames must be JSON objects")

    if frame.get("event") != REGISTER_EVENT:
        return _error_frame(f"Unknown event: {frame.get('event')}")

    data = frame.get("data") or {}
    if not isinstance(data, dict):
        return _error_frame("Register data must be a JSON object")

    recipient_id = data.get("recipientId") or data.get("userId")
    if recipient_id in (None, ""):
        return _error_frame("recipientId is required")

    get_registry().register(connection, recipient_id)
    return {
        "event": REGISTER_EVENT,
        "data": {"success": True, "message": "Registered successfully"},
    }


@router.websocket("/ws/notifications")
async def notifications_socket(websocket: WebSocket):
    await websocket.accept()
    connection = WebSocketConnection(websocket, asyncio.get_running_loop())
    writer = asyncio.create_task(connection.pump())
    logger.info("WebSocket client connected", connection_id=connection.connection_id)

    try:
        while True:
            raw = await websocket.receive_text()
            reply = _handle_frame(connection, raw)
            connection.send(reply["event"], reply["data"])
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected", connection_id=connection.connection_id)
    finally:
        get_registry().unregister(connection)
        writer.cancel()
