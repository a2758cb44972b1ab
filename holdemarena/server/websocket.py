"""
WebSocket handling for real-time room updates.

Clients connect to ``/ws`` and receive the room state on connect and after
every successful room operation:

    {"type": "room", "room": {...}}

Operations themselves go through the HTTP API; the socket only reads.
"""

from __future__ import annotations
from typing import Any, Dict, List
import logging

from fastapi import WebSocket, WebSocketDisconnect


logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks connected sockets and broadcasts room snapshots."""

    def __init__(self):
        self.connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.append(websocket)
        logger.info(f"WebSocket connected ({len(self.connections)} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info(f"WebSocket disconnected ({len(self.connections)} open)")

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """Broadcast a message to all connected clients."""
        for websocket in list(self.connections):
            try:
                await websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.error(f"Error sending to client: {e}")
                self.disconnect(websocket)


def room_message(room: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "room", "room": room}


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for room updates.

    Protocol:
    1. Client connects
    2. Server sends {"type": "room", "room": ...}
    3. Server pushes the same message after every room operation
    4. Client messages {"type": "get_state"} get the current room back
    """
    app = websocket.app
    manager: ConnectionManager = app.state.connections
    await manager.connect(websocket)

    try:
        await websocket.send_json(room_message(app.state.room.snapshot().model_dump(by_alias=True)))

        while True:
            message = await websocket.receive_json()
            if message.get("type") == "get_state":
                await websocket.send_json(
                    room_message(app.state.room.snapshot().model_dump(by_alias=True))
                )
            else:
                await websocket.send_json({
                    "type": "error",
                    "message": f"Unknown message type: {message.get('type')}",
                })

    except WebSocketDisconnect:
        logger.info("WebSocket client left")
    finally:
        manager.disconnect(websocket)
