"""
HoldemArena Server - FastAPI + WebSocket Room Service
"""

from holdemarena.server.app import app, create_app
from holdemarena.server.room import RoomService

__all__ = ["app", "create_app", "RoomService"]
