"""
Rendezvous Signaling Node Package

This package provides the signaling node: room and presence state,
targeted signal relay, chat broadcast with bounded history, and the
WebSocket server that exposes them.
"""

from .room_state import RoomStateManager, Room, Message, HISTORY_LIMIT
from .connection_registry import ConnectionRegistry, ConnectionBinding
from .service import SignalingService
from .websocket_server import WebSocketServer

__all__ = [
    "RoomStateManager",
    "Room",
    "Message",
    "HISTORY_LIMIT",
    "ConnectionRegistry",
    "ConnectionBinding",
    "SignalingService",
    "WebSocketServer",
]
