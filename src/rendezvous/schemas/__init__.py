"""
Schemas for the Signaling Node

This module contains request variants and the builders for events
and responses exchanged with clients.
"""

from .requests import (
    InvalidRequestError,
    JoinRoom,
    Signal,
    SendMessage,
    Disconnect,
    Request,
    parse_request,
)
from .events import (
    create_user_connected_event,
    create_user_disconnected_event,
    create_room_users_event,
    create_signal_event,
)
from .messages import (
    create_new_message_event,
    create_chat_history_event,
)
from .responses import create_rooms_response

__all__ = [
    "InvalidRequestError",
    "JoinRoom",
    "Signal",
    "SendMessage",
    "Disconnect",
    "Request",
    "parse_request",
    "create_user_connected_event",
    "create_user_disconnected_event",
    "create_room_users_event",
    "create_signal_event",
    "create_new_message_event",
    "create_chat_history_event",
    "create_rooms_response",
]
