"""
Request Schema Definitions

Contains the closed set of inbound request variants and the parser
that turns a decoded client frame into one of them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from ..utils.validation import validate_identifier, validate_message_content

JOIN_ROOM = "join-room"
SIGNAL = "signal"
SEND_MESSAGE = "send-message"


class InvalidRequestError(ValueError):
    """Raised when an inbound frame is not a well-formed request."""


@dataclass(frozen=True)
class JoinRoom:
    """A client asking to join a room as a user."""

    room_id: str
    user_id: str


@dataclass(frozen=True)
class Signal:
    """An opaque negotiation payload addressed to another user."""

    user_id: str
    target_user_id: str
    signal: Any


@dataclass(frozen=True)
class SendMessage:
    """A chat message to broadcast to a room."""

    room_id: str
    user_id: str
    message: str
    timestamp: Any = None


@dataclass(frozen=True)
class Disconnect:
    """The transport reporting that a connection went away."""


Request = Union[JoinRoom, Signal, SendMessage, Disconnect]


def _require_identifier(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    is_valid, error = validate_identifier(value, key)
    if not is_valid:
        raise InvalidRequestError(error)
    return value


def parse_request(frame: Any) -> Request:
    """
    Build a typed request from a decoded client frame.

    Expected frame format:
    {
        "type": "join-room" | "signal" | "send-message",
        "data": {...}
    }

    Args:
        frame: The decoded JSON value received from the client

    Returns:
        One of JoinRoom, Signal or SendMessage

    Raises:
        InvalidRequestError: If the frame shape, type or fields are invalid
    """
    if not isinstance(frame, dict):
        raise InvalidRequestError("Frame must be a JSON object")

    event_type = frame.get("type")
    data = frame.get("data")
    if not isinstance(data, dict):
        raise InvalidRequestError(f"Missing data object for '{event_type}'")

    if event_type == JOIN_ROOM:
        return JoinRoom(
            room_id=_require_identifier(data, "roomId"),
            user_id=_require_identifier(data, "userId"),
        )
    elif event_type == SIGNAL:
        if "signal" not in data:
            raise InvalidRequestError("signal is required")
        return Signal(
            user_id=_require_identifier(data, "userId"),
            target_user_id=_require_identifier(data, "targetUserId"),
            signal=data["signal"],
        )
    elif event_type == SEND_MESSAGE:
        message = data.get("message")
        is_valid, error = validate_message_content(message)
        if not is_valid:
            raise InvalidRequestError(error)
        return SendMessage(
            room_id=_require_identifier(data, "roomId"),
            user_id=_require_identifier(data, "userId"),
            message=message,
            timestamp=data.get("timestamp"),
        )
    else:
        raise InvalidRequestError(f"Unknown event type: {event_type}")
