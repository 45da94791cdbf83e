"""
Event Schema Definitions

Contains functions for creating the presence and signaling events
sent from the server to clients.
"""

from typing import Any, Dict, List

USER_CONNECTED = "user-connected"
USER_DISCONNECTED = "user-disconnected"
ROOM_USERS = "room-users"
SIGNAL = "signal"


def create_user_connected_event(user_id: str) -> Dict[str, Any]:
    """
    Create a user-connected event data structure.

    Only the user ID is exposed; connection identifiers never leave
    the server.

    Args:
        user_id: User ID of the joining member

    Returns:
        dict: Event data
    """
    return {"userId": user_id}


def create_user_disconnected_event(user_id: str) -> Dict[str, Any]:
    """
    Create a user-disconnected event data structure.

    Args:
        user_id: User ID of the departing member

    Returns:
        dict: Event data
    """
    return {"userId": user_id}


def create_room_users_event(users: List[str]) -> Dict[str, Any]:
    """
    Create a room-users snapshot for a joining member.

    Args:
        users: User IDs of the other current members

    Returns:
        dict: Event data
    """
    return {"users": list(users)}


def create_signal_event(user_id: str, signal: Any) -> Dict[str, Any]:
    """
    Create a relayed signal event.

    Args:
        user_id: User ID claimed by the sender
        signal: Opaque negotiation payload, forwarded unmodified

    Returns:
        dict: Event data
    """
    return {"userId": user_id, "signal": signal}
