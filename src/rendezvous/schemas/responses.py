"""
Response Schema Definitions

Contains functions for creating the HTTP directory response.
"""

from typing import Any, Dict, List


def create_rooms_response(rooms: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Create the room directory response body.

    Args:
        rooms: Room entries from RoomStateManager.list_rooms()

    Returns:
        dict: {"rooms": [{"id": ..., "users": ...}, ...]}
    """
    return {"rooms": rooms}
