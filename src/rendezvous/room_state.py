"""
Room State Management for the Signaling Node

This module manages the in-memory state of rooms on this node.
Rooms are created lazily on first join and destroyed as soon as their
last member leaves; nothing survives a restart.
"""

import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)

# Number of chat messages retained per room (oldest evicted first)
HISTORY_LIMIT = 100


@dataclass(frozen=True)
class Message:
    """
    A chat message stored in a room's history.

    Attributes:
        id: Server-generated unique identifier
        user_id: User ID of the sender
        body: Message text, stored verbatim
        timestamp: Caller-supplied timestamp, passed through unchanged
        room_id: Room the message was sent to
    """

    id: str
    user_id: str
    body: str
    timestamp: Any
    room_id: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation sent to clients."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "message": self.body,
            "timestamp": self.timestamp,
            "roomId": self.room_id,
        }


@dataclass
class Room:
    """
    Represents a room hosted on this node.

    Attributes:
        room_id: Client-chosen room identifier
        members: Dict of user_id -> connection_id for current members
        history: Most recent messages, oldest first
        created_at: ISO 8601 timestamp when the room was created
    """

    room_id: str
    members: Dict[str, str] = field(default_factory=dict)
    history: Deque[Message] = field(
        default_factory=lambda: deque(maxlen=HISTORY_LIMIT)
    )
    created_at: str = ""

    def __post_init__(self):
        """Initialize the creation timestamp if not set."""
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert room to its directory listing entry."""
        return {
            "id": self.room_id,
            "users": len(self.members),
        }

    def other_members(self, user_id: str) -> List[str]:
        """Get user IDs of every member except the given one."""
        return [member for member in self.members if member != user_id]

    def member_connections(self, exclude: Optional[str] = None) -> List[str]:
        """
        Get connection IDs of current members.

        Args:
            exclude: Optional connection ID to leave out

        Returns:
            List of connection IDs
        """
        return [
            connection_id
            for connection_id in self.members.values()
            if connection_id != exclude
        ]


class RoomStateManager:
    """
    Manages the state of all rooms hosted on this node.

    No Room with an empty member mapping is ever left in the store:
    removing the last member deletes the room in the same call.
    """

    def __init__(self):
        """Initialize an empty room store."""
        self._rooms: Dict[str, Room] = {}

    def get_or_create_room(self, room_id: str) -> Room:
        """
        Get a room, creating it on first reference.

        Args:
            room_id: The room ID to look up or create

        Returns:
            The existing or newly created Room object
        """
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id=room_id)
            self._rooms[room_id] = room
            logger.info(f"Created room {room_id}")
        return room

    def get_room(self, room_id: str) -> Optional[Room]:
        """
        Get a room by its ID.

        Args:
            room_id: The room ID to look up

        Returns:
            The Room object if found, None otherwise
        """
        return self._rooms.get(room_id)

    def list_rooms(self) -> List[Dict[str, Any]]:
        """
        Get a point-in-time snapshot of all rooms.

        Returns:
            List of {"id", "users"} dictionaries
        """
        return [room.to_dict() for room in self._rooms.values()]

    def get_room_count(self) -> int:
        """Get the number of rooms currently in the store."""
        return len(self._rooms)

    def add_member(self, room_id: str, user_id: str, connection_id: str) -> Room:
        """
        Add a member to a room, creating the room if needed.

        A user ID that is already present is rebound to the new
        connection (last writer wins).

        Args:
            room_id: The room ID
            user_id: The user ID to add
            connection_id: The connection the user joined from

        Returns:
            The Room the member was added to
        """
        room = self.get_or_create_room(room_id)
        previous = room.members.get(user_id)
        room.members[user_id] = connection_id
        if previous is not None and previous != connection_id:
            logger.info(
                f"Rebound user {user_id} in room {room_id} "
                f"from connection {previous} to {connection_id}"
            )
        else:
            logger.info(f"Added user {user_id} to room {room_id}")
        return room

    def remove_member(
        self,
        room_id: str,
        user_id: str,
        connection_id: Optional[str] = None,
    ) -> bool:
        """
        Remove a member from a room, deleting the room if it empties.

        Args:
            room_id: The room ID
            user_id: The user ID to remove
            connection_id: If given, only remove the member while it is
                still mapped to this connection

        Returns:
            True if a member entry was removed, False otherwise
        """
        room = self._rooms.get(room_id)
        if room is None or user_id not in room.members:
            return False

        if connection_id is not None and room.members[user_id] != connection_id:
            logger.debug(
                f"User {user_id} in room {room_id} is bound to a newer "
                f"connection, keeping membership"
            )
            return False

        del room.members[user_id]
        logger.info(f"Removed user {user_id} from room {room_id}")

        if not room.members:
            del self._rooms[room_id]
            logger.info(f"Deleted empty room {room_id}")
        return True

    def add_message(
        self, room_id: str, user_id: str, body: str, timestamp: Any
    ) -> Optional[Message]:
        """
        Append a message to a room's history.

        The history keeps at most HISTORY_LIMIT entries; the oldest
        message is evicted once the limit is exceeded.

        Args:
            room_id: The room ID
            user_id: User ID of the sender
            body: Message text
            timestamp: Caller-supplied timestamp

        Returns:
            The stored Message, or None if the room doesn't exist
        """
        room = self._rooms.get(room_id)
        if room is None:
            return None

        message = Message(
            id=str(uuid.uuid4()),
            user_id=user_id,
            body=body,
            timestamp=timestamp,
            room_id=room_id,
        )
        room.history.append(message)
        logger.debug(
            f"Stored message {message.id} in room {room_id} "
            f"({len(room.history)}/{HISTORY_LIMIT})"
        )
        return message
