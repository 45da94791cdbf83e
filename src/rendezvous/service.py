"""
Signaling Service

Handles every client event against the node's in-memory state.
Supports:
    - join-room (presence join)
    - signal (targeted relay of opaque payloads)
    - send-message (chat broadcast with bounded history)
    - disconnect (presence leave)
    - room directory query

Architecture:
    - Handlers are synchronous and run to completion against the
      current state, so no two events interleave their mutations
    - Handlers return the deliveries to send; the transport sends them
      afterwards, fire-and-forget
"""

import logging
from typing import Any, Dict, List, Optional

from .connection_registry import ConnectionRegistry
from .room_state import RoomStateManager
from .schemas import (
    Disconnect,
    JoinRoom,
    Request,
    SendMessage,
    Signal,
    create_chat_history_event,
    create_new_message_event,
    create_room_users_event,
    create_rooms_response,
    create_signal_event,
    create_user_connected_event,
    create_user_disconnected_event,
)
from .schemas.events import (
    ROOM_USERS,
    SIGNAL,
    USER_CONNECTED,
    USER_DISCONNECTED,
)
from .schemas.messages import CHAT_HISTORY, NEW_MESSAGE
from .utils import Delivery

logger = logging.getLogger(__name__)


class SignalingService:
    """
    Owns the room store and connection registry and handles requests
    from clients.
    """

    def __init__(
        self,
        room_manager: Optional[RoomStateManager] = None,
        registry: Optional[ConnectionRegistry] = None,
    ):
        """
        Initialize the signaling service.

        Args:
            room_manager: Room store; a fresh one is created if omitted
            registry: Connection registry; a fresh one is created if omitted
        """
        self.room_manager = room_manager or RoomStateManager()
        self.registry = registry or ConnectionRegistry()

    def handle(self, connection_id: str, request: Request) -> List[Delivery]:
        """
        Dispatch a request to its handler.

        Args:
            connection_id: The connection the request arrived on
            request: A parsed request variant

        Returns:
            Deliveries to send, in order
        """
        if isinstance(request, JoinRoom):
            return self.handle_join(connection_id, request)
        elif isinstance(request, Signal):
            return self.handle_signal(connection_id, request)
        elif isinstance(request, SendMessage):
            return self.handle_send_message(connection_id, request)
        elif isinstance(request, Disconnect):
            return self.handle_disconnect(connection_id)
        raise TypeError(f"Unsupported request: {type(request).__name__}")

    def handle_join(self, connection_id: str, request: JoinRoom) -> List[Delivery]:
        """
        Handle a join-room request.

        Steps:
            1. Register user_id -> connection_id in the room (last writer wins)
            2. Detach the connection from the (room, user) it was bound to
               before, if different
            3. Bind the connection
            4. Notify every other member with user-connected
            5. Send room-users and chat-history to the joiner

        The new member is added before the old entry is removed, so a
        connection re-joining its own room under another user ID never
        empties the room or loses its history.
        """
        deliveries: List[Delivery] = []

        previous = self.registry.lookup(connection_id)
        room = self.room_manager.add_member(
            request.room_id, request.user_id, connection_id
        )

        if previous and (previous.room_id, previous.user_id) != (
            request.room_id,
            request.user_id,
        ):
            deliveries.extend(self._detach(connection_id, exclude=connection_id))

        self.registry.bind(connection_id, request.user_id, request.room_id)

        joined = create_user_connected_event(request.user_id)
        for member_connection in room.member_connections(exclude=connection_id):
            deliveries.append(Delivery(member_connection, USER_CONNECTED, joined))

        deliveries.append(
            Delivery(
                connection_id,
                ROOM_USERS,
                create_room_users_event(room.other_members(request.user_id)),
            )
        )
        deliveries.append(
            Delivery(
                connection_id,
                CHAT_HISTORY,
                create_chat_history_event(room.history),
            )
        )

        logger.info(f"User {request.user_id} joined room {request.room_id}")
        return deliveries

    def handle_signal(self, connection_id: str, request: Signal) -> List[Delivery]:
        """
        Relay an opaque signal to the target user's connection.

        The request is dropped without notice if the sender has no
        binding, its room is gone, or the target is not a member.
        """
        binding = self.registry.lookup(connection_id)
        if binding is None:
            logger.debug(f"Dropping signal from unbound connection {connection_id}")
            return []

        room = self.room_manager.get_room(binding.room_id)
        if room is None:
            logger.debug(f"Dropping signal for vanished room {binding.room_id}")
            return []

        target_connection = room.members.get(request.target_user_id)
        if target_connection is None:
            logger.debug(
                f"Dropping signal to {request.target_user_id}: "
                f"not in room {binding.room_id}"
            )
            return []

        return [
            Delivery(
                target_connection,
                SIGNAL,
                create_signal_event(request.user_id, request.signal),
            )
        ]

    def handle_send_message(
        self, connection_id: str, request: SendMessage
    ) -> List[Delivery]:
        """
        Store a chat message and broadcast it to every room member,
        the sender included.
        """
        message = self.room_manager.add_message(
            request.room_id, request.user_id, request.message, request.timestamp
        )
        if message is None:
            logger.debug(f"Dropping message for unknown room {request.room_id}")
            return []

        room = self.room_manager.get_room(request.room_id)
        return [
            Delivery(member_connection, NEW_MESSAGE, create_new_message_event(message))
            for member_connection in room.member_connections()
        ]

    def handle_disconnect(self, connection_id: str) -> List[Delivery]:
        """
        Handle a connection going away.

        Idempotent: a connection without a binding is a no-op. When the
        departing user was the last member the room is deleted and no
        user-disconnected event is emitted.
        """
        deliveries = self._detach(connection_id)
        logger.info(f"Connection {connection_id} disconnected")
        return deliveries

    def list_rooms(self) -> Dict[str, Any]:
        """Return the room directory as of now."""
        return create_rooms_response(self.room_manager.list_rooms())

    def _detach(
        self, connection_id: str, exclude: Optional[str] = None
    ) -> List[Delivery]:
        """Unbind a connection and remove its member entry."""
        binding = self.registry.unbind(connection_id)
        if binding is None:
            return []

        removed = self.room_manager.remove_member(
            binding.room_id, binding.user_id, connection_id
        )
        if not removed:
            return []

        room = self.room_manager.get_room(binding.room_id)
        if room is None:
            return []

        left = create_user_disconnected_event(binding.user_id)
        logger.info(f"User {binding.user_id} left room {binding.room_id}")
        return [
            Delivery(member_connection, USER_DISCONNECTED, left)
            for member_connection in room.member_connections(exclude=exclude)
        ]
