"""
Message Schema Definitions

Contains functions for creating chat message events.
"""

from typing import Any, Dict, Iterable

from ..room_state import Message

NEW_MESSAGE = "new-message"
CHAT_HISTORY = "chat-history"


def create_new_message_event(message: Message) -> Dict[str, Any]:
    """
    Create a new-message broadcast.

    Args:
        message: The stored Message

    Returns:
        dict: A copy of the message in wire form
    """
    return message.to_dict()


def create_chat_history_event(messages: Iterable[Message]) -> Dict[str, Any]:
    """
    Create a chat-history event for a joining member.

    Args:
        messages: Room history, oldest first

    Returns:
        dict: Event data with copies of every message
    """
    return {"messages": [message.to_dict() for message in messages]}
