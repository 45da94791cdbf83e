"""
Validation Utilities

Contains utility functions for validating fields of inbound events.
"""

from typing import Any, Optional, Tuple


def validate_identifier(value: Any, field_name: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a room or user identifier.

    Args:
        value: The value to validate
        field_name: Name of the field, used in the error message

    Returns:
        tuple: (is_valid, error_message)
            - is_valid: True if value is a non-empty string, False otherwise
            - error_message: Error message if invalid, None if valid
    """
    if not isinstance(value, str):
        return False, f"{field_name} must be a string"

    if not value:
        return False, f"{field_name} cannot be empty"

    return True, None


def validate_message_content(content: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate chat message content.

    Content is opaque text: any string, including an empty one, is
    accepted. There is no length limit.

    Args:
        content: The message content to validate

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(content, str):
        return False, "message must be a string"

    return True, None
