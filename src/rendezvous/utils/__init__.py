"""
Utilities for the Signaling Node

This module contains utility functions for delivering events to
connections and validating inbound fields.
"""

from .broadcast import Delivery, deliver
from .validation import validate_identifier, validate_message_content

__all__ = [
    "Delivery",
    "deliver",
    "validate_identifier",
    "validate_message_content",
]
