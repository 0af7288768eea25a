"""Message validation."""

from __future__ import annotations

from .errors import ValidationError
from .models import Message


def validate_message(message: Message | None) -> None:
    """Raise :class:`ValidationError` if *message* cannot be sent."""
    if message is None:
        raise ValidationError("Message is required")
    if not isinstance(message.body, str):
        raise ValidationError("Message body must be a string")
    if not message.body.strip():
        raise ValidationError("Message body cannot be empty")
    if message.title is not None and not isinstance(message.title, str):
        raise ValidationError("Message title must be a string")
