"""Errors raised while building Slack webhook payloads."""

from typing import Any


class ValidationError(ValueError):
    """Base class for values Slack would reject."""

    def __init__(self, input: Any, reason: str):
        self.input = input
        self.reason = reason
        super().__init__(f"{reason}: {input!r}")


class InvalidColor(ValidationError):
    """Color is neither a reserved keyword nor a hex color code."""


class InvalidText(ValidationError):
    """Text is not a string."""


class InvalidTimestamp(ValidationError):
    """Timestamp is not a ``datetime.datetime``."""


class InvalidLinkNames(ValidationError):
    """``link_names`` only takes 0 or 1."""


class MissingField(ValidationError):
    """A required attachment or field value is ``None``."""


class EmptyPayload(ValidationError):
    """Payload has neither text nor attachments."""


__all__ = [
    "EmptyPayload",
    "InvalidColor",
    "InvalidLinkNames",
    "InvalidText",
    "InvalidTimestamp",
    "MissingField",
    "ValidationError",
]
