from .errors import (
    EmptyPayload,
    InvalidColor,
    InvalidLinkNames,
    InvalidText,
    InvalidTimestamp,
    MissingField,
    ValidationError,
)
from .models import Attachment, Field, HexColor, Parse, Payload, SlackText, SlackTime
from .serializer import SlackSerializer

__all__ = [
    "Attachment",
    "EmptyPayload",
    "Field",
    "HexColor",
    "InvalidColor",
    "InvalidLinkNames",
    "InvalidText",
    "InvalidTimestamp",
    "MissingField",
    "Parse",
    "Payload",
    "SlackSerializer",
    "SlackText",
    "SlackTime",
    "ValidationError",
]
