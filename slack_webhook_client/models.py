"""
Slack incoming webhook messages: escaped text, colors and timestamps, and
the attachments and fields built from them.

See https://api.slack.com/messaging/webhooks and
https://api.slack.com/reference/messaging/attachments
"""

import calendar
import dataclasses
import datetime
import enum
import re
from typing import Any

import httpx

from .errors import InvalidColor, InvalidLinkNames, InvalidText, InvalidTimestamp, MissingField

# Anything the caller already validated as a URL; encoded as ``str(url)``.
URL = httpx.URL | str

_COLOR_KEYWORDS = frozenset({"good", "warning", "danger"})
_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def _escape(text: str) -> str:
    # "&" goes first so the entities below are not escaped twice.
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


@dataclasses.dataclass(frozen=True)
class SlackText:
    """
    Text sent through Slack with the control characters ``&``, ``<`` and
    ``>`` escaped.

    Every construction escapes its argument, so always pass raw text. Copy
    an existing instance by reference or with ``copy.replace``, which does
    not escape it again.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidText(self.value, "Text must be a string")
        object.__setattr__(self, "value", _escape(self.value))

    def __replace__(self, **changes: Any) -> "SlackText":
        if "value" in changes:
            return type(self)(changes.pop("value"), **changes)
        if changes:
            raise TypeError(f"Unexpected fields: {', '.join(changes)}")
        return self

    @classmethod
    def from_raw(cls, raw: str) -> "SlackText":
        return cls(raw)

    def encode(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class HexColor:
    """
    Attachment color, one of ``good``, ``warning``, ``danger`` or a hex
    color code such as ``#b13d41`` or ``#000``.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidColor(self.value, "Color must be a string")
        if self.value in _COLOR_KEYWORDS:
            return
        if _HEX_COLOR.fullmatch(self.value) is None:
            raise InvalidColor(
                self.value,
                "Color must be good, warning, danger or a # followed by 3 or 6 hex digits",
            )

    @classmethod
    def parse(cls, value: str) -> "HexColor":
        return cls(value)

    def encode(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class SlackTime:
    """Attachment timestamp, sent as whole seconds since the Unix epoch."""

    time: datetime.datetime

    def __post_init__(self) -> None:
        if not isinstance(self.time, datetime.datetime):
            raise InvalidTimestamp(self.time, "Timestamp must be a datetime.datetime")

    @classmethod
    def from_datetime(cls, time: datetime.datetime) -> "SlackTime":
        return cls(time)

    def encode(self) -> int:
        # Naive datetimes are taken as UTC.
        return calendar.timegm(self.time.utctimetuple())


class Parse(enum.Enum):
    """Change how messages are treated."""

    FULL = "full"
    NONE = "none"

    def encode(self) -> str:
        return self.value


def _encode_value(value: Any) -> Any:
    if isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, httpx.URL):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    return value.encode()


def encode_optional(obj: Any) -> dict[str, Any]:
    """
    Encode every dataclass field of ``obj`` under its own name. Fields set to
    ``None`` are left out instead of being sent as ``null``; required fields
    are checked at construction and never are.
    """
    encoded: dict[str, Any] = {}
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        if value is None:
            continue
        encoded[field.name] = _encode_value(value)
    return encoded


def _require(obj: Any, *names: str) -> None:
    for name in names:
        if getattr(obj, name) is None:
            raise MissingField(name, f"{type(obj).__name__}.{name} is required")


def _coerce_text(obj: Any, *names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if isinstance(value, str):
            object.__setattr__(obj, name, SlackText(value))
        elif value is not None and not isinstance(value, SlackText):
            raise InvalidText(value, f"{name} must be a string or SlackText")


def _coerce_sequence(obj: Any, name: str) -> None:
    value = getattr(obj, name)
    if value is not None and not isinstance(value, tuple):
        object.__setattr__(obj, name, tuple(value))


@dataclasses.dataclass(frozen=True)
class Field:
    """
    A single row of the table rendered inside an attachment.

    ``title`` cannot contain markup and is sent as is. ``value`` may contain
    standard message markup and is escaped.
    """

    title: str
    value: SlackText
    short: bool | None = None

    def __post_init__(self) -> None:
        _require(self, "title", "value")
        _coerce_text(self, "value")

    def encode(self) -> dict[str, Any]:
        return encode_optional(self)


@dataclasses.dataclass(frozen=True)
class Attachment:
    """
    Rich block added to a message.

    ``fallback`` is required; Slack shows it on devices that don't support
    attachments. ``author_link`` and ``author_icon`` only render when
    ``author_name`` is present.
    """

    fallback: SlackText
    text: SlackText | None = None
    pretext: SlackText | None = None
    color: HexColor | None = None
    fields: tuple[Field, ...] | None = None
    author_name: SlackText | None = None
    author_link: URL | None = None
    author_icon: URL | None = None
    title: SlackText | None = None
    title_link: URL | None = None
    image_url: URL | None = None
    thumb_url: URL | None = None
    footer: SlackText | None = None
    footer_icon: URL | None = None
    ts: SlackTime | None = None

    def __post_init__(self) -> None:
        _require(self, "fallback")
        _coerce_text(self, "fallback", "text", "pretext", "author_name", "title", "footer")
        if isinstance(self.color, str):
            object.__setattr__(self, "color", HexColor(self.color))
        if isinstance(self.ts, datetime.datetime):
            object.__setattr__(self, "ts", SlackTime(self.ts))
        elif self.ts is not None and not isinstance(self.ts, SlackTime):
            raise InvalidTimestamp(self.ts, "ts must be a SlackTime or datetime.datetime")
        _coerce_sequence(self, "fields")

    def with_field(self, field: Field) -> "Attachment":
        return dataclasses.replace(self, fields=(*(self.fields or ()), field))

    def encode(self) -> dict[str, Any]:
        return encode_optional(self)


@dataclasses.dataclass(frozen=True)
class Payload:
    """
    Top-level webhook payload.

    ``channel`` falls back to the channel configured for the webhook when it
    is not set. ``icon_url`` and ``icon_emoji`` may both be set; Slack picks
    which one to show.
    """

    text: SlackText | None = None
    channel: str | None = None
    username: str | None = None
    icon_url: URL | None = None
    icon_emoji: str | None = None
    attachments: tuple[Attachment, ...] | None = None
    unfurl_links: bool | None = None
    unfurl_media: bool | None = None
    link_names: int | None = None
    parse: Parse | None = None

    def __post_init__(self) -> None:
        _coerce_text(self, "text")
        _coerce_sequence(self, "attachments")
        if isinstance(self.parse, str):
            object.__setattr__(self, "parse", Parse(self.parse))

        link_names = self.link_names
        if link_names is None:
            return
        if isinstance(link_names, bool):
            link_names = int(link_names)
        if not isinstance(link_names, int) or link_names not in (0, 1):
            raise InvalidLinkNames(self.link_names, "link_names must be 0 or 1")
        object.__setattr__(self, "link_names", link_names)

    def with_attachment(self, attachment: Attachment) -> "Payload":
        return dataclasses.replace(self, attachments=(*(self.attachments or ()), attachment))

    def encode(self) -> dict[str, Any]:
        return encode_optional(self)


__all__ = [
    "URL",
    "Attachment",
    "Field",
    "HexColor",
    "Parse",
    "Payload",
    "SlackText",
    "SlackTime",
    "encode_optional",
]
