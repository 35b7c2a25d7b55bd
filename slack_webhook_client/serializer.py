from __future__ import annotations

import json
import logging
from typing import Any

from .errors import EmptyPayload
from .models import URL, Payload

logger = logging.getLogger(__name__)


class SlackSerializer:
    """
    Turns a payload into the JSON body of a Slack incoming webhook request,
    filling in default username, channel and icon when the payload leaves
    them out. Sending the body is up to the caller.
    """

    content_type = "application/json; charset=utf-8"

    def __init__(
        self,
        *,
        default_username: str | None = None,
        default_channel: str | None = None,
        default_icon_url: URL | None = None,
        default_icon_emoji: str | None = None,
    ):
        self.default_username = default_username
        self.default_channel = default_channel
        self.default_icon_url = default_icon_url
        self.default_icon_emoji = default_icon_emoji

    def encode(self, data: Payload) -> dict[str, Any]:
        payload = data.encode()
        self._apply_defaults(payload)
        self._validate_payload(payload)
        return payload

    def dumps(self, data: Payload) -> str:
        body = json.dumps(self.encode(data), ensure_ascii=False, separators=(",", ":"))
        logger.debug(body)
        return body

    def dump_bytes(self, data: Payload) -> bytes:
        return self.dumps(data).encode("utf-8")

    def _apply_defaults(self, payload: dict[str, Any]) -> None:
        if self.default_username and "username" not in payload:
            payload["username"] = self.default_username
        if self.default_channel and "channel" not in payload:
            payload["channel"] = self.default_channel
        if "icon_url" in payload or "icon_emoji" in payload:
            return
        if self.default_icon_url:
            payload["icon_url"] = str(self.default_icon_url)
        elif self.default_icon_emoji:
            payload["icon_emoji"] = self.default_icon_emoji

    def _validate_payload(self, payload: dict[str, Any]) -> None:
        if "text" not in payload and "attachments" not in payload:
            raise EmptyPayload(payload, "Slack payload requires text or attachments")

        if "icon_url" in payload and "icon_emoji" in payload:
            logger.warning(
                "Both icon_url and icon_emoji are set, Slack will only show one of them: %s, %s",
                payload["icon_url"],
                payload["icon_emoji"],
            )
