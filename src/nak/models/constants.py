"""Shared constants and enumerations for the models layer.

See Also:
    [nak.models.event][]: Enforces the [INT64_MIN][nak.models.constants.INT64_MIN] to
        [INT64_MAX][nak.models.constants.INT64_MAX] range on ``created_at``.
    [nak.services.event.publisher][]: Dispatches on
        [OutputMode][nak.models.constants.OutputMode].
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


# The key "1" -- a well-known test key, never use it for real identities.
DEFAULT_SECRET_KEY: Final[str] = (
    "0000000000000000000000000000000000000000000000000000000000000001"  # pragma: allowlist secret
)
DEFAULT_CONTENT: Final[str] = "hello from the nostr army knife"
DEFAULT_KIND: Final[int] = 1
NOW: Final[str] = "now"

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

DEFAULT_PUBLISH_TIMEOUT: Final[float] = 10.0
DEFAULT_CONNECT_TIMEOUT: Final[float] = 10.0

ENVELOPE_LABEL: Final[str] = "EVENT"


class OutputMode(StrEnum):
    """Encoding used when no relays are given (render-only mode).

    Attributes:
        ENVELOPE: ``["EVENT", <event>]`` relay message.
        NSON: Compact NSON text encoding.
        JSON: Bare NIP-01 event object.
    """

    ENVELOPE = "envelope"
    NSON = "nson"
    JSON = "json"

    @classmethod
    def select(cls, *, envelope: bool = False, nson: bool = False) -> OutputMode:
        """Pick the mode by fixed precedence: envelope, then NSON, then JSON."""
        if envelope:
            return cls.ENVELOPE
        if nson:
            return cls.NSON
        return cls.JSON


class PublishStatus(StrEnum):
    """Outcome classification of a single relay publish attempt."""

    CONNECTION_FAILED = "connection_failed"
    PUBLISH_FAILED = "publish_failed"
    PUBLISHED = "published"
