"""Pure frozen dataclasses and constants with zero I/O.

Attributes:
    Event: Immutable NIP-01 event, unsigned or signed.
    PublishOutcome: Result of one relay publish attempt.
    OutputMode: Render-only encoding selector (envelope / nson / json).
    PublishStatus: Stage reached by a publish attempt.
"""

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_CONTENT,
    DEFAULT_KIND,
    DEFAULT_PUBLISH_TIMEOUT,
    DEFAULT_SECRET_KEY,
    NOW,
    OutputMode,
    PublishStatus,
)
from .event import Event, Tag, freeze_tags
from .outcome import PublishOutcome


__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_CONTENT",
    "DEFAULT_KIND",
    "DEFAULT_PUBLISH_TIMEOUT",
    "DEFAULT_SECRET_KEY",
    "NOW",
    "Event",
    "OutputMode",
    "PublishOutcome",
    "PublishStatus",
    "Tag",
    "freeze_tags",
]
