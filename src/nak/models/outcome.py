"""Per-relay publish outcome."""

from __future__ import annotations

from dataclasses import dataclass

from ._validation import validate_instance
from .constants import PublishStatus


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    """Result of one publish attempt against one relay.

    Attributes:
        relay: Relay address exactly as supplied by the user.
        status: Which stage the attempt reached.
        detail: Relay-reported status on success, error message otherwise.
    """

    relay: str
    status: PublishStatus
    detail: str = ""

    def __post_init__(self) -> None:
        validate_instance(self.relay, str, "relay")
        validate_instance(self.status, PublishStatus, "status")
        validate_instance(self.detail, str, "detail")

    @property
    def ok(self) -> bool:
        return self.status is PublishStatus.PUBLISHED
