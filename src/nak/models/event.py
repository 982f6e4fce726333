"""
Immutable Nostr event record.

An [Event][nak.models.event.Event] is assembled once per invocation,
signed once (producing a new, signed instance), and then either rendered
or published. Tag order is part of the signed digest and is preserved
exactly as constructed.

See Also:
    [nak.services.event.assembler][]: Builds unsigned events from CLI input.
    [nak.services.event.signer][]: Produces the signed counterpart.
    [nak.nips.nip01][]: Canonical serialization and encodings.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from ._validation import validate_hex, validate_instance, validate_int_range, validate_tag
from .constants import INT64_MAX, INT64_MIN


Tag = tuple[str, ...]


def freeze_tags(tags: Iterable[Sequence[str]]) -> tuple[Tag, ...]:
    """Convert any iterable of string sequences into nested tuples."""
    return tuple(tuple(tag) for tag in tags)


@dataclass(frozen=True, slots=True)
class Event:
    """Nostr event (NIP-01) with optional signature fields.

    The signature fields ``id``, ``pubkey`` and ``sig`` are either all
    empty (unsigned) or all set (signed); a partially signed event is
    rejected at construction.

    Attributes:
        kind: Event kind, any non-negative integer.
        content: Arbitrary text payload.
        created_at: Unix timestamp in seconds (signed 64-bit).
        tags: Ordered tags; each tag is a non-empty tuple of strings.
        id: Hex SHA-256 of the canonical serialization (64 chars).
        pubkey: Hex x-only public key of the author (64 chars).
        sig: Hex BIP-340 Schnorr signature over ``id`` (128 chars).

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If a field is out of range or malformed.

    Examples:
        ```python
        event = Event(kind=1, content="gm", created_at=1700000000, tags=[["t", "nostr"]])
        event.tags       # (("t", "nostr"),)
        event.is_signed  # False
        ```
    """

    kind: int
    content: str
    created_at: int
    tags: tuple[Tag, ...] = ()
    id: str = ""
    pubkey: str = ""
    sig: str = ""

    def __post_init__(self) -> None:
        validate_int_range(self.kind, "kind", 0)
        validate_instance(self.content, str, "content")
        validate_int_range(self.created_at, "created_at", INT64_MIN, INT64_MAX)

        if isinstance(self.tags, str | bytes) or not isinstance(self.tags, Iterable):
            raise TypeError(f"tags must be a sequence of tags, got {type(self.tags).__name__}")
        tags = list(self.tags)
        for i, tag in enumerate(tags):
            validate_tag(tag, i)
        object.__setattr__(self, "tags", freeze_tags(tags))

        signature = (self.id, self.pubkey, self.sig)
        if any(signature):
            validate_hex(self.id, "id", 64)
            validate_hex(self.pubkey, "pubkey", 64)
            validate_hex(self.sig, "sig", 128)

    @property
    def is_signed(self) -> bool:
        return bool(self.sig)

    def with_signature(self, *, id: str, pubkey: str, sig: str) -> Event:  # noqa: A002
        """Return a copy of this event carrying the given signature fields."""
        return replace(self, id=id, pubkey=pubkey, sig=sig)

    def to_dict(self) -> dict[str, Any]:
        """Return the NIP-01 object form in wire key order.

        Signature keys are omitted while the event is unsigned.
        """
        data: dict[str, Any] = {}
        if self.is_signed:
            data["id"] = self.id
            data["pubkey"] = self.pubkey
        data["created_at"] = self.created_at
        data["kind"] = self.kind
        data["tags"] = [list(tag) for tag in self.tags]
        data["content"] = self.content
        if self.is_signed:
            data["sig"] = self.sig
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Build an event from its NIP-01 object form."""
        return cls(
            kind=data["kind"],
            content=data["content"],
            created_at=data["created_at"],
            tags=data.get("tags", ()),
            id=data.get("id", ""),
            pubkey=data.get("pubkey", ""),
            sig=data.get("sig", ""),
        )
