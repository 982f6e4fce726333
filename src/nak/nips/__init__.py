"""Nostr wire formats: NIP-01 JSON and the NSON compact encoding."""

from . import nip01, nson


__all__ = ["nip01", "nson"]
