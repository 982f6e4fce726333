"""Shared validation helpers for frozen dataclass models.

Private module. Used by ``__post_init__`` methods in sibling modules so
that invalid instances never escape their constructor.
"""

from __future__ import annotations

import re
from typing import Any


_HEX_RE = re.compile(r"[0-9a-f]+")


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_int_range(value: Any, name: str, low: int, high: int | None = None) -> None:
    """Raise if *value* is not an ``int`` (``bool`` excluded) within ``[low, high]``.

    With ``high=None`` only the lower bound is checked.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if high is None:
        if value < low:
            raise ValueError(f"{name} must be at least {low}, got {value}")
    elif not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


def validate_hex(value: Any, name: str, length: int) -> None:
    """Raise if *value* is not a lowercase hex string of exactly *length* chars."""
    validate_instance(value, str, name)
    if len(value) != length or not _HEX_RE.fullmatch(value):
        raise ValueError(f"{name} must be {length} lowercase hex characters")


def validate_tag(tag: Any, index: int) -> None:
    """Raise if *tag* is not a non-empty sequence of strings."""
    if isinstance(tag, str | bytes) or not isinstance(tag, tuple | list):
        raise TypeError(f"tags[{index}] must be a sequence of str, got {type(tag).__name__}")
    if not tag:
        raise ValueError(f"tags[{index}] must have at least one element")
    for j, item in enumerate(tag):
        validate_instance(item, str, f"tags[{index}][{j}]")
