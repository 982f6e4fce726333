"""Field assembly: turn CLI-style input into an unsigned event.

Tag sources are appended in a fixed order -- generic ``--tag``
expressions, then ``-e`` values, then ``-p`` values -- each keeping the
order in which its flags were given.

Generic tag expressions use a small micro-language:

```text
key=value[;extra1;extra2;...]   ->   [key, value, extra1, extra2, ...]
```

The expression is split on the first ``=``; everything after it is split
on ``;``. Expressions without ``=`` or with an empty key are dropped
without error.
"""

from __future__ import annotations

import re
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from nak.core.exceptions import ParseError
from nak.core.logger import Logger
from nak.models import Event, Tag
from nak.models.constants import INT64_MAX, INT64_MIN, NOW


if TYPE_CHECKING:
    from .configs import EventConfig


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

logger = Logger("nak.assembler")


def parse_tag_expression(expression: str) -> Tag | None:
    """Parse a ``key=value[;extra...]`` expression.

    Returns:
        The tag as a tuple, or ``None`` if the expression has no ``=`` or
        an empty key.

    Examples:
        ```python
        parse_tag_expression("e=abc;wss://relay;reply")  # ("e", "abc", "wss://relay", "reply")
        parse_tag_expression("t=")                        # ("t", "")
        parse_tag_expression("novalue")                   # None
        ```
    """
    key, sep, rest = expression.partition("=")
    if not sep or not key:
        return None
    return (key, *rest.split(";"))


def build_tags(
    expressions: Iterable[str] = (),
    e_values: Iterable[str] = (),
    p_values: Iterable[str] = (),
) -> list[Tag]:
    """Assemble tags from all three sources in their fixed order."""
    tags: list[Tag] = []
    for expression in expressions:
        tag = parse_tag_expression(expression)
        if tag is None:
            logger.debug("tag_dropped", expression=expression)
            continue
        tags.append(tag)
    tags.extend(("e", value) for value in e_values)
    tags.extend(("p", value) for value in p_values)
    return tags


def parse_created_at(value: str, *, now: float | None = None) -> int:
    """Resolve a created_at flag value to unix seconds.

    Args:
        value: ``"now"`` or a base-10 signed 64-bit integer string.
        now: Wall-clock override in seconds, used instead of ``time.time()``.

    Raises:
        ParseError: If ``value`` is neither ``"now"`` nor a valid integer.
    """
    if value == NOW:
        return int(time.time() if now is None else now)

    if _INTEGER_RE.fullmatch(value):
        ts = int(value)
        if INT64_MIN <= ts <= INT64_MAX:
            return ts
    raise ParseError(f"failed to parse timestamp '{value}'", value)


def _require_utf8(value: str, field: str) -> None:
    # argv bytes that are not valid UTF-8 arrive as lone surrogates
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError(f"{field} is not valid UTF-8", value) from e


def assemble_event(config: EventConfig, *, now: float | None = None) -> Event:
    """Build the unsigned event described by ``config``.

    Raises:
        ParseError: If ``config.created_at`` is malformed, or the content or
            a tag item cannot be encoded as UTF-8.
    """
    created_at = parse_created_at(config.created_at, now=now)
    _require_utf8(config.content, "content")
    tags = build_tags(config.tags, config.e_tags, config.p_tags)
    for i, tag in enumerate(tags):
        for j, item in enumerate(tag):
            _require_utf8(item, f"tags[{i}][{j}]")
    return Event(kind=config.kind, content=config.content, created_at=created_at, tags=tags)
