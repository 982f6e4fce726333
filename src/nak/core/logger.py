"""
Structured diagnostic logging on standard error.

Standard output is reserved for the serialized event, so every human
readable message (relay announcements, per-relay outcomes, fatal errors)
goes through this module to the diagnostic stream.

Two renderings are supported:

* key=value (default): ``info nak.publisher published relay=wss://nos.lol status=success``
* JSON lines (``json_output=True``): one object per record, for log shippers.

Examples:
    ```python
    from nak.core.logger import Logger, setup_logging

    setup_logging("INFO")
    logger = Logger("nak.publisher")
    logger.info("publishing", relay="wss://nos.lol")
    # info nak.publisher publishing relay=wss://nos.lol
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
import sys
from typing import Any, ClassVar, TextIO


_KV_EXTRA = "structured_kv"


def _truncate(value: Any, max_value_length: int | None) -> str:
    s = str(value)
    if max_value_length and len(s) > max_value_length:
        return s[:max_value_length] + f"...<truncated {len(s) - max_value_length} chars>"
    return s


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values containing whitespace, equals signs, or quotes (and empty values)
    are wrapped in double quotes with backslash escaping.

    Args:
        kwargs: Key-value pairs to format.
        max_value_length: Maximum characters per value before truncation.
            Pass None to disable truncation.
        prefix: String prepended to the output.

    Returns:
        Formatted string such as ``' relay=wss://x error="timed out"'``,
        or an empty string if ``kwargs`` is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for k, v in kwargs.items():
        s = _truncate(v, max_value_length)
        if not s or any(c in s for c in ' ="\''):
            escaped = s.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{k}="{escaped}"')
        else:
            parts.append(f"{k}={s}")
    return prefix + " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """Render records as ``level name message key=value ...``.

    Structured fields are read from the ``structured_kv`` extra attached by
    [Logger][nak.core.logger.Logger]; plain ``logging`` records are emitted
    with the same prefix and no fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, _KV_EXTRA, {})
        if extra:
            line += format_kv_pairs(extra)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, datetime.UTC
            ).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            **getattr(record, _KV_EXTRA, {}),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class Logger:
    """Structured logger that attaches keyword arguments as fields.

    Mirrors the standard logging API, with each method accepting
    ``**kwargs`` that become key=value (or JSON) fields on the record.
    Values longer than ``max_value_length`` are truncated before they
    reach the formatter.
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(self, name: str, *, max_value_length: int | None = None) -> None:
        if max_value_length is None:
            max_value_length = self._DEFAULT_MAX_VALUE_LENGTH
        self._logger = logging.getLogger(name)
        self._max_value_length = max_value_length

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        fields = {k: _truncate(v, self._max_value_length) for k, v in kwargs.items()}
        self._logger.log(level, msg, extra={_KV_EXTRA: fields})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)


def setup_logging(
    level: str = "INFO",
    *,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install a single diagnostic handler on the root logger.

    Any handler previously installed by this function is replaced, so the
    CLI can be invoked repeatedly in one process (as the tests do).

    Args:
        level: Level name (``DEBUG``, ``INFO``, ``WARNING``, ``ERROR``).
        json_output: Emit JSON lines instead of key=value text.
        stream: Target stream; defaults to ``sys.stderr`` at call time.

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else StructuredFormatter())
    handler.set_name("nak")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "nak":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))
    return handler
