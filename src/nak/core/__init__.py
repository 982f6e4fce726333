"""Core layer: exceptions, structured logging, and YAML configuration.

Depends only on the standard library and PyYAML; used by
the ``nips``, ``utils``, and ``services`` layers.

Attributes:
    Logger: Structured logger writing key=value or JSON lines to stderr.
        See [Logger][nak.core.logger.Logger].
    setup_logging: Install the diagnostic handler on the root logger.
    load_yaml: Safe YAML loading for the ``--config`` defaults file.
    NakError: Root of the exception hierarchy.
        See [nak.core.exceptions][nak.core.exceptions].
"""

from .exceptions import (
    ConfigurationError,
    ConnectivityError,
    EncodingError,
    NakError,
    ParseError,
    PublishError,
    PublishTimeoutError,
    RelayConnectionError,
    SigningError,
)
from .logger import JsonFormatter, Logger, StructuredFormatter, format_kv_pairs, setup_logging
from .yaml import load_yaml


__all__ = [
    "ConfigurationError",
    "ConnectivityError",
    "EncodingError",
    "JsonFormatter",
    "Logger",
    "NakError",
    "ParseError",
    "PublishError",
    "PublishTimeoutError",
    "RelayConnectionError",
    "SigningError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
    "setup_logging",
]
