r"""nak -- nostr army knife.

Builds a single signed Nostr event from command-line fields, then either
prints it (as a bare event, a relay ``["EVENT", ...]`` envelope, or NSON)
or publishes it to a list of relays, reporting an independent outcome per
relay.

Layering follows a diamond DAG; imports flow strictly downward:

```text
              services         event command (assemble, sign, publish)
             /   |   \
          core  nips  utils    logging/errors/config, wire formats, nostr-sdk adapters
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Note:
    Top-level names (``from nak import Event``) are resolved lazily on
    first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("nak")

__all__ = [
    "Event",
    "EventConfig",
    "Logger",
    "OutputMode",
    "PublishOutcome",
    "PublishStatus",
    "Publisher",
    "run_event",
    "sign_event",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Event": ("nak.models", "Event"),
    "OutputMode": ("nak.models", "OutputMode"),
    "PublishOutcome": ("nak.models", "PublishOutcome"),
    "PublishStatus": ("nak.models", "PublishStatus"),
    "Logger": ("nak.core", "Logger"),
    "EventConfig": ("nak.services.event", "EventConfig"),
    "Publisher": ("nak.services.event", "Publisher"),
    "run_event": ("nak.services.event", "run_event"),
    "sign_event": ("nak.services.event", "sign_event"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'nak' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
