"""nak exception hierarchy.

Fatal errors abort the invocation before anything is printed; per-relay
errors are contained by the publisher and reported on the diagnostic
stream.

Exception hierarchy:

```text
NakError (base -- never raised directly)
├── ConfigurationError       -- invalid flags, YAML, or environment
├── ParseError               -- malformed created_at value (fatal)
├── SigningError             -- unusable key material (fatal)
├── EncodingError            -- event cannot be rendered (NSON limits)
├── ConnectivityError        -- relay unreachable
│   └── RelayConnectionError -- connection attempt failed
└── PublishError             -- relay rejected or did not acknowledge
    └── PublishTimeoutError  -- publish exceeded its deadline
```

Note:
    ``asyncio.CancelledError`` is outside this hierarchy and always
    propagates.

See Also:
    [Publisher][nak.services.event.publisher.Publisher]: Contains
        [ConnectivityError][nak.core.exceptions.ConnectivityError] and
        [PublishError][nak.core.exceptions.PublishError] per relay.
    [run_event()][nak.services.event.command.run_event]: Lets the fatal
        kinds propagate to the CLI error boundary.
"""

from __future__ import annotations


class NakError(Exception):
    """Base exception for all nak errors.

    Never raised directly -- always use a specific subclass.
    """


class ConfigurationError(NakError):
    """Invalid or missing configuration (YAML file, env vars, CLI flags)."""


class ParseError(NakError):
    """A user-supplied field could not be parsed.

    Attributes:
        value: The offending raw input.
    """

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class SigningError(NakError):
    """Key material is malformed or the event could not be signed."""


class EncodingError(NakError):
    """The event cannot be represented in the requested encoding."""


# ---------------------------------------------------------------------------
# Per-relay errors
# ---------------------------------------------------------------------------


class ConnectivityError(NakError):
    """Base for relay connectivity failures.

    Attributes:
        relay: URL of the relay that failed.
    """

    def __init__(self, message: str, relay: str) -> None:
        super().__init__(message)
        self.relay = relay


class RelayConnectionError(ConnectivityError):
    """The WebSocket connection to a relay could not be established."""


class PublishError(NakError):
    """The relay did not accept the event.

    Attributes:
        relay: URL of the relay that rejected the event.
    """

    def __init__(self, message: str, relay: str) -> None:
        super().__init__(message)
        self.relay = relay


class PublishTimeoutError(PublishError):
    """The publish attempt did not complete before its deadline."""
