"""
Pytest configuration and shared fixtures for nak tests.

Provides:
- Environment and logging isolation between tests
- Sample unsigned and signed events
- Fake relay connections implementing the RelayConnection protocol
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from typing import Any

import pytest

from nak.core.exceptions import RelayConnectionError
from nak.models import Event
from nak.utils.keys import ENV_SECRET_KEY


# Valid secp256k1 test keys (DO NOT USE IN PRODUCTION)
VALID_HEX_KEY = (
    "67dea2ed018072d675f5415ecfaed7d2597555e202d85b3d65ea4e58d2d92ffa"  # pragma: allowlist secret
)
VALID_NSEC_KEY = (
    "nsec1vl029mgpspedva04g90vltkh6fvh240zqtv9k0t9af8935ke9laqsnlfe5"  # pragma: allowlist secret
)

FIXED_TS = 1_700_000_000


# ============================================================================
# Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_secret_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never let a developer's NAK_SECRET_KEY leak into tests."""
    monkeypatch.delenv(ENV_SECRET_KEY, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Remove handlers installed by setup_logging() and restore the root level."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


# ============================================================================
# Events
# ============================================================================


@pytest.fixture
def unsigned_event() -> Event:
    return Event(
        kind=1,
        content="hello",
        created_at=FIXED_TS,
        tags=[["e", "abc", "wss://relay.example.com"], ["p", "def"]],
    )


@pytest.fixture
def signed_stub() -> Event:
    """A signed-shaped event with placeholder signature fields."""
    return Event(
        kind=1,
        content="hello",
        created_at=FIXED_TS,
        tags=[["t", "nostr"]],
        id="a" * 64,
        pubkey="b" * 64,
        sig="c" * 128,
    )


# ============================================================================
# Fake relays
# ============================================================================


class FakeConnection:
    """In-memory RelayConnection with scripted behaviour."""

    def __init__(
        self,
        url: str,
        *,
        status: str = "success",
        error: Exception | None = None,
        hang: bool = False,
    ) -> None:
        self.url = url
        self.status = status
        self.error = error
        self.hang = hang
        self.published: list[Event] = []
        self.closed = False
        self.started = asyncio.Event()

    async def publish(self, event: Event) -> str:
        self.started.set()
        if self.hang:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        self.published.append(event)
        return self.status

    async def close(self) -> None:
        self.closed = True


class FakeConnector:
    """Connector returning FakeConnection objects keyed by URL.

    URLs listed in ``unreachable`` raise RelayConnectionError; URLs in
    ``behaviours`` get a FakeConnection built with those keyword arguments.
    """

    def __init__(
        self,
        *,
        unreachable: tuple[str, ...] = (),
        behaviours: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.unreachable = set(unreachable)
        self.behaviours = behaviours or {}
        self.calls: list[str] = []
        self.connections: dict[str, FakeConnection] = {}

    async def __call__(self, url: str) -> FakeConnection:
        self.calls.append(url)
        if url in self.unreachable:
            raise RelayConnectionError("connection refused", url)
        connection = FakeConnection(url, **self.behaviours.get(url, {}))
        self.connections[url] = connection
        return connection


@pytest.fixture
def make_connector() -> type[FakeConnector]:
    """Factory for FakeConnector instances (avoids importing from conftest)."""
    return FakeConnector
