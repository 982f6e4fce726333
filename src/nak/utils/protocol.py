"""Relay connection and publish over nostr-sdk.

Each relay gets its own ``nostr_sdk.Client`` holding exactly one relay,
so failures and timeouts stay scoped to that relay and no connection is
reused between attempts.

The [RelayConnection][nak.utils.protocol.RelayConnection] protocol is the
seam the publisher depends on; [connect_relay()][nak.utils.protocol.connect_relay]
is the production [Connector][nak.utils.protocol.Connector].

Examples:
    ```python
    connection = await connect_relay("wss://nos.lol", timeout=10.0)
    try:
        status = await connection.publish(event)
    finally:
        await connection.close()
    ```
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Final, Protocol

from nostr_sdk import Client, RelayUrl
from nostr_sdk import Event as NostrEvent

from nak.core.exceptions import PublishError, RelayConnectionError
from nak.models import Event
from nak.models.constants import DEFAULT_CONNECT_TIMEOUT
from nak.nips.nip01 import encode_event


PUBLISH_SUCCESS: Final[str] = "success"


logger = logging.getLogger("nak.protocol")

# nostr-sdk reports failures through return values and exceptions; its own
# log output would duplicate them on the diagnostic stream.
logging.getLogger("nostr_sdk").setLevel(logging.CRITICAL)


class RelayConnection(Protocol):
    """An open connection to a single relay."""

    @property
    def url(self) -> str: ...

    async def publish(self, event: Event) -> str:
        """Send ``event`` and return the relay-reported status.

        Raises:
            PublishError: If the relay rejects the event.
        """
        ...

    async def close(self) -> None: ...


Connector = Callable[[str], Awaitable[RelayConnection]]


class NostrRelayConnection:
    """[RelayConnection][nak.utils.protocol.RelayConnection] backed by ``nostr_sdk.Client``."""

    __slots__ = ("_client", "_relay_url", "_url")

    def __init__(self, url: str, client: Client, relay_url: RelayUrl) -> None:
        self._url = url
        self._client = client
        self._relay_url = relay_url

    @property
    def url(self) -> str:
        return self._url

    async def publish(self, event: Event) -> str:
        # nostr-sdk Rust FFI can raise arbitrary exception types from send_event.
        try:
            nostr_event = NostrEvent.from_json(encode_event(event))
            output = await self._client.send_event(nostr_event)
        except Exception as e:
            raise PublishError(str(e), self._url) from e

        if self._relay_url in output.success:
            return PUBLISH_SUCCESS
        reason = output.failed.get(self._relay_url, "no response from relay")
        raise PublishError(reason, self._url)

    async def close(self) -> None:
        # nostr-sdk Rust FFI can raise arbitrary exception types during shutdown.
        with contextlib.suppress(Exception):
            await self._client.shutdown()


async def connect_relay(url: str, *, timeout: float = DEFAULT_CONNECT_TIMEOUT) -> NostrRelayConnection:  # noqa: ASYNC109
    """Open a connection to a single relay.

    Args:
        url: Relay WebSocket URL as given by the user.
        timeout: Seconds to wait for the WebSocket handshake.

    Returns:
        A connected [NostrRelayConnection][nak.utils.protocol.NostrRelayConnection].

    Raises:
        RelayConnectionError: If the URL is invalid or the relay cannot be reached.
    """
    try:
        relay_url = RelayUrl.parse(url)
    except Exception as e:  # nostr-sdk FFI raises non-uniform types for bad URLs
        raise RelayConnectionError(f"invalid relay url: {e}", url) from e

    client = Client()
    try:
        await client.add_relay(relay_url)
        output = await client.try_connect(timedelta(seconds=timeout))
    except Exception as e:
        await _shutdown(client)
        raise RelayConnectionError(str(e), url) from e

    if relay_url not in output.success:
        await _shutdown(client)
        error_message = output.failed.get(relay_url, "connection timed out")
        logger.debug("connect_failed relay=%s error=%s", url, error_message)
        raise RelayConnectionError(error_message, url)

    logger.debug("connected relay=%s", url)
    return NostrRelayConnection(url, client, relay_url)


async def _shutdown(client: Client) -> None:
    with contextlib.suppress(Exception):
        await client.shutdown()
