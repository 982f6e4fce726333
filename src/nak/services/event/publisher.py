"""Rendering and multi-relay publishing of a signed event.

Render-only mode prints one encoding selected by
[OutputMode][nak.models.constants.OutputMode]. Publish mode walks the
relays one at a time: each relay gets its own connection, its own
``asyncio.timeout`` scope, and a guaranteed ``close()``. A failure on
one relay is logged and recorded as a
[PublishOutcome][nak.models.PublishOutcome]; it never stops the loop.

Diagnostic lines (on stderr via the root handler):

```text
info nak.publisher publishing relay=wss://nos.lol
info nak.publisher published relay=wss://nos.lol status=success
warning nak.publisher connect_failed relay=wss://down.example error="..."
warning nak.publisher publish_failed relay=wss://slow.example error="..."
```
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from functools import partial
from typing import TYPE_CHECKING

from nak.core.exceptions import ConnectivityError, PublishError, PublishTimeoutError
from nak.core.logger import Logger
from nak.models import Event, OutputMode, PublishOutcome, PublishStatus
from nak.models.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_PUBLISH_TIMEOUT
from nak.nips import nip01, nson
from nak.utils.protocol import connect_relay


if TYPE_CHECKING:
    from nak.utils.protocol import Connector, RelayConnection


def render_event(event: Event, mode: OutputMode) -> str:
    """Serialize ``event`` in the given output mode.

    Raises:
        EncodingError: If NSON cannot represent the event.
    """
    if mode is OutputMode.ENVELOPE:
        return nip01.encode_envelope(event)
    if mode is OutputMode.NSON:
        return nson.encode(event)
    return nip01.encode_event(event)


class Publisher:
    """Sequential, per-relay isolated event publisher.

    Args:
        connector: Coroutine function opening a
            [RelayConnection][nak.utils.protocol.RelayConnection] for a URL.
            Defaults to [connect_relay()][nak.utils.protocol.connect_relay].
        publish_timeout: Deadline in seconds for each publish attempt.
        connect_timeout: Handshake timeout handed to the default connector.

    Examples:
        ```python
        publisher = Publisher(publish_timeout=10.0)
        outcomes = await publisher.publish(signed, ["wss://nos.lol", "wss://relay.damus.io"])
        [o.status for o in outcomes]
        ```
    """

    def __init__(
        self,
        connector: Connector | None = None,
        *,
        publish_timeout: float = DEFAULT_PUBLISH_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        self._connector = connector or partial(connect_relay, timeout=connect_timeout)
        self._publish_timeout = publish_timeout
        self._logger = Logger("nak.publisher")

    async def publish(self, event: Event, relays: Sequence[str]) -> list[PublishOutcome]:
        """Publish ``event`` to each relay in order.

        Returns:
            One outcome per relay, in input order.

        Raises:
            asyncio.CancelledError: Propagated after recording a failure
                for the relay in progress.
        """
        outcomes: list[PublishOutcome] = []
        for url in relays:
            outcomes.append(await self._publish_one(event, url))
        return outcomes

    async def _publish_one(self, event: Event, url: str) -> PublishOutcome:
        self._logger.info("publishing", relay=url)

        try:
            connection = await self._connector(url)
        except (ConnectivityError, OSError) as e:
            return self._failed(url, PublishStatus.CONNECTION_FAILED, "connect_failed", str(e))
        except asyncio.CancelledError:
            self._failed(url, PublishStatus.CONNECTION_FAILED, "connect_failed", "cancelled")
            raise

        try:
            status = await self._send(connection, event, url)
        except (PublishError, OSError) as e:
            return self._failed(url, PublishStatus.PUBLISH_FAILED, "publish_failed", str(e))
        except asyncio.CancelledError:
            self._failed(url, PublishStatus.PUBLISH_FAILED, "publish_failed", "cancelled")
            raise
        finally:
            await connection.close()

        self._logger.info("published", relay=url, status=status)
        return PublishOutcome(url, PublishStatus.PUBLISHED, status)

    async def _send(self, connection: RelayConnection, event: Event, url: str) -> str:
        try:
            async with asyncio.timeout(self._publish_timeout):
                return await connection.publish(event)
        except TimeoutError as e:
            raise PublishTimeoutError(
                f"timed out after {self._publish_timeout:g}s", url
            ) from e

    def _failed(self, url: str, status: PublishStatus, message: str, error: str) -> PublishOutcome:
        self._logger.warning(message, relay=url, error=error)
        return PublishOutcome(url, status, error)
