"""The ``event`` command: assemble, sign, then render or publish.

Fatal errors ([ParseError][nak.core.exceptions.ParseError],
[SigningError][nak.core.exceptions.SigningError],
[EncodingError][nak.core.exceptions.EncodingError]) propagate before
anything is written to ``stdout``. Relay failures never do.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from nak.core.logger import Logger
from nak.models.constants import OutputMode

from .assembler import assemble_event
from .publisher import Publisher, render_event
from .signer import sign_event


if TYPE_CHECKING:
    from nak.models import PublishOutcome
    from nak.utils.protocol import Connector

    from .configs import EventConfig


logger = Logger("nak.event")


async def run_event(
    config: EventConfig,
    *,
    connector: Connector | None = None,
    stdout: TextIO | None = None,
    now: float | None = None,
) -> list[PublishOutcome]:
    """Run one ``event`` invocation.

    Exactly one line is written to ``stdout``: the rendered event in
    render-only mode, or the default JSON form before any network
    activity in publish mode.

    Args:
        config: Validated command configuration.
        connector: Relay connector override (tests, custom transports).
        stdout: Output stream; defaults to ``sys.stdout``.
        now: Wall-clock override for ``created_at = "now"``.

    Returns:
        Per-relay outcomes in input order; empty in render-only mode.
    """
    out = stdout if stdout is not None else sys.stdout

    event = sign_event(assemble_event(config, now=now), config.sec)

    if not config.publish_mode:
        out.write(render_event(event, config.output_mode) + "\n")
        out.flush()
        return []

    out.write(render_event(event, OutputMode.JSON) + "\n")
    out.flush()

    publisher = Publisher(
        connector,
        publish_timeout=config.publish_timeout,
        connect_timeout=config.connect_timeout,
    )
    outcomes = await publisher.publish(event, config.relays)
    logger.debug(
        "publish_completed",
        relays=len(outcomes),
        published=sum(1 for o in outcomes if o.ok),
    )
    return outcomes
