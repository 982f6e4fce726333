"""The ``event`` command: field assembly, signing, and publishing.

Attributes:
    EventConfig: Validated command input.
        See [EventConfig][nak.services.event.configs.EventConfig].
    assemble_event: Build the unsigned event from CLI-style fields.
    sign_event: Produce the signed event.
    Publisher: Sequential per-relay publisher.
    render_event: Serialize in envelope / nson / json mode.
    run_event: Compose the three stages.
"""

from .assembler import assemble_event, build_tags, parse_created_at, parse_tag_expression
from .command import run_event
from .configs import EventConfig
from .publisher import Publisher, render_event
from .signer import sign_event


__all__ = [
    "EventConfig",
    "Publisher",
    "assemble_event",
    "build_tags",
    "parse_created_at",
    "parse_tag_expression",
    "render_event",
    "run_event",
    "sign_event",
]
