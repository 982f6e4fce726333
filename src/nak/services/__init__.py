"""Command implementations.

Attributes:
    event: Generate, sign, and render or publish a single event.
        See [nak.services.event][nak.services.event].
"""

from .event import EventConfig, run_event


__all__ = ["EventConfig", "run_event"]
