"""NIP-01 event serialization.

Provides the canonical form hashed into the event id, the standard JSON
encoding of an event object, and the ``["EVENT", <event>]`` client
message ("envelope").

All encodings are compact (no insignificant whitespace) and keep
non-ASCII characters as UTF-8, matching the escaping rules of NIP-01:
only ``"``, ``\\`` and control characters are escaped.

See Also:
    [nak.nips.nson][]: Alternate compact encoding.
    [sign_event()][nak.services.event.signer.sign_event]: Consumes
        [compute_event_id()][nak.nips.nip01.compute_event_id].
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from nak.core.exceptions import EncodingError
from nak.models import Event
from nak.models.constants import ENVELOPE_LABEL


def dumps(value: Any) -> str:
    """Compact JSON with UTF-8 passthrough, as used on the wire."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def canonical_serialization(event: Event, pubkey: str) -> str:
    """Return ``[0, pubkey, created_at, kind, tags, content]`` as compact JSON."""
    return dumps(
        [0, pubkey, event.created_at, event.kind, [list(tag) for tag in event.tags], event.content]
    )


def compute_event_id(event: Event, pubkey: str) -> str:
    """Return the hex SHA-256 of the canonical serialization."""
    return hashlib.sha256(canonical_serialization(event, pubkey).encode("utf-8")).hexdigest()


def encode_event(event: Event) -> str:
    """Encode the bare event object."""
    return dumps(event.to_dict())


def encode_envelope(event: Event) -> str:
    """Encode the event wrapped in an ``["EVENT", <event>]`` message."""
    return dumps([ENVELOPE_LABEL, event.to_dict()])


def decode_event(data: str) -> Event:
    """Parse a bare event object produced by [encode_event()][nak.nips.nip01.encode_event].

    The ``event`` command only writes events; this is the reading side for
    callers that consume its output, such as tools piping ``nak`` JSON back
    into Python.

    Raises:
        EncodingError: If ``data`` is not a valid event object.
    """
    try:
        obj = json.loads(data)
        if not isinstance(obj, dict):
            raise TypeError(f"expected an object, got {type(obj).__name__}")
        return Event.from_dict(obj)
    except (ValueError, TypeError, KeyError) as e:
        raise EncodingError(f"invalid event JSON: {e}") from e
