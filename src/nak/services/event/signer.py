"""Event signing.

Keys are parsed with nostr-sdk (hex or ``nsec1``). The event id is the
NIP-01 digest and the signature is a BIP-340 Schnorr signature produced
by libsecp256k1 through ``coincurve`` with all-zero auxiliary data, so
identical input always yields the same id and the same signature.

Warning:
    The secret key never appears in log records or exception messages.
"""

from __future__ import annotations

from typing import Final

from coincurve import PrivateKey

from nak.core.exceptions import SigningError
from nak.core.logger import Logger
from nak.models import Event
from nak.nips.nip01 import compute_event_id
from nak.utils.keys import load_keys, public_key_hex, secret_key_bytes


_AUX_RANDOMNESS: Final[bytes] = bytes(32)

logger = Logger("nak.signer")


def sign_event(event: Event, secret: str) -> Event:
    """Return a signed copy of ``event``.

    Args:
        event: The unsigned (or previously signed) event; existing
            signature fields are replaced.
        secret: Hex or ``nsec1`` secret key.

    Returns:
        A new [Event][nak.models.Event] with ``id``, ``pubkey`` and ``sig`` set.

    Raises:
        SigningError: If the key material is unusable.
    """
    keys = load_keys(secret)
    pubkey = public_key_hex(keys)
    event_id = compute_event_id(event, pubkey)

    try:
        signature = PrivateKey(secret_key_bytes(keys)).sign_schnorr(
            bytes.fromhex(event_id), _AUX_RANDOMNESS
        )
    except ValueError as e:
        raise SigningError(f"error signing with provided key: {e}") from e

    logger.debug("event_signed", id=event_id, pubkey=pubkey, kind=event.kind)
    return event.with_signature(id=event_id, pubkey=pubkey, sig=signature.hex())
