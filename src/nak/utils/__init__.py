"""Adapters around nostr-sdk: key parsing and relay connections.

Attributes:
    load_keys: Parse hex or ``nsec1`` secret keys.
        See [load_keys()][nak.utils.keys.load_keys].
    connect_relay: Open a single-relay connection.
        See [connect_relay()][nak.utils.protocol.connect_relay].
    RelayConnection: Protocol implemented by relay connections.
"""

from .keys import ENV_SECRET_KEY, load_keys, public_key_hex, secret_key_bytes
from .protocol import (
    PUBLISH_SUCCESS,
    Connector,
    NostrRelayConnection,
    RelayConnection,
    connect_relay,
)


__all__ = [
    "ENV_SECRET_KEY",
    "PUBLISH_SUCCESS",
    "Connector",
    "NostrRelayConnection",
    "RelayConnection",
    "connect_relay",
    "load_keys",
    "public_key_hex",
    "secret_key_bytes",
]
