"""Nostr key parsing.

Accepts either a 64-character hex secret key or an ``nsec1`` bech32
string and returns a ``nostr_sdk.Keys`` pair.

Warning:
    Secret keys must never be logged. Error messages raised from here
    describe the failure without echoing the input.

Examples:
    ```python
    keys = load_keys("nsec1...")  # pragma: allowlist secret
    keys.public_key().to_hex()
    ```
"""

from __future__ import annotations

from typing import Final

from nostr_sdk import Keys

from nak.core.exceptions import SigningError


ENV_SECRET_KEY: Final[str] = "NAK_SECRET_KEY"  # pragma: allowlist secret


def load_keys(secret: str) -> Keys:
    """Parse secret key material into a ``Keys`` pair.

    Args:
        secret: Hex or ``nsec1`` encoded secret key.

    Returns:
        A ``nostr_sdk.Keys`` instance holding the secret and derived public key.

    Raises:
        SigningError: If the key is empty or cannot be parsed.
    """
    secret = secret.strip()
    if not secret:
        raise SigningError("secret key is empty")
    # nostr-sdk Rust FFI can raise arbitrary exception types on malformed input.
    try:
        return Keys.parse(secret)
    except Exception as e:
        raise SigningError("invalid secret key: expected 64 hex characters or nsec1") from e


def secret_key_bytes(keys: Keys) -> bytes:
    """Return the raw 32-byte secret key held by ``keys``."""
    return bytes.fromhex(keys.secret_key().to_hex())


def public_key_hex(keys: Keys) -> str:
    """Return the x-only public key as lowercase hex."""
    return keys.public_key().to_hex()
