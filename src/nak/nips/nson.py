"""NSON: a compact, offset-addressable event encoding.

An NSON string is a JSON object whose keys appear in a fixed order and
whose fixed-width fields (id, pubkey, sig, created_at) sit at constant
offsets. Variable-width fields are described by the hex ``nson``
descriptor, so a reader can slice the text instead of running a JSON
parser:

```text
{"id":"<64>","pubkey":"<64>","sig":"<128>","created_at":<10>,"nson":"<hex>","kind":<k>,"content":"..","tags":[..]}
```

Descriptor bytes (before hex encoding):

```text
size        1 byte   number of descriptor bytes that follow
kind        1 byte   number of digits in kind
content     2 bytes  length of the quoted content string
ntags       1 byte   number of tags
  nitems    1 byte   number of items in this tag
    item    2 bytes  length of the quoted item string
```

Lengths count UTF-8 bytes of the JSON-quoted strings, including quotes.
Multi-byte integers are big-endian.
"""

from __future__ import annotations

import json
from typing import Final

from nak.core.exceptions import EncodingError
from nak.models import Event

from .nip01 import dumps


_ID_PREFIX: Final[str] = '{"id":"'
_PUBKEY_PREFIX: Final[str] = '","pubkey":"'
_SIG_PREFIX: Final[str] = '","sig":"'
_CREATED_AT_PREFIX: Final[str] = '","created_at":'
_NSON_PREFIX: Final[str] = ',"nson":"'
_KIND_PREFIX: Final[str] = '","kind":'
_CONTENT_PREFIX: Final[str] = ',"content":'
_TAGS_PREFIX: Final[str] = ',"tags":'
_SUFFIX: Final[str] = "}"

ID_START: Final[int] = len(_ID_PREFIX)
ID_END: Final[int] = ID_START + 64
PUBKEY_START: Final[int] = ID_END + len(_PUBKEY_PREFIX)
PUBKEY_END: Final[int] = PUBKEY_START + 64
SIG_START: Final[int] = PUBKEY_END + len(_SIG_PREFIX)
SIG_END: Final[int] = SIG_START + 128
CREATED_AT_START: Final[int] = SIG_END + len(_CREATED_AT_PREFIX)
CREATED_AT_END: Final[int] = CREATED_AT_START + 10
NSON_START: Final[int] = CREATED_AT_END + len(_NSON_PREFIX)

_MAX_DESCRIPTOR: Final[int] = 255
_MAX_U8: Final[int] = 0xFF
_MAX_U16: Final[int] = 0xFFFF


def _u8(value: int, what: str) -> bytes:
    if value > _MAX_U8:
        raise EncodingError(f"can't encode to nson, {what} is too large ({value})")
    return value.to_bytes(1, "big")


def _u16(value: int, what: str) -> bytes:
    if value > _MAX_U16:
        raise EncodingError(f"can't encode to nson, {what} is too large ({value})")
    return value.to_bytes(2, "big")


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def encode(event: Event) -> str:
    """Encode a signed event as NSON.

    Raises:
        EncodingError: If the event is unsigned, its timestamp is not
            exactly 10 digits, or its tags do not fit the descriptor.
    """
    if not event.is_signed:
        raise EncodingError("can't encode to nson, event is not signed")

    created_at = str(event.created_at)
    if len(created_at) != CREATED_AT_END - CREATED_AT_START or not created_at.isdigit():
        raise EncodingError(f"can't encode to nson, created_at must be 10 digits ({created_at})")

    kind = str(event.kind)
    content = dumps(event.content)

    descriptor = bytearray()
    descriptor += _u8(len(kind), "kind")
    descriptor += _u16(_byte_len(content), "content")
    descriptor += _u8(len(event.tags), "number of tags")

    encoded_tags: list[str] = []
    for tag in event.tags:
        descriptor += _u8(len(tag), "number of tag items")
        items = [dumps(item) for item in tag]
        for item in items:
            descriptor += _u16(_byte_len(item), "tag item")
        encoded_tags.append("[" + ",".join(items) + "]")

    if len(descriptor) > _MAX_DESCRIPTOR:
        raise EncodingError("can't encode to nson, there are too many tags or tag items")

    nson = (bytes([len(descriptor)]) + bytes(descriptor)).hex()
    return (
        f"{_ID_PREFIX}{event.id}{_PUBKEY_PREFIX}{event.pubkey}{_SIG_PREFIX}{event.sig}"
        f"{_CREATED_AT_PREFIX}{created_at}{_NSON_PREFIX}{nson}"
        f"{_KIND_PREFIX}{kind}{_CONTENT_PREFIX}{content}"
        f"{_TAGS_PREFIX}[{','.join(encoded_tags)}]{_SUFFIX}"
    )


class _Reader:
    """Byte cursor over UTF-8 encoded NSON that checks literal separators."""

    __slots__ = ("_data", "pos")

    def __init__(self, data: bytes, pos: int) -> None:
        self._data = data
        self.pos = pos

    def expect(self, literal: str) -> None:
        raw = literal.encode("ascii")
        end = self.pos + len(raw)
        if self._data[self.pos : end] != raw:
            raise EncodingError(f"invalid nson: expected {literal!r} at offset {self.pos}")
        self.pos = end

    def take(self, length: int) -> str:
        end = self.pos + length
        if end > len(self._data):
            raise EncodingError("invalid nson: truncated input")
        chunk = self._data[self.pos : end]
        self.pos = end
        try:
            return chunk.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"invalid nson: {e}") from e


def decode(data: str) -> Event:
    """Decode an NSON string back into a signed [Event][nak.models.Event].

    Counterpart of [encode()][nak.nips.nson.encode] for consumers of
    ``nak event --nson`` output; the CLI itself never decodes.

    Raises:
        EncodingError: If the input does not follow the NSON layout.
    """
    reader = _Reader(data.encode("utf-8"), 0)
    reader.expect(_ID_PREFIX)
    event_id = reader.take(64)
    reader.expect(_PUBKEY_PREFIX)
    pubkey = reader.take(64)
    reader.expect(_SIG_PREFIX)
    sig = reader.take(128)
    reader.expect(_CREATED_AT_PREFIX)
    created_at_text = reader.take(10)
    reader.expect(_NSON_PREFIX)

    try:
        size = bytes.fromhex(reader.take(2))[0]
        descriptor = bytes.fromhex(reader.take(size * 2))
        created_at = int(created_at_text)
    except ValueError as e:
        raise EncodingError(f"invalid nson: {e}") from e

    cursor = 0

    def read(width: int) -> int:
        nonlocal cursor
        if cursor + width > len(descriptor):
            raise EncodingError("invalid nson: descriptor too short")
        value = int.from_bytes(descriptor[cursor : cursor + width], "big")
        cursor += width
        return value

    def read_string(length: int) -> str:
        try:
            value = json.loads(reader.take(length))
        except json.JSONDecodeError as e:
            raise EncodingError(f"invalid nson: {e}") from e
        if not isinstance(value, str):
            raise EncodingError("invalid nson: expected a string")
        return value

    kind_len = read(1)
    content_len = read(2)
    n_tags = read(1)

    reader.expect(_KIND_PREFIX)
    kind_text = reader.take(kind_len)
    if not kind_text.isdigit():
        raise EncodingError(f"invalid nson: bad kind {kind_text!r}")
    reader.expect(_CONTENT_PREFIX)
    content = read_string(content_len)

    reader.expect(_TAGS_PREFIX)
    reader.expect("[")
    tags: list[list[str]] = []
    for t in range(n_tags):
        if t:
            reader.expect(",")
        reader.expect("[")
        n_items = read(1)
        tag: list[str] = []
        for i in range(n_items):
            if i:
                reader.expect(",")
            tag.append(read_string(read(2)))
        reader.expect("]")
        tags.append(tag)
    reader.expect("]")
    reader.expect(_SUFFIX)

    try:
        return Event(
            kind=int(kind_text),
            content=content,
            created_at=created_at,
            tags=tags,
            id=event_id,
            pubkey=pubkey,
            sig=sig,
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(f"invalid nson: {e}") from e
