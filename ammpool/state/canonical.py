"""
Deterministic canonical encoding primitives.

These helpers define the persisted layout of pool records and redeemers and the
hashing used to derive share-asset names. Decoding is strict: anything that
would not re-encode to the exact same bytes is rejected.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any


_HEX_CHARS_RE = re.compile(r"^[0-9a-fA-F]*$")

# Upper bound on a single varint; 10 bytes covers any 64-bit quantity, the rest is headroom.
MAX_VARINT_BYTES = 19


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k in value.keys():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
        for v in value.values():
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)
        return


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected (to avoid representation ambiguity)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def sha256_bytes(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def encode_uvarint(value: int) -> bytes:
    """Unsigned LEB128."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"uvarint must be a non-negative int, got {value!r}")
    out = bytearray()
    n = value
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            break
    return bytes(out)


def encode_svarint(value: int) -> bytes:
    """Zig-zag signed integer on top of LEB128."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"svarint must be an int, got {value!r}")
    zigzag = (value << 1) if value >= 0 else ((-value << 1) - 1)
    return encode_uvarint(zigzag)


def encode_bytes(value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError("value must be bytes")
    value_bytes = bytes(value)
    return encode_uvarint(len(value_bytes)) + value_bytes


class CanonicalReader:
    """
    Cursor over an encoded buffer.

    Every read raises ValueError on truncation or non-canonical input;
    `finish()` rejects trailing bytes.
    """

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data must be bytes")
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read_byte(self) -> int:
        if self._pos >= len(self._data):
            raise ValueError("unexpected end of data")
        b = self._data[self._pos]
        self._pos += 1
        return b

    def read_uvarint(self) -> int:
        result = 0
        shift = 0
        for i in range(MAX_VARINT_BYTES):
            b = self.read_byte()
            result |= (b & 0x7F) << shift
            shift += 7
            if not b & 0x80:
                if b == 0 and i > 0:
                    raise ValueError("non-minimal uvarint encoding")
                return result
        raise ValueError("uvarint too long")

    def read_svarint(self) -> int:
        zigzag = self.read_uvarint()
        if zigzag & 1:
            return -((zigzag + 1) >> 1)
        return zigzag >> 1

    def read_bytes(self, *, max_len: int = 64) -> bytes:
        n = self.read_uvarint()
        if n > max_len:
            raise ValueError(f"byte string too long: {n} > {max_len}")
        if n > self.remaining:
            raise ValueError("unexpected end of data")
        out = self._data[self._pos : self._pos + n]
        self._pos += n
        return out

    def finish(self) -> None:
        if self.remaining:
            raise ValueError(f"{self.remaining} trailing bytes")


def hex_to_bytes(hex_str: str, *, name: str, nbytes: int | None = None, max_bytes: int = 64) -> bytes:
    """
    Parse a hex string (optionally 0x-prefixed) into bytes.

    The empty string is valid and decodes to b"" unless `nbytes` says otherwise.
    """
    if not isinstance(hex_str, str):
        raise TypeError(f"{name} must be a str")
    s = hex_str.strip()
    if s.lower().startswith("0x"):
        s = s[2:]
    if len(s) % 2:
        raise ValueError(f"{name} must have an even number of hex digits")
    if not _HEX_CHARS_RE.fullmatch(s):
        raise ValueError(f"{name} must be valid hex")
    out = bytes.fromhex(s)
    if nbytes is not None and len(out) != nbytes:
        raise ValueError(f"{name} must decode to exactly {nbytes} bytes")
    if len(out) > max_bytes:
        raise ValueError(f"{name} too large")
    return out
