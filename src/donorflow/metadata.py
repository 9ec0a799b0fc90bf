"""
Campaign metadata codec.

On-chain campaign metadata is an opaque ``bytes`` field.  By convention it
holds a UTF-8 JSON object such as ``{"title": "Clean water"}``; RPC nodes
hand it back as a 0x-prefixed hex string.
"""

from __future__ import annotations

import binascii
import json
from dataclasses import dataclass
from typing import Any

from .errors import DecodeError, EncodingError, FormatError


@dataclass(frozen=True)
class Metadata:
    title: str

    def describe(self) -> str:
        return f"Title: {self.title}\n"

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title}

    def to_bytes(self) -> bytes:
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    def encode(self) -> str:
        """Return the 0x-prefixed hex form accepted by :func:`decode`."""
        return "0x" + self.to_bytes().hex()

    def __str__(self) -> str:
        return self.describe()


def decode(hex_string: str) -> Metadata:
    """
    Decode a hex-encoded metadata blob.

    Args:
        hex_string: Hex string, optionally 0x-prefixed

    Returns:
        Parsed Metadata

    Raises:
        DecodeError: Odd length or non-hex characters
        EncodingError: Bytes are not valid UTF-8
        FormatError: Not a JSON object with a string ``title``
    """
    digits = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string
    try:
        raw = binascii.unhexlify(digits)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid hex metadata: {exc}") from exc
    return decode_bytes(raw)


def decode_bytes(data: bytes) -> Metadata:
    """Decode metadata that is already in byte form."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Metadata is not valid UTF-8: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Metadata is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise FormatError("Metadata must be a JSON object")
    title = payload.get("title")
    if title is None:
        raise FormatError("Metadata is missing required field 'title'")
    if not isinstance(title, str):
        raise FormatError("Metadata field 'title' must be a string")

    return Metadata(title=title)


__all__ = ["Metadata", "decode", "decode_bytes"]
