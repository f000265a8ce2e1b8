# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
from schnorr_attest.constants import FIELD_WIDTH


def encode(data: bytes | str) -> bytes:
    """
    Map a message or record field to a fixed-width 32 byte field element.

    Strings are UTF-8 encoded first. Inputs of at most 32 bytes are
    right-padded with zero bytes.

    WARNING: inputs longer than 32 bytes are silently truncated to their
    first 32 bytes. Two messages that share the same first 32 bytes encode
    identically, so a signature over one verifies for the other. Callers
    that need the whole input bound into the signature must hash it down
    to 32 bytes themselves before calling `sign`/`verify`.

    Trailing zero bytes are also lost: b"ab" and b"ab\\x00" encode the same.

    Args:
        data: Raw bytes or a text string.

    Returns:
        Exactly 32 bytes.

    Raises:
        TypeError: If `data` is neither bytes-like nor str.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    elif not isinstance(data, bytes):
        raise TypeError(f"cannot encode {type(data).__name__} as a field element")
    return data[:FIELD_WIDTH].ljust(FIELD_WIDTH, b"\x00")


def is_field_element(data: bytes) -> bool:
    return isinstance(data, bytes) and len(data) == FIELD_WIDTH
