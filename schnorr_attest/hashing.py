# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

import hashlib
import binascii

from schnorr_attest.constants import DIGEST_SIZE


def generate(input_string: str, digest_size: int = DIGEST_SIZE) -> str:
    """
    Calculates the blake2b hash digest of a hex encoded input string.

    Args:
        input_string (str): The hex string to be hashed.
        digest_size (int): Digest length in bytes, blake2b_256 by default.

    Returns:
        str: The blake2b hash digest of the input string, hex encoded.
    """
    hash_digest = hashlib.blake2b(
        binascii.unhexlify(input_string), digest_size=digest_size
    ).hexdigest()

    return hash_digest
