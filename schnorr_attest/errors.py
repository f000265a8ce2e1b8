# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only


class SchnorrAttestError(Exception):
    """Base class for errors raised by schnorr_attest."""


class InvalidKey(SchnorrAttestError, ValueError):
    """
    A secret key is zero, not below the curve order, or not a 32 byte value.

    Raised before any nonce is issued or any signature material is produced.
    """
