# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

from dataclasses import dataclass, field

from schnorr_attest.constants import SCALAR_BYTES
from schnorr_attest.errors import InvalidKey
from schnorr_attest.secp256k1 import CurvePoint, curve_order, g1_point, is_on_curve


def validate_scalar(sk: int) -> int:
    """
    Check that `sk` is a usable secret scalar in [1, curve_order - 1].

    Raises:
        InvalidKey: If `sk` is not an int, is zero, negative or too large.
    """
    if isinstance(sk, bool) or not isinstance(sk, int):
        raise InvalidKey(f"secret scalar must be an int, got {type(sk).__name__}")
    if sk == 0:
        raise InvalidKey("secret scalar must not be zero")
    if not 0 < sk < curve_order:
        raise InvalidKey("secret scalar must be below the curve order")
    return sk


def scalar_from_bytes(secret_key: bytes | int) -> int:
    """
    Parse a 32 byte big-endian secret key into a validated scalar.

    Ints are accepted as already decoded scalars and validated the same way.

    Raises:
        InvalidKey: On a wrong length, a zero key or a key >= curve_order.
    """
    if isinstance(secret_key, (bytes, bytearray)):
        if len(secret_key) != SCALAR_BYTES:
            raise InvalidKey(
                f"secret key must be {SCALAR_BYTES} bytes, got {len(secret_key)}"
            )
        secret_key = int.from_bytes(secret_key, "big")
    return validate_scalar(secret_key)


def derive_pk(sk: int) -> CurvePoint:
    """
    Derive the public key [sk]G for a secret scalar.

    Pure and deterministic: equal scalars give equal points.

    Raises:
        InvalidKey: If `sk == 0` or `sk >= curve_order`.
    """
    return g1_point(validate_scalar(sk))


@dataclass
class Register:
    """
    A key register: the secret scalar `x` (when known) and its public point `u`.
    """

    x: int | None = None
    u: CurvePoint | None = field(default=None)

    def __post_init__(self):
        # Secret-known construction
        if self.x is not None:
            self.u = derive_pk(self.x)
            return

        # Public-only construction
        if self.u is None:
            raise ValueError("Must provide u if x is not known")
        if self.u.is_identity or not is_on_curve(self.u):
            raise InvalidKey("public key is not a point on the curve")

    def __eq__(self, other):
        if not isinstance(other, Register):
            return NotImplemented
        return self.x == other.x and self.u == other.u

    def __repr__(self):
        # never print the secret scalar
        return f"Register(u={self.u!r}, secret_known={self.x is not None})"

    @property
    def secret_known(self) -> bool:
        return self.x is not None

    @classmethod
    def from_secret_key(cls, secret_key: bytes | int) -> "Register":
        return cls(x=scalar_from_bytes(secret_key))

    @classmethod
    def from_public(cls, u: CurvePoint) -> "Register":
        return cls(x=None, u=u)
