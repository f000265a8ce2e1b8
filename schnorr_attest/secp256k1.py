# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
from dataclasses import dataclass

from py_ecc.secp256k1.secp256k1 import B, G, N, P, add, multiply

from schnorr_attest.constants import SCALAR_BYTES


@dataclass(frozen=True)
class CurvePoint:
    """
    An affine secp256k1 point. Public keys and signature commitments are
    CurvePoints. The point at infinity is (0, 0), as returned by py_ecc.
    """

    x: int
    y: int

    @property
    def is_identity(self) -> bool:
        return self.x == 0 and self.y == 0

    def to_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __add__(self, other):
        if not isinstance(other, CurvePoint):
            return NotImplemented
        return combine(self, other)

    def __mul__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        return scale(self, other)

    def __rmul__(self, other):
        return self.__mul__(other)


def is_on_curve(point: CurvePoint) -> bool:
    """
    Check that a point satisfies the secp256k1 curve equation.

    The identity (0, 0) is not on the curve in affine form, so it fails this
    check; callers that accept the identity must test for it separately.
    """
    x, y = point.x, point.y
    if not isinstance(x, int) or not isinstance(y, int):
        return False
    if not (0 <= x < P and 0 <= y < P):
        return False
    return (y * y - x * x * x - B) % P == 0


def g1_point(scalar: int) -> CurvePoint:
    """
    Generates a secp256k1 point from the generator using scalar multiplication.

    Args:
        scalar (int): The scalar value for multiplication.

    Returns:
        CurvePoint: The resulting point, the identity when the scalar is 0 mod n.
    """
    return CurvePoint(*multiply(G, scalar % curve_order))


def scale(element: CurvePoint, scalar: int) -> CurvePoint:
    """
    Scales a secp256k1 point by a given scalar using scalar multiplication.

    Args:
        element (CurvePoint): The point to be scaled.
        scalar (int): The scalar value for multiplication.

    Returns:
        CurvePoint: The resulting scaled point.
    """
    if element.is_identity:
        return identity
    return CurvePoint(*multiply(element.to_tuple(), scalar % curve_order))


def combine(left_element: CurvePoint, right_element: CurvePoint) -> CurvePoint:
    """
    Combines two secp256k1 points using addition.

    Args:
        left_element (CurvePoint): A point.
        right_element (CurvePoint): A point.

    Returns:
        CurvePoint: The resulting combined point.
    """
    if left_element.is_identity:
        return right_element
    if right_element.is_identity:
        return left_element
    return CurvePoint(*add(left_element.to_tuple(), right_element.to_tuple()))


def compress(element: CurvePoint) -> str:
    """
    Compresses a point to the SEC1 33 byte form, hex encoded.

    The identity has no SEC1 compressed encoding of its own and is written
    as a single zero byte followed by 32 zero bytes so that transcripts
    stay fixed width.

    Args:
        element (CurvePoint): The point to be compressed.

    Returns:
        str: The compressed point as a hexadecimal string.
    """
    if element.is_identity:
        return "00" * (SCALAR_BYTES + 1)
    prefix = "03" if element.y & 1 else "02"
    return prefix + element.x.to_bytes(SCALAR_BYTES, "big").hex()


def to_int(hash_digest: str) -> int:
    """
    Interpret a hex digest as a scalar reduced modulo the curve order.

        c = int(hash_digest, 16) mod curve_order

    Args:
        hash_digest: Hex-encoded digest string (no '0x' prefix expected).

    Returns:
        An integer scalar in the range [0, curve_order - 1].
    """
    return int(hash_digest, 16) % curve_order


def to_bytes32(integer: int) -> bytes:
    """
    Encode a scalar or field element as a fixed 32 byte big-endian value.

    Raises:
        OverflowError: If the integer does not fit in 32 bytes.
    """
    return integer.to_bytes(SCALAR_BYTES, "big")


# curve order
curve_order = N

# field prime
field_prime = P

# identity element
identity = CurvePoint(0, 0)

# generator
generator = CurvePoint(*G)
