# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import dataclasses
import logging
from collections.abc import Collection
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from schnorr_attest.constants import EPH_DOMAIN_TAG, SCH_DOMAIN_TAG
from schnorr_attest.encoding import encode
from schnorr_attest.hashing import generate
from schnorr_attest.register import Register, derive_pk, validate_scalar
from schnorr_attest.registry import NonceRegistry
from schnorr_attest.secp256k1 import (
    CurvePoint,
    combine,
    compress,
    curve_order,
    g1_point,
    is_on_curve,
    scale,
    to_bytes32,
    to_int,
)
from schnorr_attest.witnesses import RegistryWitnesses, Witnesses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signature:
    """
    A replay-protected Schnorr signature.

    Attributes:
        pk: The signer's public key [sk]G.
        r: The commitment R = [k]G.
        s: The response k + e*sk mod n.
        nonce: The registry nonce this signature was issued under.
    """

    pk: CurvePoint
    r: CurvePoint
    s: int
    nonce: int


def fiat_shamir_heuristic(r: CurvePoint, pk: CurvePoint, msg: bytes) -> str:
    """
    Compute the Fiat–Shamir challenge material for a Schnorr signature.

    The challenge is derived by hashing a domain-separated transcript:

        SCH_DOMAIN_TAG || R || pk || msg

    where `R` and `pk` are SEC1 compressed points and `msg` is the 32 byte
    field-encoded message.

    Args:
        r: Commitment point `[k]G`.
        pk: Signer public key `[sk]G`.
        msg: Field-encoded message (see `encoding.encode`).

    Returns:
        A hex string digest that is mapped to a scalar via `to_int(...)`.
    """
    return generate(SCH_DOMAIN_TAG + compress(r) + compress(pk) + msg.hex())


def challenge(r: CurvePoint, pk: CurvePoint, msg: bytes) -> int:
    return to_int(fiat_shamir_heuristic(r, pk, msg))


def ephemeral_scalar(sk: int, nonce: int, msg: bytes) -> int:
    """
    Derive the per-signature scalar k from (sk, nonce, msg).

    k = HKDF-SHA3-256(ikm=sk, salt=EPH_DOMAIN_TAG,
                      info=nonce || msg || counter) mod n

    A 48 byte output keeps the modular reduction bias negligible. The
    counter is bumped only in the (practically unreachable) case k == 0.
    The same key never signs two different messages with the same k,
    even across registries that hand out the same nonce.
    """
    counter = 0
    while True:
        hkdf = HKDF(
            algorithm=hashes.SHA3_256(),
            length=48,
            salt=bytes.fromhex(EPH_DOMAIN_TAG),
            info=to_bytes32(nonce) + msg + counter.to_bytes(4, "big"),
        )
        k = int.from_bytes(hkdf.derive(to_bytes32(sk)), "big") % curve_order
        if k != 0:
            return k
        counter += 1


def schnorr_signature(msg: bytes | str, witnesses: Witnesses) -> Signature:
    """
    Sign a message with the private inputs supplied by `witnesses`.

    Commit:
        k = ephemeral_scalar(sk, nonce, m)
        R = [k]G

    Challenge:
        e = H(SCH_DOMAIN_TAG || R || pk || m) mod n

    Response:
        s = k + e*sk mod n

    where m = encode(msg). The key is validated before a nonce is requested,
    so an invalid key never consumes a nonce from the registry.

    Raises:
        InvalidKey: If the witness key is zero or out of range.
        ValueError: If the witness nonce is not an integer in [0, 2**256).
    """
    sk = validate_scalar(witnesses.local_signing_key())
    return respond(msg, sk, derive_pk(sk), witnesses)


def respond(msg: bytes | str, sk: int, pk: CurvePoint, witnesses: Witnesses) -> Signature:
    """
    Commit and respond for an already validated key pair (sk, pk = [sk]G).
    """
    m = encode(msg)

    nonce = witnesses.signing_nonce()
    if isinstance(nonce, bool) or not isinstance(nonce, int) or not 0 <= nonce < 1 << 256:
        raise ValueError(f"signing nonce must be an integer in [0, 2**256), got {nonce!r}")
    k = ephemeral_scalar(sk, nonce, m)
    r = g1_point(k)
    e = challenge(r, pk, m)
    s = (k + e * sk) % curve_order
    return Signature(pk=pk, r=r, s=s, nonce=nonce)


def sign(msg: bytes | str, sk: int, registry: NonceRegistry) -> Signature:
    """
    Sign `msg` with secret scalar `sk`, drawing a fresh nonce from `registry`.

    The returned nonce is issued but not consumed; it is consumed by the
    first successful `verify`.
    """
    register = Register(x=sk)
    return respond(msg, register.x, register.u, RegistryWitnesses(register, registry))


def is_well_formed(sig: Signature) -> bool:
    if not isinstance(sig, Signature):
        return False
    for point in (sig.pk, sig.r):
        if not isinstance(point, CurvePoint) or not is_on_curve(point):
            return False
    for value in (sig.s, sig.nonce):
        if isinstance(value, bool) or not isinstance(value, int):
            return False
    return 0 <= sig.s < curve_order and sig.nonce >= 0


def schnorr_equation_holds(msg: bytes, sig: Signature) -> bool:
    """
    Check [s]G == R + [e]pk for a well-formed signature and encoded message.
    """
    e = challenge(sig.r, sig.pk, msg)
    return g1_point(sig.s) == combine(sig.r, scale(sig.pk, e))


def verify(
    msg: bytes | str,
    sig: Signature,
    registry: NonceRegistry,
    authorized_signers: Collection[CurvePoint] | None = None,
) -> bool:
    """
    Verify a signature and consume its nonce.

    Returns True only when the signature is well formed, its key is
    authorized (if a set of authorized signers is given), the Schnorr
    equation holds, and the nonce was not already consumed. Every failure
    is a plain False; the registry is only mutated when the equation holds.

    The nonce is not part of the challenge. A consumed signature relabelled
    with another unconsumed nonce passes again, so replay protection holds
    per nonce value, not per (R, s). Bind the nonce into the message before
    signing when each signature must be accepted at most once.
    """
    if not is_well_formed(sig):
        logger.debug("rejected malformed signature")
        return False
    if authorized_signers is not None and sig.pk not in authorized_signers:
        logger.debug("rejected signature from unauthorized key %s", compress(sig.pk))
        return False
    try:
        m = encode(msg)
    except (TypeError, UnicodeEncodeError):
        logger.debug("rejected signature over unencodable message")
        return False
    if not schnorr_equation_holds(m, sig):
        logger.debug("schnorr equation failed for nonce %d", sig.nonce)
        return False
    return registry.try_consume(sig.nonce)


def verify_with_public_key(
    msg: bytes | str,
    sig: Signature,
    public_key: CurvePoint,
    registry: NonceRegistry,
    authorized_signers: Collection[CurvePoint] | None = None,
) -> bool:
    """
    Verify `sig` as if it had been produced by `public_key`.

    Useful for checking that a signature came from one expected key: a
    signature from any other key fails the equation and leaves its nonce
    unconsumed.
    """
    if not isinstance(sig, Signature):
        return False
    return verify(msg, dataclasses.replace(sig, pk=public_key), registry, authorized_signers)
