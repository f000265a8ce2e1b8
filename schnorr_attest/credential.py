# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
from collections.abc import Collection
from dataclasses import dataclass

import cbor2

from schnorr_attest.constants import CRD_DOMAIN_TAG, FIELD_WIDTH
from schnorr_attest.encoding import encode, is_field_element
from schnorr_attest.hashing import generate
from schnorr_attest.registry import NonceRegistry
from schnorr_attest.schnorr import Signature, sign, verify, verify_with_public_key
from schnorr_attest.secp256k1 import CurvePoint


@dataclass(frozen=True)
class CredentialSubject:
    """
    An identity record whose digest is what an issuer signs.

    The four byte fields are 32 byte field elements (see `encoding.encode`);
    `birth_timestamp` is an integer of any size, typically milliseconds
    since the epoch.
    """

    id: bytes
    first_name: bytes
    last_name: bytes
    national_identifier: bytes
    birth_timestamp: int

    def __post_init__(self):
        for name in ("id", "first_name", "last_name", "national_identifier"):
            value = getattr(self, name)
            if not is_field_element(value):
                raise ValueError(f"{name} must be exactly {FIELD_WIDTH} bytes")
        if isinstance(self.birth_timestamp, bool) or not isinstance(
            self.birth_timestamp, int
        ):
            raise TypeError("birth_timestamp must be an int")

    def to_cbor(self) -> bytes:
        """
        Canonical CBOR encoding of the record as a five element array.

        Field order is fixed, so two records encode identically iff all five
        fields are equal. Integers beyond 64 bits are encoded as CBOR
        bignums, keeping the timestamp at full precision.
        """
        return cbor2.dumps(
            [
                self.id,
                self.first_name,
                self.last_name,
                self.national_identifier,
                self.birth_timestamp,
            ],
            canonical=True,
        )


@dataclass(frozen=True)
class SignedCredentialSubject:
    subject: CredentialSubject
    signature: Signature


def create_credential_subject(
    id: bytes | str,
    first_name: bytes | str,
    last_name: bytes | str,
    national_identifier: bytes | str,
    birth_timestamp: int,
) -> CredentialSubject:
    """
    Build a CredentialSubject, passing each text field through `encode`.

    Fields longer than 32 bytes are truncated by the encoder.
    """
    return CredentialSubject(
        id=encode(id),
        first_name=encode(first_name),
        last_name=encode(last_name),
        national_identifier=encode(national_identifier),
        birth_timestamp=birth_timestamp,
    )


def hash_credential_subject(subject: CredentialSubject) -> bytes:
    """
    Compute the 32 byte digest of a credential subject.

        blake2b_256(CRD_DOMAIN_TAG || cbor(subject))

    The credential tag differs from the signature challenge tag, so a
    credential digest cannot be mistaken for a transcript of a plain
    message signature.
    """
    return bytes.fromhex(generate(CRD_DOMAIN_TAG + subject.to_cbor().hex()))


def sign_credential_subject(
    subject: CredentialSubject, sk: int, registry: NonceRegistry
) -> SignedCredentialSubject:
    signature = sign(hash_credential_subject(subject), sk, registry)
    return SignedCredentialSubject(subject=subject, signature=signature)


def verify_signed_credential(
    signed: SignedCredentialSubject,
    registry: NonceRegistry,
    authorized_signers: Collection[CurvePoint] | None = None,
) -> bool:
    """
    Verify a signed credential and consume its nonce.

    Any change to any subject field changes the digest and fails the
    equation without touching the registry.
    """
    if not isinstance(signed, SignedCredentialSubject) or not isinstance(
        signed.subject, CredentialSubject
    ):
        return False
    digest = hash_credential_subject(signed.subject)
    return verify(digest, signed.signature, registry, authorized_signers)


def verify_signed_credential_with_public_key(
    signed: SignedCredentialSubject,
    public_key: CurvePoint,
    registry: NonceRegistry,
    authorized_signers: Collection[CurvePoint] | None = None,
) -> bool:
    if not isinstance(signed, SignedCredentialSubject) or not isinstance(
        signed.subject, CredentialSubject
    ):
        return False
    digest = hash_credential_subject(signed.subject)
    return verify_with_public_key(
        digest, signed.signature, public_key, registry, authorized_signers
    )
