# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import logging
from collections.abc import Iterable

from schnorr_attest.credential import (
    CredentialSubject,
    SignedCredentialSubject,
    create_credential_subject,
    hash_credential_subject,
    sign_credential_subject,
    verify_signed_credential,
    verify_signed_credential_with_public_key,
)
from schnorr_attest.register import derive_pk, scalar_from_bytes
from schnorr_attest.registry import NonceRegistry
from schnorr_attest.schnorr import Signature, sign, verify, verify_with_public_key
from schnorr_attest.secp256k1 import CurvePoint, compress

logger = logging.getLogger(__name__)


class Authority:
    """
    A signing and verifying authority with its own nonce registry.

    Every signature produced through an Authority draws its nonce from the
    authority's registry, and every successful verification consumes the
    nonce there. Separate Authority objects keep separate registries, so
    independent authorities can coexist in one process.

    Args:
        registry: The registry to issue and consume nonces in. A fresh one
            is created when omitted.
        authorized_signers: Optional public keys whose signatures this
            authority accepts. When omitted, any key is accepted.
    """

    def __init__(
        self,
        registry: NonceRegistry | None = None,
        authorized_signers: Iterable[CurvePoint] | None = None,
    ) -> None:
        self.registry = registry if registry is not None else NonceRegistry()
        self.authorized_signers = (
            frozenset(authorized_signers) if authorized_signers is not None else None
        )

    def __repr__(self) -> str:
        signers = (
            "any" if self.authorized_signers is None else len(self.authorized_signers)
        )
        return f"Authority(registry={self.registry!r}, authorized_signers={signers})"

    @classmethod
    def restricted_to(cls, *secret_keys: bytes | int) -> "Authority":
        """
        Build an Authority that only accepts signatures from the given keys.
        """
        signers = [derive_pk(scalar_from_bytes(key)) for key in secret_keys]
        logger.debug(
            "authority restricted to %s", ", ".join(compress(pk) for pk in signers)
        )
        return cls(authorized_signers=signers)

    def derive_public_key(self, secret_key: bytes | int) -> CurvePoint:
        return derive_pk(scalar_from_bytes(secret_key))

    def sign(self, message: bytes | str, secret_key: bytes | int) -> Signature:
        """
        Sign `message`, binding the signature to a fresh nonce.

        Raises:
            InvalidKey: If the secret key is malformed, zero or out of range.
        """
        return sign(message, scalar_from_bytes(secret_key), self.registry)

    def verify(self, message: bytes | str, signature: Signature) -> bool:
        """
        Return True the first time a valid signature is presented, False after.
        """
        return verify(message, signature, self.registry, self.authorized_signers)

    def verify_with_public_key(
        self, message: bytes | str, signature: Signature, public_key: CurvePoint
    ) -> bool:
        return verify_with_public_key(
            message, signature, public_key, self.registry, self.authorized_signers
        )

    def hash_credential_subject(self, subject: CredentialSubject) -> bytes:
        return hash_credential_subject(subject)

    def create_credential_subject(
        self,
        id: bytes | str,
        first_name: bytes | str,
        last_name: bytes | str,
        national_identifier: bytes | str,
        birth_timestamp: int,
    ) -> CredentialSubject:
        return create_credential_subject(
            id, first_name, last_name, national_identifier, birth_timestamp
        )

    def sign_credential_subject(
        self, subject: CredentialSubject, secret_key: bytes | int
    ) -> SignedCredentialSubject:
        return sign_credential_subject(
            subject, scalar_from_bytes(secret_key), self.registry
        )

    def verify_signed_credential(self, signed: SignedCredentialSubject) -> bool:
        return verify_signed_credential(signed, self.registry, self.authorized_signers)

    def verify_signed_credential_with_public_key(
        self, signed: SignedCredentialSubject, public_key: CurvePoint
    ) -> bool:
        return verify_signed_credential_with_public_key(
            signed, public_key, self.registry, self.authorized_signers
        )
