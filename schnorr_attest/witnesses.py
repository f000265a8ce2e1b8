# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
from typing import Protocol

from schnorr_attest.register import Register
from schnorr_attest.registry import NonceRegistry


class Witnesses(Protocol):
    """
    The private inputs a signer needs for one signature.

    `local_signing_key` returns the secret scalar. `signing_nonce` returns a
    freshly issued nonce and is called exactly once per signature.
    """

    def local_signing_key(self) -> int: ...

    def signing_nonce(self) -> int: ...


class RegistryWitnesses:
    """
    Supply the secret scalar from a Register and nonces from a NonceRegistry.
    """

    def __init__(self, register: Register, registry: NonceRegistry) -> None:
        if not register.secret_known:
            raise ValueError("signing requires a register with a known secret")
        self.register = register
        self.registry = registry

    def local_signing_key(self) -> int:
        return self.register.x

    def signing_nonce(self) -> int:
        return self.registry.issue()
