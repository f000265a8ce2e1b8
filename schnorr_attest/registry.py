# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
"""
Nonce issuance and consumption.

Every signature carries a nonce issued by a NonceRegistry. A nonce moves

    UNISSUED -> ISSUED -> CONSUMED

and never goes back. Issuance is monotonic from 0. Consumption happens on
the first successful verification; any later verification of a signature
with the same nonce fails, which is what makes an otherwise stateless
Schnorr signature single-use.

Both transitions are one lock-guarded check-and-mutate step, so concurrent
signers never share a nonce and concurrent verifiers of one signature never
both observe it unconsumed.
"""
import enum
import logging
import threading

logger = logging.getLogger(__name__)


class NonceState(enum.Enum):
    UNISSUED = "unissued"
    ISSUED = "issued"
    CONSUMED = "consumed"


class NonceRegistry:
    """
    Replay-protection state for one issuing context.

    Registries are plain objects: create one per authority and pass it to
    whatever signs or verifies on that authority's behalf.
    """

    def __init__(self, context: str = "default") -> None:
        self.context = context
        self._next_nonce = 0
        self._consumed: set[int] = set()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"NonceRegistry(context={self.context!r}, "
            f"next_nonce={self.next_nonce}, consumed={self.consumed_count})"
        )

    @property
    def next_nonce(self) -> int:
        with self._lock:
            return self._next_nonce

    @property
    def issued_count(self) -> int:
        return self.next_nonce

    @property
    def consumed_count(self) -> int:
        with self._lock:
            return len(self._consumed)

    def issue(self) -> int:
        """
        Return the next nonce and advance the counter. Never fails.
        """
        with self._lock:
            nonce = self._next_nonce
            self._next_nonce += 1
        logger.debug("registry %s issued nonce %d", self.context, nonce)
        return nonce

    def try_consume(self, nonce: int) -> bool:
        """
        Mark `nonce` consumed if it is not already.

        Returns:
            True if this call consumed the nonce, False if it had already
            been consumed. A False result leaves the registry unchanged.
        """
        with self._lock:
            if nonce in self._consumed:
                consumed = False
            else:
                self._consumed.add(nonce)
                consumed = True
        if consumed:
            logger.debug("registry %s consumed nonce %d", self.context, nonce)
        else:
            logger.info("registry %s rejected replayed nonce %d", self.context, nonce)
        return consumed

    def is_consumed(self, nonce: int) -> bool:
        with self._lock:
            return nonce in self._consumed

    def state(self, nonce: int) -> NonceState:
        """
        Report where `nonce` is in its lifecycle from this registry's view.

        A nonce issued by another registry and consumed here reports
        CONSUMED; one that is neither issued nor consumed here reports
        UNISSUED.
        """
        with self._lock:
            if nonce in self._consumed:
                return NonceState.CONSUMED
            if 0 <= nonce < self._next_nonce:
                return NonceState.ISSUED
            return NonceState.UNISSUED
