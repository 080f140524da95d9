"""Fiat-Shamir transcript over BLAKE2b.

Absorbs committed columns and squeezes field challenges. Each squeeze hashes
the running state together with a counter, so challenges drawn after the same
absorbed data are distinct and deterministic.
"""

import hashlib
from typing import Iterable

from host_circuits.primitives.field import FF, BN254_SCALAR_PRIME

_DIGEST_SIZE = 64  # 512 bits, reduced mod r with negligible bias


class Transcript:
    """Sponge-style transcript: put() values, get_field() challenges."""

    def __init__(self, domain: bytes = b"host-circuits"):
        self._state = hashlib.blake2b(domain, digest_size=_DIGEST_SIZE).digest()
        self._pending = hashlib.blake2b(digest_size=_DIGEST_SIZE)
        self._counter = 0

    def put(self, values: Iterable[int]) -> None:
        """Absorb a sequence of integers (field elements or raw words)."""
        for v in values:
            self._pending.update(int(v).to_bytes(32, "little"))

    def get_field(self) -> FF:
        """Squeeze one field element."""
        h = hashlib.blake2b(digest_size=_DIGEST_SIZE)
        h.update(self._state)
        h.update(self._pending.digest())
        h.update(self._counter.to_bytes(8, "little"))
        self._state = h.digest()
        self._pending = hashlib.blake2b(digest_size=_DIGEST_SIZE)
        self._counter += 1
        return FF(int.from_bytes(self._state, "little") % BN254_SCALAR_PRIME)
