from __future__ import annotations

import hashlib
from enum import Enum
from typing import Any

from blake3 import blake3


class Algorithm(str, Enum):
    """Digest algorithms a [`DigestStore`][memdigest.memdigest.DigestStore] can
    be configured with.

    Members' values are the algorithm names used by `open()` and `create()`.
    A store only ever serves the one algorithm it was initialized with.
    """

    SHA1 = "SHA-1"
    BLAKE3 = "BLAKE3"

    @property
    def digest_size(self) -> int:
        """Length in bytes of a digest produced by this algorithm"""
        return _DIGEST_SIZES[self.value]

    @property
    def slug(self) -> str:
        """Name used inside location strings, e.g. `sha-1`"""
        return self.value.lower()

    @classmethod
    def from_slug(cls, slug: str) -> Algorithm:
        for algorithm in cls:
            if algorithm.slug == slug:
                return algorithm
        raise ValueError(f"Unknown algorithm slug {slug!r}")

    def hasher(self, max_threads: int = 1) -> Any:
        """Return a fresh incremental hasher with `update()` and `digest()`.

        `max_threads` only applies to BLAKE3.
        """
        if self is Algorithm.SHA1:
            return hashlib.sha1()
        return blake3(max_threads=max_threads)

    def digest(self, content: bytes) -> bytes:
        hasher = self.hasher()
        hasher.update(content)
        return hasher.digest()


# digest lengths, looked up on every load()
_DIGEST_SIZES = {
    Algorithm.SHA1.value: hashlib.sha1().digest_size,
    Algorithm.BLAKE3.value: blake3().digest_size,
}
