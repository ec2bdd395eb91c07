"""Mount point contract and store factory.

A host virtual-filesystem layer treats any object satisfying
[`MountPoint`][memdigest.mount_point.MountPoint] interchangeably, for example
trying each mounted store in turn until one stops raising
[`ContentNotFoundError`][memdigest.errors.ContentNotFoundError].
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .algorithms import Algorithm
from .content import Content
from .memdigest import DigestStore

STORE_NAME_PREFIX = "memdigest."


@runtime_checkable
class MountPoint(Protocol):
    """Protocol for content-addressable stores mounted by a host.

    Stores must provide `create`, `open`, `open_location` and `unmount`.
    """

    def create(self, content: bytes) -> tuple[str, bytes]:
        """Store content.

        Parameters:
            content: Bytes to store.

        Returns:
            (algorithm_name, digest): The digest in binary form.
        """
        ...

    def open(self, algorithm: str, digest: bytes) -> Content:
        """Open stored content.

        Raises:
            UnsupportedAlgorithmError: The store cannot serve this algorithm.
            ContentNotFoundError: The store does not hold this digest.
        """
        ...

    def open_location(self, location: str) -> Content:
        """Open stored content by location string.

        Raises:
            BadLocationError: Location not understood by this store.
        """
        ...

    def unmount(self) -> None:
        """Release all content held by the store."""
        ...


def store_names() -> list[str]:
    """Names accepted by [`make_store()`][memdigest.mount_point.make_store]."""
    return [f"{STORE_NAME_PREFIX}{algorithm.name}" for algorithm in Algorithm]


def make_store(name: str) -> DigestStore:
    """Create an initialized store from its well-known name.

    Parameters:
        name: One of `store_names()`, e.g. `"memdigest.SHA1"`.

    Returns:
        DigestStore: A new, empty store.

    Raises:
        NotImplementedError: If no store is known under `name`.
    """
    if name not in store_names():
        raise NotImplementedError(
            f"Store {name} not supported, expected one of: {', '.join(store_names())}"
        )

    return DigestStore(Algorithm[name[len(STORE_NAME_PREFIX) :]])
