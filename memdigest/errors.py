"""Custom exceptions for memdigest.

Every error raised by a store operation is terminal for that call; the store
never retries internally.
"""


class MemDigestError(RuntimeError):
    """Base class for all memdigest errors."""
    pass


# Store lifecycle errors
class StoreStateError(MemDigestError):
    """Base class for errors caused by the store's initialization state."""
    pass


class UninitializedStoreError(StoreStateError):
    """A write was attempted on a store that was never initialized."""

    def __init__(self):
        super().__init__(
            "Store is not initialized. "
            "Pass an algorithm to DigestStore() or call init() before storing content."
        )


class StoreAlreadyInitializedError(StoreStateError):
    """init() called on a store that already has an algorithm."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(
            f"Store is already initialized with algorithm '{algorithm}'. "
            f"Reconfiguring it could orphan stored content."
        )


# Lookup errors
class LookupFailedError(MemDigestError):
    """Base class for errors raised while resolving content."""
    pass


class UnsupportedAlgorithmError(LookupFailedError):
    """Requested algorithm does not match the store's algorithm."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Unsupported algorithm: '{algorithm}'")


class ContentNotFoundError(LookupFailedError):
    """No content for the digest, or the digest is malformed."""

    def __init__(self, algorithm: str, digest: bytes):
        self.algorithm = algorithm
        self.digest = digest
        if isinstance(digest, (bytes, bytearray, memoryview)):
            shown = bytes(digest).hex()
        else:
            shown = repr(digest)
        super().__init__(f"Content not found: algorithm '{algorithm}', digest {shown}")


class BadLocationError(LookupFailedError):
    """Location string is not in the memdigest location format."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Bad location: {location!r}")
