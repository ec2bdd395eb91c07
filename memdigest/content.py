from __future__ import annotations

import io


class Content:
    """Random-access, read-only view over content held by a store.

    Returned by [`DigestStore.open()`][memdigest.memdigest.DigestStore.open].
    The underlying bytes are immutable, so a `Content` stays valid after the
    store that produced it is unmounted.

    Parameters:
        data: The stored bytes.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"Content(len={len(self._data)})"

    def read_at(self, offset: int, size: int = -1) -> bytes:
        """Read up to `size` bytes starting at `offset`.

        Parameters:
            offset: Position of the first byte to read.
            size: Maximum number of bytes to read. Negative reads to the end.

        Returns:
            bytes: Possibly shorter than `size`; empty once `offset` is at or
            past the end.

        Raises:
            ValueError: If `offset` is negative.
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")

        if size < 0:
            return self._data[offset:]
        return self._data[offset : offset + size]

    def reader(self) -> io.BytesIO:
        """Return a fresh, independently positioned binary stream."""
        return io.BytesIO(self._data)

    def close(self) -> None:
        # Nothing to release for in-memory content.
        pass

    def __enter__(self) -> Content:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
