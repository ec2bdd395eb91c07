from __future__ import annotations

import logging
import os
from typing import AsyncGenerator

import anyio
from blake3 import blake3

from ._utils import (
    AsyncFileReader,
    ProgressAsyncFileReader,
    ProgressCallback,
    RWLock,
    find_files,
)
from .algorithms import Algorithm
from .content import Content
from .errors import (
    ContentNotFoundError,
    StoreAlreadyInitializedError,
    UninitializedStoreError,
    UnsupportedAlgorithmError,
)
from .location import format_location, parse_location

PathLikeArg = str | os.PathLike[str]

logger = logging.getLogger(__name__)


class DigestStore:
    """In-memory content-addressable store.

    Content is kept under the digest of its own bytes, computed with the
    store's single configured [`Algorithm`][memdigest.algorithms.Algorithm].
    The mapping is created on the first write, dropped by
    [`unmount()`][memdigest.memdigest.DigestStore.unmount], and recreated by
    the next write.

    A store constructed without an algorithm is *uninitialized* until
    [`init()`][memdigest.memdigest.DigestStore.init] is called. Reads on an
    uninitialized store report not found and `unmount()` succeeds, but writes
    raise [`UninitializedStoreError`][memdigest.errors.UninitializedStoreError].

    All operations are safe to call from multiple threads. Writes and unmount
    take the store's lock exclusively; reads share it.

    Attributes:
        is_initialized: Whether an algorithm has been configured
        algorithm: The configured algorithm
        digest_size: Length in bytes of this store's digests

    Parameters:
        algorithm: Algorithm to initialize the store with, or `None` to defer
            to `init()`.
    """

    def __init__(self, algorithm: Algorithm | str | None = None):
        self._lock = RWLock()
        self._data: dict[bytes, bytes] | None = None
        self._algorithm: Algorithm | None = None

        if algorithm is not None:
            self.init(algorithm)

    def init(self, algorithm: Algorithm | str = Algorithm.SHA1) -> None:
        """Configure the store's digest algorithm.

        Parameters:
            algorithm: An `Algorithm` member or its exact name, e.g. `"SHA-1"`.

        Raises:
            StoreAlreadyInitializedError: If an algorithm is already configured.
            ValueError: If `algorithm` is not a known algorithm name.
        """
        if self._algorithm is not None:
            raise StoreAlreadyInitializedError(self._algorithm.value)

        self._algorithm = Algorithm(algorithm)

    @property
    def is_initialized(self) -> bool:
        """`True` once an algorithm is configured"""
        return self._algorithm is not None

    @property
    def algorithm(self) -> Algorithm | None:
        """The configured algorithm, `None` when uninitialized"""
        return self._algorithm

    @property
    def digest_size(self) -> int | None:
        """Length of this store's digests, `None` when uninitialized"""
        if self._algorithm is None:
            return None
        return self._algorithm.digest_size

    def compute_digest(self, content: bytes) -> bytes:
        """Digest `content` without storing it.

        Raises:
            UninitializedStoreError: If the store has no algorithm.
        """
        if self._algorithm is None:
            raise UninitializedStoreError()
        return self._algorithm.digest(content)

    def store(self, content: bytes) -> bytes:
        """Store `content` and return its digest in binary form.

        Storing the same content again replaces the entry with identical bytes.
        The store keeps its own copy, later changes to a mutable `content`
        buffer are not seen.

        Parameters:
            content: Bytes-like content to store.

        Returns:
            bytes: The digest, e.g. 20 bytes for SHA-1. Use `.hex()` for the
            hexadecimal form.

        Raises:
            UninitializedStoreError: If the store has no algorithm.
        """
        value = bytes(content)
        digest = self.compute_digest(value)
        self._insert(digest, value)
        return digest

    def create(self, content: bytes) -> tuple[str, bytes]:
        """Store `content`, returning `(algorithm_name, digest)`.

        This is the mount-point flavour of
        [`store()`][memdigest.memdigest.DigestStore.store].
        """
        digest = self.store(content)
        # store() succeeded, so the algorithm is set
        return self._algorithm.value, digest  # type: ignore[union-attr]

    def load(self, digest: bytes) -> bytes | None:
        """Return the content stored under `digest`.

        Returns:
            bytes | None: `None` if the store is uninitialized or empty, if
            `digest` is not bytes-like or has the wrong length, or if nothing is
            stored under it.
        """
        if self._algorithm is None:
            return None

        if not isinstance(digest, (bytes, bytearray, memoryview)):
            return None

        if len(digest) != self._algorithm.digest_size:
            return None

        with self._lock.read_locked():
            data = self._data
            if data is None:
                return None
            return data.get(bytes(digest))

    def open(self, algorithm: Algorithm | str, digest: bytes) -> Content:
        """Open the content stored under `digest` as a readable handle.

        Parameters:
            algorithm: Algorithm name; must equal the store's algorithm name
                exactly (case-sensitive).
            digest: Digest in binary form.

        Raises:
            UnsupportedAlgorithmError: If `algorithm` is not the store's
                algorithm, whether or not `digest` exists.
            ContentNotFoundError: If the store is uninitialized, or `digest` is
                absent, not bytes-like, or has the wrong length.
        """
        name = algorithm.value if isinstance(algorithm, Algorithm) else algorithm

        if self._algorithm is None:
            raise ContentNotFoundError(name, digest)

        if name != self._algorithm.value:
            raise UnsupportedAlgorithmError(name)

        value = self.load(digest)
        if value is None:
            error = ContentNotFoundError(name, digest)
            logger.debug("%s", error)
            raise error

        return Content(value)

    def open_location(self, location: str) -> Content:
        """Open content by its location string.

        See [`memdigest.location`][memdigest.location] for the format.

        Raises:
            BadLocationError: If `location` cannot be parsed.
            UnsupportedAlgorithmError: If `location` names another algorithm.
            ContentNotFoundError: As for `open()`.
        """
        algorithm, digest = parse_location(location)
        return self.open(algorithm, digest)

    def location(self, digest: bytes) -> str:
        """Return the location string of `digest` in this store.

        Raises:
            UninitializedStoreError: If the store has no algorithm.
        """
        if self._algorithm is None:
            raise UninitializedStoreError()
        return format_location(self._algorithm, digest)

    def unmount(self) -> None:
        """Discard all stored content. Never fails.

        Digests stored before the unmount report not found afterwards. The
        store keeps its algorithm and accepts new content.
        """
        with self._lock.write_locked():
            dropped = len(self._data) if self._data is not None else 0
            self._data = None

        if dropped:
            logger.debug("Unmounted store, discarded %d entries", dropped)

    def exists(self, digest: bytes) -> bool:
        """Check whether content is stored under `digest`."""
        return self.load(digest) is not None

    def count(self) -> int:
        """Return the number of stored entries."""
        with self._lock.read_locked():
            return len(self._data) if self._data is not None else 0

    def size(self) -> int:
        """Return the total size in bytes of all stored content."""
        with self._lock.read_locked():
            if self._data is None:
                return 0
            return sum(len(value) for value in self._data.values())

    def digests(self) -> list[bytes]:
        """Return a snapshot of all stored digests, in no particular order."""
        with self._lock.read_locked():
            if self._data is None:
                return []
            return list(self._data)

    async def store_file(
        self,
        pathlike: PathLikeArg,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Read the file at `pathlike` into the store.

        The file is streamed and hashed chunk by chunk; the lock is only taken
        once the whole file has been read.

        Parameters:
            pathlike: **Absolute** path to file.
            progress_callback: optional callback to receive read progress as
                `(path, (bytes_read, total_bytes))`

        Returns:
            bytes: The digest of the file's content.

        Raises:
            ValueError: If `pathlike` is not absolute.
            UninitializedStoreError: If the store has no algorithm.
        """
        source_path = anyio.Path(pathlike)

        if not source_path.is_absolute():
            raise ValueError("`pathlike` to store must be absolute")

        if self._algorithm is None:
            raise UninitializedStoreError()

        reader = ProgressAsyncFileReader(source_path, progress_callback)
        digest, value = await self._digest_reader(reader)

        self._insert(digest, value)
        return digest

    async def store_dir(
        self,
        pathlike: PathLikeArg,
        recursive: bool = False,
        progress_callback: ProgressCallback | None = None,
    ) -> AsyncGenerator[tuple[str, bytes], None]:
        """Store all files from a directory.

        Parameters:
            pathlike: **Absolute** path to the directory to add.
            recursive: Find files recursively in `pathlike`.
                Defaults to `False`.
            progress_callback: optional callback to receive progress. Called
                separately for each file.

        Yields:
            (path, digest): For each stored file
        """
        async for source_file in find_files(anyio.Path(pathlike), recursive=recursive):
            digest = await self.store_file(
                source_file, progress_callback=progress_callback
            )
            yield (str(source_file), digest)

    async def _digest_reader(self, file: AsyncFileReader) -> tuple[bytes, bytes]:
        blksize = 4096
        file_size = None

        try:
            file_stat = await file.source_path.stat()
            blksize = file_stat.st_blksize or 4096
            file_size = file_stat.st_size
        except OSError:
            # the open() in read() will report a missing file
            pass

        if not file_size or file_size > 1.5 * 1024 * 1024:  # > 1.5 MiB
            # block-aligned size closest to 32MiB
            chunk_size = (32 * 1024 * 1024 // blksize) * blksize
            max_threads = blake3.AUTO
        else:
            chunk_size = blksize
            max_threads = 4

        hasher = self._algorithm.hasher(max_threads=max_threads)  # type: ignore[union-attr]
        chunks = []
        async for data in file.read(chunk_size):
            hasher.update(data)
            chunks.append(data)

        return hasher.digest(), b"".join(chunks)

    def _insert(self, digest: bytes, value: bytes) -> None:
        with self._lock.write_locked():
            if self._data is None:
                self._data = {}
            self._data[digest] = value

        logger.debug("Stored %d bytes under %s", len(value), digest.hex())

    def __contains__(self, digest: bytes) -> bool:
        """Return whether content is stored under `digest`."""
        return self.exists(digest)

    def __len__(self) -> int:
        return self.count()
