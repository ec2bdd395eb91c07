from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, AsyncGenerator, Callable, Iterator

import anyio


async def find_files(
    path: anyio.Path, recursive: bool = False
) -> AsyncGenerator[anyio.Path, None]:
    if recursive:
        async for sub_path in path.glob("**/*"):
            if await sub_path.is_file():
                yield sub_path
    else:
        async for sub_path in path.iterdir():
            if await sub_path.is_file():
                yield sub_path


class AsyncFileReader:
    def __init__(self, source: anyio.Path) -> None:
        self._source = source

    @property
    def source_path(self) -> anyio.Path:
        return self._source

    async def read(self, size: int = -1) -> AsyncGenerator[bytes, None]:
        async with await self._source.open("rb") as file:
            while True:
                data = await file.read(size)
                if not data:
                    break
                yield data


ProgressCallback = Callable[[str, tuple[int, int | None]], Any]


class ProgressAsyncFileReader(AsyncFileReader):
    def __init__(
        self,
        source: anyio.Path,
        progress_callback: ProgressCallback | None,
    ):
        super().__init__(source)
        self._progress_callback = progress_callback

    async def read(self, size: int = -1) -> AsyncGenerator[bytes, None]:
        total_bytes = None

        if self._progress_callback is not None:
            try:
                stat = await self.source_path.stat()
                total_bytes = stat.st_size
            except OSError:
                # progress without a total is still useful
                pass

        curr_bytes = 0
        async for data in super().read(size):
            if self._progress_callback is not None:
                curr_bytes += len(data)
                self._progress_callback(
                    str(self.source_path), (curr_bytes, total_bytes)
                )
            yield data


class RWLock:
    """Reader/writer lock: any number of readers, or exactly one writer.

    Once a writer is waiting, new readers queue behind it so writers are not
    starved by a steady stream of reads. Not reentrant.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
