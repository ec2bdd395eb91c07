"""Tests for reading files into a store."""

import pytest
from blake3 import blake3

from memdigest import Algorithm, DigestStore, UninitializedStoreError


@pytest.mark.anyio
async def test_store_file(store, tmp_path):
    path = tmp_path / "hello.txt"
    path.write_bytes(b"Hello world!")

    digest = await store.store_file(path)

    assert digest.hex() == "d3486ae9136e7856bc42212385ea797094475802"
    assert store.load(digest) == b"Hello world!"


@pytest.mark.anyio
async def test_store_file_large_blake3(tmp_path):
    store = DigestStore(Algorithm.BLAKE3)
    data = bytes(range(256)) * 8192  # 2 MiB, above the small-file threshold
    path = tmp_path / "large.bin"
    path.write_bytes(data)

    digest = await store.store_file(path)

    assert digest == blake3(data).digest()
    assert store.size() == len(data)


@pytest.mark.anyio
async def test_store_file_reports_progress(store, tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"x" * 10000)
    progress = []

    await store.store_file(path, progress_callback=lambda p, state: progress.append((p, state)))

    assert progress
    assert all(p == str(path) for p, _ in progress)
    assert progress[-1][1] == (10000, 10000)


@pytest.mark.anyio
async def test_store_file_requires_absolute_path(store):
    with pytest.raises(ValueError):
        await store.store_file("relative/file.txt")


@pytest.mark.anyio
async def test_store_file_uninitialized(tmp_path):
    path = tmp_path / "hello.txt"
    path.write_bytes(b"Hello world!")

    with pytest.raises(UninitializedStoreError):
        await DigestStore().store_file(path)


@pytest.mark.anyio
async def test_store_file_missing(store, tmp_path):
    with pytest.raises(FileNotFoundError):
        await store.store_file(tmp_path / "missing.txt")


@pytest.mark.anyio
async def test_store_dir(store, tmp_path):
    (tmp_path / "a.txt").write_bytes(b"apple")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "b.txt").write_bytes(b"BANANA")

    flat = {path: digest async for path, digest in store.store_dir(tmp_path)}
    assert flat == {
        str(tmp_path / "a.txt"): bytes.fromhex("d0be2dc421be4fcd0172e5afceea3970e2f3d940")
    }

    recursive = {
        path: digest async for path, digest in store.store_dir(tmp_path, recursive=True)
    }
    assert set(recursive) == {str(tmp_path / "a.txt"), str(tmp_path / "nested" / "b.txt")}
    assert store.load(recursive[str(tmp_path / "nested" / "b.txt")]) == b"BANANA"
