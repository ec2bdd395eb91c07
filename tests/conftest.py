"""Shared fixtures for memdigest tests."""

import pytest

from memdigest import Algorithm, DigestStore

# (content, hexadecimal SHA-1 digest)
SHA1_VECTORS = [
    ("Hello world!", "d3486ae9136e7856bc42212385ea797094475802"),
    ("😏😐👾🤖😈", "1af2b71ae04ddb01cc36cc615e64c950a50b04ff"),
    (
        "ا ب پ ت ث ج چ ح خ د ذ ر ز ژ س ش ص ض ط ظ ع غ ف ق ک گ ل م ن و ه ی",
        "8d92165a331ad6ba8ed1ad40507daf1122ce9830",
    ),
    ("apple", "d0be2dc421be4fcd0172e5afceea3970e2f3d940"),
    ("BANANA", "467b410f79bfca07dcd16fe38e3497c3f6d2db2b"),
    ("Cherry", "d6eee90533dffc1f8e6622f9f09af16ed051bf48"),
    ("dATE", "408ac259233f1b4f6aef295f7d4a7c43d61fb922"),
]

# SHA-1 digest that none of the vectors produce
NON_EXISTENT_DIGEST = bytes.fromhex("59db6ba4a6aff5ed3d980542daf41be65624a1e8")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store():
    """Empty SHA-1 store."""
    return DigestStore(Algorithm.SHA1)


@pytest.fixture
def populated_store(store):
    """SHA-1 store holding every vector."""
    for content, _ in SHA1_VECTORS:
        store.store(content.encode("utf-8"))
    return store
