# -*- coding: utf-8 -*-
"""memdigest is an in-memory content-addressable storage (CAS). What does that
mean? Simply, that memdigest keeps content in memory under the digest of the
content's own bytes, and hands it back to anyone holding that digest.

Typical use cases for this kind of store are ones where:

- Content is written once and never changes.
- It's desirable to have no duplicate content.
- The store is one of several mounted by a content-addressable virtual file
  system, and may be swapped for, or chained with, a persistent one.
"""

from .__meta__ import __version__
from .algorithms import Algorithm
from .content import Content
from .errors import (
    BadLocationError,
    ContentNotFoundError,
    MemDigestError,
    StoreAlreadyInitializedError,
    UninitializedStoreError,
    UnsupportedAlgorithmError,
)
from .location import format_location, parse_location
from .memdigest import DigestStore
from .mount_point import MountPoint, make_store, store_names

__all__ = (
    "__version__",
    "Algorithm",
    "BadLocationError",
    "Content",
    "ContentNotFoundError",
    "DigestStore",
    "MemDigestError",
    "MountPoint",
    "StoreAlreadyInitializedError",
    "UninitializedStoreError",
    "UnsupportedAlgorithmError",
    "format_location",
    "make_store",
    "parse_location",
    "store_names",
)
