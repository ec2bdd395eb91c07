# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "memdigest"
__summary__ = "An in-memory content-addressable storage."
__url__ = "https://github.com/reiver/memdigest"

__version__ = "0.1.0"

__install_requires__ = ["anyio", "blake3"]
__tests_require__ = ["pytest", "tox"]

__license__ = "MIT License"
