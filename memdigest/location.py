"""Textual locations of stored content.

A location names content of a store independently of any host object:

    memdigest:<algorithm-slug>:hexadecimal(<hex-digest>)/0

for example `memdigest:sha-1:hexadecimal(d3486ae9136e7856bc42212385ea797094475802)/0`.
The digest is always hexadecimal; raw digest bytes are never embedded.
"""

from __future__ import annotations

import binascii

from .algorithms import Algorithm
from .errors import BadLocationError

SCHEME = "memdigest:"
ENCODING_OPEN = ":hexadecimal("
SUFFIX = ")/0"


def parse_location(location: str) -> tuple[Algorithm, bytes]:
    """Split `location` into its algorithm and raw digest bytes.

    The digest length is not checked here; a digest of the wrong length is
    reported as not found by the store.

    Raises:
        BadLocationError: If `location` is not a well-formed memdigest location.
    """
    if not isinstance(location, str):
        raise BadLocationError(repr(location))

    if not location.startswith(SCHEME) or not location.endswith(SUFFIX):
        raise BadLocationError(location)

    body = location[len(SCHEME) : len(location) - len(SUFFIX)]

    slug, sep, digest_hex = body.partition(ENCODING_OPEN)
    if not sep:
        raise BadLocationError(location)

    try:
        algorithm = Algorithm.from_slug(slug)
    except ValueError:
        raise BadLocationError(location) from None

    try:
        # unhexlify rejects whitespace and odd lengths, unlike bytes.fromhex
        digest = binascii.unhexlify(digest_hex)
    except ValueError:
        raise BadLocationError(location) from None

    return algorithm, digest


def format_location(algorithm: Algorithm, digest: bytes) -> str:
    """Build the location string for `digest` under `algorithm`."""
    return f"{SCHEME}{Algorithm(algorithm).slug}{ENCODING_OPEN}{bytes(digest).hex()}{SUFFIX}"
