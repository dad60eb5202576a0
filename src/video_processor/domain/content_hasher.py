"""Single-pass content hashing of downloaded streams."""

import hashlib
from collections.abc import Iterable
from typing import BinaryIO


def hash_while_writing(destination: BinaryIO, chunks: Iterable[bytes]) -> str:
    """
    Writes a chunk stream to a sink while computing its SHA-256 digest.

    The stream is consumed once and never held in memory as a whole.

    Args:
        destination: Writable binary sink.
        chunks: Byte chunks in stream order.

    Returns:
        The lowercase hexadecimal digest of every byte written.
    """
    digest = hashlib.sha256()
    for chunk in chunks:
        destination.write(chunk)
        digest.update(chunk)
    return digest.hexdigest()
