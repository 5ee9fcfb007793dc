"""Hashing utilities for deterministic directory fingerprints.

This module provides metadata-only file hashing and the root digest that
folds per-file hashes into one value. No file contents are ever read, so
the cost of a capture scales with the number of files, not their size.

Metadata-only tradeoff: a file whose contents change while its size and
modification time stay the same (clock skew, some sync tools restoring
mtimes) produces the same entry hash and is invisible to fingerprinting.
"""

from typing import Iterable, Tuple
import hashlib
import struct

from .constants import ENTRY_DIGEST_BYTES, ROOT_DIGEST_BYTES


# Raw machine encodings: 64-bit signed int and IEEE-754 double, little-endian
_SIZE_FORMAT = "<q"
_MTIME_FORMAT = "<d"


def hash_file_metadata(relative_path: str, size: int, mtime: float) -> str:
    """Compute the entry hash for one file's metadata.

    Args:
        relative_path: Path relative to the fingerprinted root
        size: File size in bytes
        mtime: Modification time in seconds since the epoch

    Returns:
        16-character hex digest (first 8 bytes of SHA256)

    Example:
        >>> len(hash_file_metadata("src/model.py", 1024, 1700000000.5))
        16
    """
    h = hashlib.sha256()
    # surrogateescape restores the raw bytes of names that are not valid UTF-8
    h.update(relative_path.encode("utf-8", "surrogateescape"))
    h.update(struct.pack(_SIZE_FORMAT, size))
    h.update(struct.pack(_MTIME_FORMAT, float(mtime)))
    return h.digest()[:ENTRY_DIGEST_BYTES].hex()


def compute_root_digest(entries: Iterable[Tuple[str, str]]) -> str:
    """Compute the root digest from ordered (relative_path, hash) pairs.

    Callers must pass entries already sorted by relative path; the digest
    depends on the order it is given. Each pair contributes the string
    ``"relative_path:hash"`` with no further separator.

    Args:
        entries: (relative_path, entry_hash) pairs in sorted order

    Returns:
        32-character hex digest (first 16 bytes of SHA256)
    """
    h = hashlib.sha256()
    for relative_path, entry_hash in entries:
        h.update(f"{relative_path}:{entry_hash}".encode("utf-8", "surrogateescape"))
    return h.digest()[:ROOT_DIGEST_BYTES].hex()


# Root digest of a directory with no regular files
EMPTY_ROOT_DIGEST = compute_root_digest(())


__all__ = [
    "hash_file_metadata",
    "compute_root_digest",
    "EMPTY_ROOT_DIGEST",
]
