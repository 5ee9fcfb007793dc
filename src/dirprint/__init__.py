"""Directory fingerprinting: cheap change detection from file metadata."""

from .constants import DIRPRINT_VERSION as __version__
from .core import ChangeType, Diff, FileChangeEvent, FileEntry
from .diffing import changed, compute_diff
from .errors import (
    ConfigError,
    DirprintError,
    EnumerationFailedError,
    InvalidSnapshotError,
    SnapshotError,
    SnapshotNotFoundError,
)
from .hashing import EMPTY_ROOT_DIGEST, compute_root_digest, hash_file_metadata
from .ignore import IgnoreSpec, nested_excludes
from .snapshot import Fingerprint, capture


__all__ = [
    "capture",
    "changed",
    "compute_diff",
    "compute_root_digest",
    "hash_file_metadata",
    "nested_excludes",
    "ChangeType",
    "Diff",
    "FileChangeEvent",
    "FileEntry",
    "Fingerprint",
    "IgnoreSpec",
    "EMPTY_ROOT_DIGEST",
    "ConfigError",
    "DirprintError",
    "EnumerationFailedError",
    "InvalidSnapshotError",
    "SnapshotError",
    "SnapshotNotFoundError",
]
