"""Custom exceptions for dirprint.

Capture failures on the root directory get a dedicated type so callers can
treat "directory state unknown this cycle" as a policy decision. Failures
while reading a single file's metadata mid-walk are left as the original
``OSError``; they abort the whole capture.
"""

from pathlib import Path
from typing import Union


class DirprintError(RuntimeError):
    """Base class for all dirprint errors."""
    pass


# Capture Errors
class EnumerationFailedError(DirprintError):
    """The root directory could not be enumerated."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        super().__init__(f"Failed to enumerate directory: {root}")


# Snapshot Errors
class SnapshotError(DirprintError):
    """Base class for persisted snapshot errors."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """No snapshot file at the given path."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Snapshot not found: {path}")


class InvalidSnapshotError(SnapshotError):
    """Snapshot file is unreadable or inconsistent with its entries."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid snapshot {path}: {reason}")


# Configuration Errors
class ConfigError(DirprintError):
    """Malformed configuration file."""
    pass
