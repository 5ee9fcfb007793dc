"""Core data models for dirprint.

Value types shared by the builder and the differ. Every model is frozen:
once a capture or a diff returns, its results can be handed to other
threads without copying or locking.
"""

from enum import Enum
from typing import FrozenSet, List, Optional
import time

from pydantic import BaseModel, Field


# ============= File Entries =============

class FileEntry(BaseModel):
    """Metadata digest of a single regular file.

    Ordered by relative path so a list of entries can be sorted directly.
    """

    model_config = {"frozen": True}

    relative_path: str  # POSIX-style, relative to the fingerprinted root
    hash: str  # 16 hex chars, see hashing.hash_file_metadata

    def __lt__(self, other: "FileEntry") -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.relative_path < other.relative_path


# ============= Change Detection =============

class ChangeType(str, Enum):
    """Type of change detected for a single path."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class FileChangeEvent(BaseModel):
    """Single file change, as reported to a watcher."""

    model_config = {"frozen": True}

    path: str
    change_type: ChangeType
    timestamp: float = Field(default_factory=time.time)


class Diff(BaseModel):
    """Paths that differ between two fingerprints.

    The three sets are pairwise disjoint. A Diff is built fresh for each
    comparison and keeps no reference to the fingerprints it came from.
    """

    model_config = {"frozen": True}

    added: FrozenSet[str] = Field(default_factory=frozenset)
    removed: FrozenSet[str] = Field(default_factory=frozenset)
    modified: FrozenSet[str] = Field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        """Check if there are no differences."""
        return not (self.added or self.removed or self.modified)

    @property
    def total_count(self) -> int:
        """Total number of changed paths."""
        return len(self.added) + len(self.removed) + len(self.modified)

    def to_events(self, timestamp: Optional[float] = None) -> List[FileChangeEvent]:
        """Flatten into change events sorted by path.

        Args:
            timestamp: Detection time for every event (default: now)
        """
        if timestamp is None:
            timestamp = time.time()

        events = []
        for paths, change_type in (
            (self.added, ChangeType.ADDED),
            (self.removed, ChangeType.DELETED),
            (self.modified, ChangeType.MODIFIED),
        ):
            for path in paths:
                events.append(FileChangeEvent(path=path, change_type=change_type, timestamp=timestamp))
        events.sort(key=lambda e: e.path)
        return events

    def summary(self) -> str:
        """Get human-readable summary."""
        if self.is_empty:
            return "No changes"
        parts = []
        if self.added:
            parts.append(f"+ {len(self.added)} added")
        if self.removed:
            parts.append(f"- {len(self.removed)} removed")
        if self.modified:
            parts.append(f"~ {len(self.modified)} modified")
        return ", ".join(parts)
