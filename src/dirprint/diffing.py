"""Diff computation logic - stable module for comparing fingerprints."""

from .core import Diff
from .snapshot import Fingerprint


def changed(a: Fingerprint, b: Fingerprint) -> bool:
    """Return whether two fingerprints represent different directory states.

    O(1): the per-file work was already paid during capture.
    """
    return a.hash != b.hash


def compute_diff(new: Fingerprint, old: Fingerprint) -> Diff:
    """
    Compute the paths that differ between two fingerprints.

    Args:
        new: The more recent capture.
        old: The capture to compare against.

    Returns:
        Diff with added, removed and modified relative paths.

    Note:
        Only worth calling once ``changed`` reports True; identical
        fingerprints simply give an empty Diff.
    """
    old_map = {entry.relative_path: entry.hash for entry in old.entries}
    new_map = {entry.relative_path: entry.hash for entry in new.entries}

    old_paths = set(old_map)
    new_paths = set(new_map)

    return Diff(
        added=frozenset(new_paths - old_paths),
        removed=frozenset(old_paths - new_paths),
        modified=frozenset(
            path for path in old_paths & new_paths if old_map[path] != new_map[path]
        ),
    )
