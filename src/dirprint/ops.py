"""Snapshot persistence and check operations for dirprint.

The fingerprinting core never persists anything itself. These helpers are
for callers (such as the CLI) that want to compare a fresh capture against
one taken in an earlier process.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Set, Union
import json
import logging
import os
import tempfile

from .core import Diff
from .errors import InvalidSnapshotError, SnapshotNotFoundError
from .ignore import IgnoreSpec
from .snapshot import Fingerprint, capture


logger = logging.getLogger(__name__)


# ============= Atomic Write Helpers =============

def _atomic_write_text(path: Path, text: str) -> None:
    """Atomically write text to file with crash safety.

    1. Writes to temp file with fsync to ensure content is on disk
    2. Atomic rename to target path (appears all-at-once)
    3. Fsync parent directory to ensure rename is durable

    Directory fsync is best-effort (not supported on Windows).

    Args:
        path: Target file path
        text: Text content to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory
    with tempfile.NamedTemporaryFile(
        mode="w",
        delete=False,
        dir=path.parent,
        prefix=f".{path.name}.tmp-",
        suffix=""
    ) as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
        tmp = Path(f.name)

    try:
        os.replace(tmp, path)

        try:
            flags = os.O_RDONLY
            if hasattr(os, "O_DIRECTORY"):
                flags |= os.O_DIRECTORY

            dirfd = os.open(str(path.parent), flags)
            try:
                os.fsync(dirfd)
            finally:
                os.close(dirfd)
        except OSError:
            # Expected on Windows or filesystems that don't support directory fsync
            logger.debug("Directory fsync not supported for %s", path.parent)
    except BaseException:
        # Clean up temp file on any error
        tmp.unlink(missing_ok=True)
        raise


# ============= Snapshot I/O =============

def save_snapshot(fingerprint: Fingerprint, path: Union[str, Path]) -> None:
    """Save a fingerprint as JSON atomically."""
    text = json.dumps(fingerprint.model_dump(), indent=2)
    _atomic_write_text(Path(path), text)


def load_snapshot(path: Union[str, Path]) -> Fingerprint:
    """Load a saved fingerprint and verify it against its own entries.

    Raises:
        SnapshotNotFoundError: If ``path`` does not exist
        InvalidSnapshotError: If the file is not a consistent fingerprint
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotNotFoundError(path)

    try:
        text = path.read_text()
    except OSError as e:
        raise InvalidSnapshotError(path, f"cannot read ({e.strerror or e})") from e

    try:
        fingerprint = Fingerprint.model_validate_json(text)
        fingerprint.verify()
    except ValueError as e:
        # pydantic.ValidationError is a ValueError too
        raise InvalidSnapshotError(path, str(e)) from e
    return fingerprint


def snapshot_excludes(root: Union[str, Path], snapshot_path: Union[str, Path]) -> Set[str]:
    """Exclusions that keep a snapshot file out of its own root's capture.

    Returns the snapshot's absolute path when it lies under ``root``,
    otherwise an empty set.
    """
    base = os.path.abspath(os.fspath(root))
    target = os.path.abspath(os.fspath(snapshot_path))
    if target.startswith(base.rstrip(os.sep) + os.sep):
        return {target}
    return set()


# ============= Check Operation =============

@dataclass(frozen=True)
class CheckResult:
    """Outcome of comparing a directory against its stored snapshot."""

    previous: Optional[Fingerprint]  # None when no snapshot existed
    current: Fingerprint
    diff: Diff
    saved: bool = False

    @property
    def changed(self) -> bool:
        """Check if the directory differs from the stored snapshot."""
        baseline = self.previous if self.previous is not None else Fingerprint()
        return self.current.changed(baseline)


def check(
    root: Union[str, Path],
    snapshot_path: Union[str, Path],
    excluded_subpaths: Iterable[Union[str, Path]] = (),
    ignore: Optional[IgnoreSpec] = None,
    update: bool = False,
) -> CheckResult:
    """
    Capture ``root`` and compare it with the snapshot at ``snapshot_path``.

    A missing snapshot is treated as an empty directory, so every file is
    reported as added. A snapshot file stored under ``root`` is left out of
    the capture. The diff is only computed when the root digests differ.

    Args:
        root: Directory to capture
        snapshot_path: Where the previous fingerprint is stored
        excluded_subpaths: Absolute paths to prune
        ignore: Optional ignore patterns
        update: Save the new fingerprint when it differs, or when no
            snapshot was stored yet

    Raises:
        EnumerationFailedError: If ``root`` cannot be listed
        InvalidSnapshotError: If the stored snapshot is corrupt
    """
    snapshot_path = Path(snapshot_path)
    previous = load_snapshot(snapshot_path) if snapshot_path.exists() else None
    baseline = previous if previous is not None else Fingerprint()

    excluded = set(os.fspath(p) for p in excluded_subpaths)
    excluded |= snapshot_excludes(root, snapshot_path)
    current = capture(root, excluded, ignore=ignore)

    changed = current.changed(baseline)
    diff = current.diff(baseline) if changed else Diff()

    saved = False
    if update and (changed or previous is None):
        save_snapshot(current, snapshot_path)
        saved = True
        logger.info("Saved snapshot %s (%s)", snapshot_path, diff.summary())

    return CheckResult(previous=previous, current=current, diff=diff, saved=saved)
