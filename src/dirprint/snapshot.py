"""Directory fingerprint capture.

A capture walks the tree once, stats every regular file and hashes only
its metadata. Entries are sorted before the root digest is computed, so
the result does not depend on the order the filesystem returns entries.

Captures are all-or-nothing. If the root cannot be listed an
``EnumerationFailedError`` is raised; any other ``OSError`` during the walk
(a file vanishing between listing and stat, an unreadable subdirectory)
propagates unchanged. A partial fingerprint is never returned.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union, TYPE_CHECKING

from pydantic import BaseModel

from .core import FileEntry
from .errors import EnumerationFailedError
from .hashing import EMPTY_ROOT_DIGEST, compute_root_digest, hash_file_metadata
from .ignore import IgnoreSpec

if TYPE_CHECKING:
    from .core import Diff


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Fingerprint(BaseModel):
    """
    Snapshot of a directory's file metadata, folded into one root digest.

    ``entries`` is always sorted by relative path and ``hash`` is a pure
    function of those entries. Comparing two fingerprints is a single
    string comparison; the detailed diff is only worth computing when the
    root digests differ.
    """

    model_config = {"frozen": True}

    entries: Tuple[FileEntry, ...] = ()
    hash: str = EMPTY_ROOT_DIGEST

    @classmethod
    def from_entries(cls, entries: Iterable[FileEntry]) -> "Fingerprint":
        """Sort entries and compute their root digest."""
        ordered = tuple(sorted(entries))
        root_hash = compute_root_digest((e.relative_path, e.hash) for e in ordered)
        return cls(entries=ordered, hash=root_hash)

    @classmethod
    def capture(
        cls,
        root: PathLike,
        excluded_subpaths: Iterable[PathLike] = (),
        ignore: Optional[IgnoreSpec] = None,
    ) -> "Fingerprint":
        """Capture a fingerprint of ``root``. See ``capture``."""
        return capture(root, excluded_subpaths, ignore=ignore)

    def changed(self, other: "Fingerprint") -> bool:
        """Cheap check: do the root digests differ?"""
        from .diffing import changed
        return changed(self, other)

    def diff(self, other: "Fingerprint") -> "Diff":
        """Detailed diff treating ``self`` as new and ``other`` as old."""
        from .diffing import compute_diff
        return compute_diff(self, other)

    def verify(self) -> None:
        """Check entry ordering and recompute the root digest.

        Raises:
            ValueError: If entries are unsorted, duplicated or do not
                match ``hash``
        """
        for prev, cur in zip(self.entries, self.entries[1:]):
            if not prev.relative_path < cur.relative_path:
                raise ValueError(
                    f"entries not strictly sorted at {cur.relative_path!r}"
                )
        expected = compute_root_digest((e.relative_path, e.hash) for e in self.entries)
        if expected != self.hash:
            raise ValueError(f"root hash {self.hash} does not match entries ({expected})")


def _is_excluded(path: str, excluded: Tuple[str, ...]) -> bool:
    return any(path.startswith(prefix) for prefix in excluded)


def _relative_path(path: str, root_path: str) -> str:
    """Strip the root prefix and one leading separator."""
    relative = path
    if relative.startswith(root_path):
        relative = relative[len(root_path):]
        if relative.startswith(os.sep):
            relative = relative[len(os.sep):]
    return relative.replace(os.sep, "/")


def capture(
    root: PathLike,
    excluded_subpaths: Iterable[PathLike] = (),
    ignore: Optional[IgnoreSpec] = None,
) -> Fingerprint:
    """Capture a fingerprint of a directory using stat only.

    Hidden entries (names starting with ``.``) are skipped and hidden
    directories are not descended. Only regular files are hashed; symlinks
    are neither hashed nor followed.

    Args:
        root: Directory to fingerprint
        excluded_subpaths: Absolute paths to prune entirely, matched as a
            prefix of each visited absolute path (e.g. nested watched folders)
        ignore: Optional gitignore-style patterns on root-relative paths

    Returns:
        Fingerprint of the current directory state

    Raises:
        EnumerationFailedError: If ``root`` cannot be listed
        OSError: If any file's metadata or any subdirectory cannot be read
    """
    root_path = os.path.abspath(os.fspath(root))
    excluded = tuple(os.path.abspath(os.fspath(p)) for p in excluded_subpaths)

    try:
        iterator = os.scandir(root_path)
    except OSError as e:
        raise EnumerationFailedError(root) from e

    entries: List[FileEntry] = []
    pending: List[str] = []

    while True:
        with iterator:
            for dirent in iterator:
                if dirent.name.startswith("."):
                    continue

                path = dirent.path
                if _is_excluded(path, excluded):
                    logger.debug("Pruned excluded path: %s", path)
                    continue

                relative_path = _relative_path(path, root_path)

                if dirent.is_dir(follow_symlinks=False):
                    if ignore is None or ignore.should_traverse(relative_path):
                        pending.append(path)
                    continue

                if not dirent.is_file(follow_symlinks=False):
                    continue

                if ignore is not None and ignore.is_ignored(relative_path):
                    continue

                stat = dirent.stat(follow_symlinks=False)
                entries.append(FileEntry(
                    relative_path=relative_path,
                    hash=hash_file_metadata(relative_path, stat.st_size, stat.st_mtime),
                ))

        if not pending:
            break
        iterator = os.scandir(pending.pop())

    fingerprint = Fingerprint.from_entries(entries)
    logger.debug(
        "Captured %s: %d files, root %s", root_path, len(fingerprint.entries), fingerprint.hash
    )
    return fingerprint
