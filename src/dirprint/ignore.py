"""Path exclusion for fingerprint captures.

Two mechanisms live here:

* ``nested_excludes`` computes the absolute subpaths an outer watch must
  prune so that a nested watched folder is not counted twice.
* ``IgnoreSpec`` holds optional gitignore-style patterns matched against
  root-relative POSIX paths.
"""

import os
from pathlib import Path
from typing import Iterable, Set, Union

from pathspec import GitIgnoreSpec


IGNORE_FILE = ".dirprintignore"


def nested_excludes(
    watch_path: Union[str, Path],
    other_watch_paths: Iterable[Union[str, Path]],
) -> Set[str]:
    """Find other watch roots strictly inside ``watch_path``.

    Args:
        watch_path: Root of the watch being captured
        other_watch_paths: Roots of every other active watch

    Returns:
        Absolute paths to pass as ``excluded_subpaths`` to capture
    """
    base = os.path.abspath(os.fspath(watch_path))
    prefix = base.rstrip(os.sep) + os.sep
    nested = set()
    for other in other_watch_paths:
        candidate = os.path.abspath(os.fspath(other))
        if candidate != base and candidate.startswith(prefix):
            nested.add(candidate)
    return nested


class IgnoreSpec:
    """Gitignore-style patterns for excluding files from a capture."""

    def __init__(self, patterns: Iterable[str] = ()):
        """Compile patterns, skipping blank lines and comments.

        Args:
            patterns: Gitignore-style pattern lines
        """
        self.patterns = []
        for line in patterns:
            line = line.strip()
            if line and not line.startswith("#"):
                self.patterns.append(line)

        # Compile patterns once for efficiency
        self.spec = GitIgnoreSpec.from_lines(self.patterns)

    @classmethod
    def from_root(cls, root: Path, extra: Iterable[str] = ()) -> "IgnoreSpec":
        """Load ``<root>/.dirprintignore`` if present, plus extra patterns."""
        patterns = []
        ignore_file = Path(root) / IGNORE_FILE
        if ignore_file.exists():
            patterns.extend(ignore_file.read_text().splitlines())
        patterns.extend(extra)
        return cls(patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def is_ignored(self, relpath: str) -> bool:
        """Check if a root-relative POSIX file path should be ignored."""
        return self.spec.match_file(relpath)

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a root-relative directory should be descended into.

        If a directory is ignored its whole subtree is pruned.
        """
        # Add trailing slash to match directory patterns
        if not dirpath.endswith("/"):
            dirpath = dirpath + "/"
        return not self.spec.match_file(dirpath)
