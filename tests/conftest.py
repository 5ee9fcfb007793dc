"""Shared test fixtures and utilities."""

import os
from pathlib import Path

import pytest


# Fixed mtime so hashes never depend on clock resolution
DEFAULT_MTIME = 1_700_000_000.0


def write(path: Path, content: str = "test content", mtime: float = DEFAULT_MTIME) -> Path:
    """Write a file (creating parents) and pin its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def write_file(tmp_path):
    """Factory fixture to write files relative to tmp_path."""
    def _write(relpath: str, content: str = "test content", mtime: float = DEFAULT_MTIME):
        return write(tmp_path / relpath, content, mtime)
    return _write


@pytest.fixture
def make_tree():
    """Factory fixture to populate a directory from a {relpath: content} mapping."""
    def _make(root: Path, files: dict, order=None):
        root.mkdir(parents=True, exist_ok=True)
        for relpath in (order or files):
            write(root / relpath, files[relpath])
        return root
    return _make


@pytest.fixture
def sample_files():
    """Common project layout."""
    return {
        "file1.txt": "content1",
        "file2.txt": "content2",
        "src/main.py": "print('hello')",
        "src/pkg/util.py": "x = 1",
        "data/data.csv": "a,b,c\n1,2,3",
    }
