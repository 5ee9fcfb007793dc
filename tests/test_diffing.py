"""Tests for comparison and diffing logic."""

import pytest
from pydantic import ValidationError

from dirprint.core import ChangeType, Diff, FileEntry
from dirprint.diffing import changed, compute_diff
from dirprint.snapshot import Fingerprint


def fp(**files):
    """Build a fingerprint from path=hash keyword pairs (dots as __)."""
    return Fingerprint.from_entries(
        FileEntry(relative_path=path.replace("__", "."), hash=h) for path, h in files.items()
    )


OLD = fp(a__txt="1111111111111111", b__txt="2222222222222222", c__txt="3333333333333333")
NEW = fp(a__txt="1111111111111111", b__txt="9999999999999999", d__txt="4444444444444444")


class TestComparator:
    """Test root hash comparison."""

    def test_same_entries_unchanged(self):
        """Fingerprints with identical entries are not changed."""
        again = fp(c__txt="3333333333333333", b__txt="2222222222222222", a__txt="1111111111111111")
        assert not changed(OLD, again)
        assert not OLD.changed(again)

    def test_different_entries_changed(self):
        """Any entry difference changes the root hash."""
        assert changed(OLD, NEW)
        assert NEW.changed(OLD)
        assert OLD.changed(NEW)

    def test_compares_root_hash_only(self):
        """The comparator looks at the root hash, nothing else."""
        forged = Fingerprint(entries=(), hash=OLD.hash)
        assert not forged.changed(OLD)


class TestDiffer:
    """Test detailed diff computation."""

    def test_added_removed_modified(self):
        """Each kind of change lands in its own set."""
        diff = compute_diff(NEW, OLD)

        assert diff.added == {"d.txt"}
        assert diff.removed == {"c.txt"}
        assert diff.modified == {"b.txt"}
        assert diff.total_count == 3
        assert not diff.is_empty

    def test_method_matches_function(self):
        """Fingerprint.diff treats self as new and the argument as old."""
        assert NEW.diff(OLD) == compute_diff(NEW, OLD)
        assert OLD.diff(NEW).added == {"c.txt"}

    def test_sets_are_disjoint(self):
        """A path appears in at most one set."""
        diff = compute_diff(NEW, OLD)
        assert not (diff.added & diff.removed)
        assert not (diff.added & diff.modified)
        assert not (diff.removed & diff.modified)

    def test_idempotent(self):
        """Diffing a fingerprint with itself is empty."""
        diff = OLD.diff(OLD)
        assert diff.is_empty
        assert diff.total_count == 0

    def test_against_empty(self):
        """Everything is added relative to an empty fingerprint."""
        diff = OLD.diff(Fingerprint())
        assert diff.added == {"a.txt", "b.txt", "c.txt"}
        assert diff.removed == set()

    def test_diff_is_frozen(self):
        """Diffs cannot be mutated."""
        diff = compute_diff(NEW, OLD)
        with pytest.raises(ValidationError):
            diff.added = frozenset()


class TestDiffReporting:
    """Test Diff helpers used for display and watchers."""

    def test_to_events(self):
        """Events are sorted by path with removed reported as deleted."""
        events = compute_diff(NEW, OLD).to_events(timestamp=123.0)

        assert [(e.path, e.change_type) for e in events] == [
            ("b.txt", ChangeType.MODIFIED),
            ("c.txt", ChangeType.DELETED),
            ("d.txt", ChangeType.ADDED),
        ]
        assert all(e.timestamp == 123.0 for e in events)

    def test_to_events_default_timestamp(self):
        """Without a timestamp the detection time is now."""
        events = Diff(added={"x"}).to_events()
        assert events[0].timestamp > 0

    def test_summary(self):
        """Summary lists only non-empty categories."""
        assert Diff().summary() == "No changes"
        assert Diff(added={"a", "b"}).summary() == "+ 2 added"
        assert compute_diff(NEW, OLD).summary() == "+ 1 added, - 1 removed, ~ 1 modified"
