"""Tests for hashing module."""

import hashlib
import struct

from dirprint.hashing import (
    EMPTY_ROOT_DIGEST,
    compute_root_digest,
    hash_file_metadata,
)


class TestMetadataHash:
    """Test per-file metadata hashing."""

    def test_fixed_length_hex(self):
        """Entry hash is 8 bytes rendered as 16 hex chars."""
        h = hash_file_metadata("src/model.py", 1024, 1700000000.5)
        assert len(h) == 16
        int(h, 16)  # valid hex

    def test_deterministic(self):
        """Same metadata, same hash."""
        assert hash_file_metadata("a.txt", 10, 1.5) == hash_file_metadata("a.txt", 10, 1.5)

    def test_byte_layout(self):
        """Path bytes, then int64 size, then float64 mtime, little-endian."""
        expected = hashlib.sha256(
            "dir/ä.txt".encode("utf-8") + struct.pack("<q", 42) + struct.pack("<d", 123.25)
        ).digest()[:8].hex()
        assert hash_file_metadata("dir/ä.txt", 42, 123.25) == expected

    def test_integer_mtime_hashed_as_float(self):
        """An integral mtime hashes the same as its float value."""
        assert hash_file_metadata("a", 1, 100) == hash_file_metadata("a", 1, 100.0)

    def test_each_field_affects_hash(self):
        """Path, size and mtime all contribute."""
        base = hash_file_metadata("a.txt", 10, 1000.0)
        assert hash_file_metadata("b.txt", 10, 1000.0) != base
        assert hash_file_metadata("a.txt", 11, 1000.0) != base
        assert hash_file_metadata("a.txt", 10, 1000.001) != base


class TestRootDigest:
    """Test root digest computation."""

    def test_empty_digest(self):
        """No entries hashes the empty string."""
        assert EMPTY_ROOT_DIGEST == hashlib.sha256(b"").hexdigest()[:32]
        assert EMPTY_ROOT_DIGEST == "e3b0c44298fc1c149afbf4c8996fb924"
        assert compute_root_digest([]) == EMPTY_ROOT_DIGEST

    def test_concatenation_format(self):
        """Entries contribute "path:hash" with no separator between them."""
        entries = [("a.txt", "0011223344556677"), ("b/c.txt", "8899aabbccddeeff")]
        expected = hashlib.sha256(
            b"a.txt:0011223344556677b/c.txt:8899aabbccddeeff"
        ).hexdigest()[:32]
        assert compute_root_digest(entries) == expected
        assert len(compute_root_digest(entries)) == 32

    def test_order_is_significant(self):
        """The digest folds entries in the order given; callers sort first."""
        entries = [("a", "1111111111111111"), ("b", "2222222222222222")]
        assert compute_root_digest(entries) != compute_root_digest(list(reversed(entries)))

    def test_entry_hash_change_changes_root(self):
        """Any per-entry change changes the root."""
        before = compute_root_digest([("a", "1111111111111111")])
        after = compute_root_digest([("a", "1111111111111112")])
        assert before != after

    def test_undecodable_name_hashes_raw_bytes(self):
        """Names that are not valid UTF-8 hash as their raw filesystem bytes."""
        name = b"bad\xffname.txt".decode("utf-8", "surrogateescape")
        expected = hashlib.sha256(
            b"bad\xffname.txt" + struct.pack("<q", 1) + struct.pack("<d", 2.0)
        ).digest()[:8].hex()

        assert hash_file_metadata(name, 1, 2.0) == expected
        assert len(compute_root_digest([(name, expected)])) == 32
