"""Constants for dirprint."""

# Per-root metadata directory (hidden, so never part of a fingerprint)
DIRPRINT_DIR = ".dirprint"

# Files inside DIRPRINT_DIR
CONFIG_FILE = "config.yaml"
SNAPSHOT_FILE = "snapshot.json"

# Digest truncation, in bytes
ENTRY_DIGEST_BYTES = 8
ROOT_DIGEST_BYTES = 16

# Version
DIRPRINT_VERSION = "0.1.0"
