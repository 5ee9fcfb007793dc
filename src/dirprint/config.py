"""Per-root configuration helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

import yaml

from .constants import CONFIG_FILE, DIRPRINT_DIR, SNAPSHOT_FILE
from .errors import ConfigError
from .ignore import IgnoreSpec


@dataclass
class DirprintConfig:
    """Capture settings for one fingerprinted root."""

    exclude: List[str] = field(default_factory=list)  # relative to root, or absolute
    ignore: List[str] = field(default_factory=list)  # gitignore-style patterns
    snapshot: str = f"{DIRPRINT_DIR}/{SNAPSHOT_FILE}"

    def excluded_paths(self, root: Path) -> Set[str]:
        """Resolve ``exclude`` entries to absolute paths under ``root``."""
        base = os.path.abspath(os.fspath(root))
        return {os.path.abspath(os.path.join(base, p)) for p in self.exclude}

    def ignore_spec(self, root: Optional[Path] = None) -> Optional[IgnoreSpec]:
        """Build an IgnoreSpec, or None when there is nothing to ignore.

        With ``root`` given, patterns from ``<root>/.dirprintignore`` are
        included as well.
        """
        spec = IgnoreSpec.from_root(root, self.ignore) if root is not None else IgnoreSpec(self.ignore)
        return spec if spec else None

    def snapshot_path(self, root: Path) -> Path:
        """Absolute path of the stored snapshot for ``root``."""
        return Path(root) / self.snapshot


def config_path(root: Path) -> Path:
    return Path(root) / DIRPRINT_DIR / CONFIG_FILE


def load_config(root: Path) -> DirprintConfig:
    """Load configuration from <root>/.dirprint/config.yaml if present."""

    cfg_path = config_path(root)
    if not cfg_path.exists():
        return DirprintConfig()

    try:
        data = yaml.safe_load(cfg_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {cfg_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path} must contain a mapping")

    exclude = data.get("exclude", [])
    ignore = data.get("ignore", [])
    snapshot = data.get("snapshot", f"{DIRPRINT_DIR}/{SNAPSHOT_FILE}")

    for key, value in (("exclude", exclude), ("ignore", ignore)):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{cfg_path}: '{key}' must be a list of strings")
    if not isinstance(snapshot, str):
        raise ConfigError(f"{cfg_path}: 'snapshot' must be a string")

    return DirprintConfig(exclude=exclude, ignore=ignore, snapshot=snapshot)
