"""Settings for notegraph, read from an optional TOML file.

Example ``.notegraph.toml`` at the vault root::

    [notegraph]
    history_limit = 100
    match_any     = false
    suffixes      = [".md", ".markdown"]
    exclude_dirs  = [".git", ".obsidian", "templates"]
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from notegraph.errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = ".notegraph.toml"


@dataclass
class Settings:
    #: Maximum number of entries kept in the navigator's back history
    history_limit: int = 50
    #: Combine structured query predicates with "any" instead of "all"
    match_any: bool = False
    suffixes: list[str] = field(default_factory=lambda: [".md"])
    exclude_dirs: list[str] = field(default_factory=lambda: [".git", ".obsidian", ".trash"])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        table = data.get("notegraph", data)
        known = {f.name for f in fields(cls)}
        for key in sorted(set(table) - known):
            logger.warning("Ignoring unknown setting %r", key)

        settings = cls()
        for key in known & set(table):
            value = table[key]
            default = getattr(settings, key)
            if isinstance(default, bool):
                ok = isinstance(value, bool)
            elif isinstance(default, int):
                ok = isinstance(value, int) and not isinstance(value, bool) and value > 0
            else:
                ok = isinstance(value, list) and all(isinstance(item, str) for item in value)
            if not ok:
                raise ConfigError(f"Invalid value for setting '{key}': {value!r}", key=key)
            setattr(settings, key, value)
        return settings


def load_settings(path: Path | None) -> Settings:
    """Read settings from the TOML file at *path*.

    A missing file (or ``None``) yields the defaults.
    """
    if path is None or not Path(path).is_file():
        return Settings()
    with open(path, "rb") as fh:
        try:
            data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    return Settings.from_dict(data)


def settings_for_vault(vault_dir: Path) -> Settings:
    """Load ``.notegraph.toml`` from the root of *vault_dir*, if present."""
    return load_settings(Path(vault_dir) / SETTINGS_FILENAME)
