"""Settings for the ``rationals`` command line, read from a TOML file.

The file holds a single ``[rationals]`` table::

    [rationals]
    max_terms = 50
    separator = " "
    verbose = true
"""
from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

TABLE = "rationals"


@dataclass(frozen=True)
class Settings:
    max_terms: int = 20
    separator: str = ", "
    verbose: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.max_terms, int) or isinstance(self.max_terms, bool):
            raise ValueError(f"max_terms must be an integer, got {self.max_terms!r}")
        if self.max_terms < 1:
            raise ValueError("max_terms must be >= 1")
        if not isinstance(self.separator, str):
            raise ValueError(f"separator must be a string, got {self.separator!r}")
        if not isinstance(self.verbose, bool):
            raise ValueError(f"verbose must be a boolean, got {self.verbose!r}")

    def override(self, **changes: Any) -> "Settings":
        """Return a copy with every non-``None`` value in *changes* applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def settings_from_mapping(values: Dict[str, Any]) -> Settings:
    known = {field.name for field in fields(Settings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown settings in [{TABLE}]: {', '.join(unknown)}")
    return Settings(**values)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load :class:`Settings` from *path*, or return the defaults when it is ``None``."""
    if path is None:
        return Settings()
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with config_path.open("rb") as handle:
        data = tomllib.load(handle)
    table = data.get(TABLE, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{TABLE}] in {config_path} must be a table")
    return settings_from_mapping(table)


__all__ = ["Settings", "load_settings", "settings_from_mapping"]
