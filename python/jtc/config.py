"""Configuration for directory checks.

Settings come from defaults, then an optional JSON or TOML file, then
command line flags.  A ``pyproject.toml`` is read from its ``[tool.jtc]``
table::

    [tool.jtc]
    directory = "fixtures"
    max_alias_hops = 32
    strict = true
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from .errors import ConfigError
from .validator import DEFAULT_MAX_ALIAS_HOPS

DEFAULT_TYPEDEF_SUFFIX = ".typedef.json"
DEFAULT_DATA_SUFFIX = ".json"
OUTPUT_FORMATS = ("human", "json")

# Every alias hop is a Python stack frame.
MAX_ALIAS_HOPS_CEILING = 256


@dataclass(frozen=True, slots=True)
class CheckConfig:
    directory: str = "."
    typedef_suffix: str = DEFAULT_TYPEDEF_SUFFIX
    data_suffix: str = DEFAULT_DATA_SUFFIX
    max_alias_hops: int = DEFAULT_MAX_ALIAS_HOPS
    strict: bool = False
    output_format: str = "human"

    def __post_init__(self) -> None:
        if not self.typedef_suffix:
            raise ConfigError("typedef_suffix must not be empty")
        if not self.data_suffix:
            raise ConfigError("data_suffix must not be empty")
        if self.typedef_suffix == self.data_suffix:
            raise ConfigError("typedef_suffix and data_suffix must differ")
        if not 1 <= self.max_alias_hops <= MAX_ALIAS_HOPS_CEILING:
            raise ConfigError(f"max_alias_hops must be between 1 and {MAX_ALIAS_HOPS_CEILING}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"Unsupported output format: {self.output_format}")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "CheckConfig":
        """Build a config from a mapping, rejecting unknown keys."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        values: Dict[str, Any] = {}
        for key in ("directory", "typedef_suffix", "data_suffix", "output_format"):
            if key in config:
                values[key] = str(config[key])
        if "max_alias_hops" in config:
            hops = config["max_alias_hops"]
            if isinstance(hops, bool) or not isinstance(hops, int):
                raise ConfigError("max_alias_hops must be an integer")
            values["max_alias_hops"] = hops
        if "strict" in config:
            if not isinstance(config["strict"], bool):
                raise ConfigError("strict must be a boolean")
            values["strict"] = config["strict"]
        return cls(**values)

    @classmethod
    def from_config_file(cls, path: str | Path) -> "CheckConfig":
        return cls.from_config(load_config_file(path))

    def with_overrides(self, **overrides: Any) -> "CheckConfig":
        """Return a copy with every non-``None`` override applied."""

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Load a configuration mapping from JSON or TOML."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in {".json", ""}:
            data = json.loads(text)
        elif suffix == ".toml":
            data = tomllib.loads(text)
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("jtc", {})
        else:
            raise ConfigError(f"Unsupported config extension: {path.suffix}")
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a table/object")
    return data


__all__ = [
    "CheckConfig",
    "DEFAULT_DATA_SUFFIX",
    "DEFAULT_TYPEDEF_SUFFIX",
    "MAX_ALIAS_HOPS_CEILING",
    "OUTPUT_FORMATS",
    "load_config_file",
]
