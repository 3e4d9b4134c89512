"""
TOML-based config file loading for resglob.

Searches for `.resglob.toml`, `resglob.toml`, or `pyproject.toml [tool.resglob]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class ResglobConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Resolution
    expressions: list[str] | None = None
    search_path: list[str] | None = None
    max_workers: int | None = None
    # Output
    format: str | None = None
    remote_timeout: float | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".resglob.toml", "resglob.toml", "pyproject.toml"]

# Mapping from TOML kebab-case keys to Python snake_case field names
_KEBAB_TO_SNAKE: dict[str, str] = {
    "search-path": "search_path",
    "max-workers": "max_workers",
    "remote-timeout": "remote_timeout",
}

_VALID_FIELDS = {f.name for f in fields(ResglobConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.resglob.toml` >
    `resglob.toml` > `pyproject.toml` (only if it has `[tool.resglob]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_resglob_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_resglob_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.resglob] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "resglob" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


class ConfigError(ValueError):
    """A config file that cannot be parsed or holds a value of the wrong type."""


def load_config(config_path: Path) -> ResglobConfig:
    """
    Load a `ResglobConfig` from a TOML file. Supports both standalone
    `resglob.toml` / `.resglob.toml` and `pyproject.toml` (extracts
    `[tool.resglob]`). TOML kebab-case keys are mapped to Python snake_case.

    Relative `search-path` entries are taken relative to the config file's directory.
    Raises `ConfigError` for invalid TOML or badly typed values.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("resglob", {})

    try:
        config = _parse_config_data(data)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from e
    if config.search_path is not None:
        base = config_path.resolve().parent
        config.search_path = [str(base / entry) for entry in config.search_path]
    return config


def _parse_config_data(data: dict[str, Any]) -> ResglobConfig:
    """Parse a flat or sectioned TOML dict into ResglobConfig."""
    # Flatten sections: [resolution] and [output] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = _KEBAB_TO_SNAKE.get(key, key.replace("-", "_"))
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = _check_value(key, snake_key, value)

    return ResglobConfig(**mapped)


def _check_value(key: str, field_name: str, value: Any) -> Any:
    """Check a config value's type. A single string is accepted where a list is expected."""
    if field_name in ("expressions", "search_path"):
        if isinstance(value, str):
            return [value]
        if isinstance(value, list) and all(
            isinstance(item, str) for item in cast(list[Any], value)
        ):
            return cast(list[str], value)
        raise ConfigError(f"`{key}` must be a string or a list of strings, got {value!r}")
    if field_name == "max_workers":
        # bool is a subclass of int.
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"`{key}` must be a positive integer, got {value!r}")
        return value
    if field_name == "remote_timeout":
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"`{key}` must be a positive number, got {value!r}")
        return float(value)
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` must be a string, got {value!r}")
    return value


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: ResglobConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(ResglobConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
