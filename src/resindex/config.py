"""
TOML-based config file loading for resindex.

Searches for `.resindex.toml`, `resindex.toml`, or `pyproject.toml [tool.resindex]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.

Example::

    target-path = "resources.list"
    output-dir = "build/classes"
    append-if-exists = false
    excludes = ["secret.txt"]

    [[resources]]
    directory = "src/main/resources"
    target-path = "static"
    includes = ["**/*.txt"]
    excludes = ["**/draft/**"]
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

from resindex.errors import ConfigError
from resindex.file_resolver.types import ResourceSource


@dataclass
class ResindexConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Output
    target_path: str | None = None
    output_dir: Path | None = None
    append_if_exists: bool | None = None
    excludes: list[str] | None = None
    # Resource discovery
    follow_symlinks: bool | None = None
    respect_gitignore: bool | None = None
    exclude_vcs: bool | None = None
    resources: list[ResourceSource] | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".resindex.toml", "resindex.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(ResindexConfig)}

_BOOL_FIELDS = {"append_if_exists", "follow_symlinks", "respect_gitignore", "exclude_vcs"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.resindex.toml` >
    `resindex.toml` > `pyproject.toml` (only if it has `[tool.resindex]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    # Only use pyproject.toml if it has [tool.resindex]
                    if _pyproject_has_resindex_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_resindex_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.resindex] section."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return "resindex" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> ResindexConfig:
    """
    Load a `ResindexConfig` from a TOML file. Supports both standalone
    `resindex.toml` / `.resindex.toml` and `pyproject.toml` (extracts
    `[tool.resindex]`). Relative directories are resolved against the
    directory holding the config file.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("resindex", {})

    return _parse_config_data(data, config_path.parent)


def _parse_config_data(data: dict[str, Any], base_dir: Path) -> ResindexConfig:
    """Parse a flat or sectioned TOML dict into ResindexConfig."""
    # Flatten sections: [output] and [discovery] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            continue
        if snake_key in _BOOL_FIELDS and not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be true or false, got {value!r}")
        if snake_key == "output_dir":
            value = base_dir / _expect_str(key, value)
        elif snake_key == "target_path":
            value = _expect_str(key, value)
        elif snake_key == "excludes":
            value = _expect_str_list(key, value)
        elif snake_key == "resources":
            value = _parse_resources(value, base_dir)
        mapped[snake_key] = value

    return ResindexConfig(**mapped)


def _parse_resources(value: Any, base_dir: Path) -> list[ResourceSource]:
    """Parse the `[[resources]]` array of tables."""
    if not isinstance(value, list):
        raise ConfigError("`resources` must be an array of tables")
    sources: list[ResourceSource] = []
    for i, item in enumerate(cast(list[Any], value)):
        if not isinstance(item, dict):
            raise ConfigError(f"resources[{i}] must be a table")
        table = cast(dict[str, Any], item)
        if "directory" not in table:
            raise ConfigError(f"resources[{i}] is missing `directory`")
        sources.append(
            ResourceSource(
                directory=base_dir / _expect_str("directory", table["directory"]),
                target_prefix=_expect_str("target-path", table.get("target-path", "")),
                includes=tuple(_expect_str_list("includes", table.get("includes", []))),
                excludes=tuple(_expect_str_list("excludes", table.get("excludes", []))),
            )
        )
    return sources


def _expect_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` must be a string, got {value!r}")
    return value


def _expect_str_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(
        isinstance(v, str) for v in cast(list[Any], value)
    ):
        raise ConfigError(f"`{key}` must be a list of strings, got {value!r}")
    return list(cast(list[str], value))


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: ResindexConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    Resource sources are not overridden: config sources come first, then any
    directories given on the command line.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(ResindexConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name == "resources":
            setattr(cli_opts, "resources", cfg_value + getattr(cli_opts, "resources", []))
            continue

        # Skip if CLI explicitly set this flag
        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
