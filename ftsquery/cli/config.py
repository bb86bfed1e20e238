"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import yaml

from ftsquery.condition import SearchOptions


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "ftsquery" / "config.yaml")

        # Project config
        paths.append(Path(".ftsquery.yaml"))
        paths.append(Path("ftsquery.yaml"))

        return paths


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Default locations are merged in order, then ``path`` if given, then the
    ``FTSQUERY_OPTIONS`` and ``FTSQUERY_STRICT`` environment variables.
    """
    config: dict[str, Any] = {}

    paths = [p for p in Config.get_config_paths() if p.exists()]
    if path is not None:
        paths.append(path)
    for config_path in paths:
        config = _deep_merge(config, Config.from_file(config_path))

    env_overrides: dict[str, Any] = {}
    if options := os.environ.get("FTSQUERY_OPTIONS"):
        env_overrides["options"] = [
            name.strip() for name in options.split(",") if name.strip()
        ]
    if strict := os.environ.get("FTSQUERY_STRICT"):
        env_overrides["strict"] = strict.strip().lower() in ("1", "true", "yes", "on")

    return _deep_merge(config, env_overrides)


def resolve_options(config: dict[str, Any]) -> SearchOptions:
    """Build search options from a configuration mapping.

    Without an ``options`` key the defaults apply; ``strict: true`` adds
    every throw option.
    """
    names = config.get("options")
    if names is None:
        options = SearchOptions.DEFAULT
    elif isinstance(names, str):
        options = SearchOptions.from_names(names.split(","))
    elif isinstance(names, list):
        options = SearchOptions.from_names(str(name) for name in names)
    else:
        raise ValueError(f"Invalid options in config: {names!r}")

    if config.get("strict"):
        options |= SearchOptions.THROW_ON_ALL
    return options


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
