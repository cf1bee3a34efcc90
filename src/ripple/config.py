"""Configuration management for Ripple."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ripple.exceptions import ConfigError

RIPPLE_DIR = ".ripple"
CONFIG_FILE = "config.json"

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")


class ResolverConfig(BaseModel):
    """Import resolution settings."""

    # prefix -> target directory (relative targets are taken from the project root)
    aliases: dict[str, str] = Field(default_factory=lambda: {"@/": "src/"})
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    root_path: str = "."
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)

    @property
    def root(self) -> Path:
        return Path(os.path.normpath(os.path.abspath(self.root_path)))


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .ripple directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / RIPPLE_DIR).is_dir():
            return current
        current = current.parent
    if (current / RIPPLE_DIR).is_dir():
        return current
    return None


def get_ripple_dir(root: Path) -> Path:
    """Get the .ripple directory for a project root."""
    return root / RIPPLE_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .ripple/config.json.

    Falls back to the defaults, rooted at `root`, when no file exists.
    """
    config_path = get_ripple_dir(root) / CONFIG_FILE
    if not config_path.exists():
        return ProjectConfig(name=root.name, root_path=str(root))

    try:
        data = json.loads(config_path.read_text())
        config = ProjectConfig(**data)
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    # A config file always describes the directory it lives in
    config.root_path = str(root)
    return config


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .ripple/config.json."""
    ripple_dir = get_ripple_dir(root)
    ripple_dir.mkdir(parents=True, exist_ok=True)
    config_path = ripple_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'resolver.extensions')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {e}") from e


def parse_alias_option(value: str) -> tuple[str, str]:
    """Parse a ``PREFIX=DIR`` alias given on the command line."""
    prefix, sep, target = value.partition("=")
    if not sep or not prefix or not target:
        raise ConfigError(f"Invalid alias '{value}', expected PREFIX=DIR")
    return prefix, target
