# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import ConfigError, ProjectConfig
from .constants import PROJECT_CONFIG_FILENAME, PYPROJECT_SECTION_KEY, PYPROJECT_TOOL_KEY

LOGGER = logging.getLogger(__name__)


class TomlConfigSource:
    """Load configuration data from a TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self.path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self.path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self.path} must be a table")
        return dict(data)

    def describe(self) -> str:
        return f"TOML file ({self.name})"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.trex]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class ConfigLoader:
    """Apply layered configuration sources, later sources winning."""

    def __init__(self, *, project_root: Path, sources: Sequence[TomlConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)
        self._project_root = project_root.resolve()

    @classmethod
    def for_root(cls, project_root: Path) -> ConfigLoader:
        """Build a loader reading ``pyproject.toml`` then ``.trex.toml`` under ``project_root``."""

        root = project_root.resolve()
        return cls(
            project_root=root,
            sources=[
                PyProjectConfigSource(root / "pyproject.toml"),
                TomlConfigSource(root / PROJECT_CONFIG_FILENAME),
            ],
        )

    def load(self) -> ProjectConfig:
        merged: dict[str, Any] = {}
        for source in self._sources:
            if not (fragment := source.load()):
                continue
            LOGGER.debug("applying %s", source.describe())
            merged.update(fragment)
        try:
            config = ProjectConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid trex configuration: {exc}") from exc
        if config.source is not None and not config.source.is_absolute():
            config.source = self._project_root / config.source
        return config


def load_project_config(project_root: Path) -> ProjectConfig:
    """Load configuration for ``project_root`` using the default sources."""
    return ConfigLoader.for_root(project_root).load()


__all__ = [
    "ConfigLoader",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_project_config",
]
