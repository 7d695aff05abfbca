# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence and traceability."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import CatalogConfig, ConfigError

PYPROJECT_MANIFEST: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "makecatalogs"
PROJECT_CONFIG_NAME: Final[str] = ".makecatalogs.toml"
USER_CONFIG_PATH: Final[Path] = Path("~/.config/makecatalogs/config.toml")

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigSource(Protocol):
    """Provide configuration data loaded from disk or other mediums."""

    name: str

    def load(self) -> Mapping[str, Any]: ...

    def describe(self) -> str: ...


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return CatalogConfig().to_dict()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource:
    """Load configuration data from a TOML document."""

    def __init__(self, path: Path, *, name: str | None = None, env: Mapping[str, str] | None = None) -> None:
        self._path = path
        self.name = name or str(path)
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read configuration at {self._path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be a table")
        return _expand_env(data, self._env)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.makecatalogs]`` within ``pyproject.toml``."""

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


class ConfigLoadResult(BaseModel):
    """Container bundling a resolved config with provenance metadata."""

    model_config = ConfigDict(validate_assignment=True)

    config: CatalogConfig
    sources: list[str] = Field(default_factory=list)


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        user_config: Path | None = None,
        explicit_config: Path | None = None,
    ) -> ConfigLoader:
        """Build a loader that respects user, project, and default sources.

        Args:
            project_root: Directory searched for ``pyproject.toml`` and ``.makecatalogs.toml``.
            user_config: Optional path overriding the user-level config location.
            explicit_config: Optional config file given on the command line.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.

        Raises:
            ConfigError: If ``explicit_config`` does not exist.
        """

        user_path = (user_config or USER_CONFIG_PATH).expanduser()
        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            TomlConfigSource(user_path, name="user"),
            PyProjectConfigSource(project_root / PYPROJECT_MANIFEST),
            TomlConfigSource(project_root / PROJECT_CONFIG_NAME),
        ]
        if explicit_config is not None:
            if not explicit_config.exists():
                raise ConfigError(f"Configuration file {explicit_config} does not exist")
            sources.append(TomlConfigSource(explicit_config))
        return cls(sources=sources)

    def load(self, overrides: Mapping[str, Any] | None = None) -> ConfigLoadResult:
        """Merge every source, then ``overrides``, into a validated config.

        Args:
            overrides: Values supplied on the command line; ``None`` entries are ignored.

        Returns:
            ConfigLoadResult: Resolved configuration and the sources that contributed.

        Raises:
            ConfigError: If the merged payload fails validation.
        """

        merged: dict[str, Any] = {}
        consulted: list[str] = []
        for source in self._sources:
            fragment = source.load()
            if not fragment:
                continue
            merged = _deep_merge(merged, fragment)
            consulted.append(source.describe())
        if overrides:
            cli_values = {key: value for key, value in overrides.items() if value is not None}
            if cli_values:
                merged = _deep_merge(merged, cli_values)
                consulted.append("command line")
        try:
            config = CatalogConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
        return ConfigLoadResult(config=config, sources=consulted)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "ConfigLoadResult",
    "ConfigLoader",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
]
