# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading with layered precedence: defaults, file, environment, CLI."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .config import Config, build_config
from .constants import CONFIG_FILENAME
from .errors import ConfigError

ENV_NO_COLOR: Final[str] = "AUTOBUILD_NO_COLOR"
ENV_EMOJI: Final[str] = "AUTOBUILD_EMOJI"
ENV_DEBUG: Final[str] = "AUTOBUILD_DEBUG"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got {raw!r}")


class TomlConfigSource:
    """Load configuration data from an ``autobuild.toml`` document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Mapping[str, Any]:
        """Return the document contents, or an empty mapping when absent.

        Raises:
            ConfigError: If the document is not valid TOML.
        """

        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self.path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self.path}: {exc}") from exc


class EnvironmentConfigSource:
    """Read ``AUTOBUILD_*`` overrides from the process environment."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = os.environ if env is None else env

    def load(self) -> Mapping[str, Any]:
        output: dict[str, Any] = {}
        if ENV_NO_COLOR in self._env:
            output["color"] = not _parse_flag(ENV_NO_COLOR, self._env[ENV_NO_COLOR])
        if ENV_EMOJI in self._env:
            output["emoji"] = _parse_flag(ENV_EMOJI, self._env[ENV_EMOJI])
        if ENV_DEBUG in self._env:
            output["debug"] = _parse_flag(ENV_DEBUG, self._env[ENV_DEBUG])
        return {"output": output} if output else {}


def load_config(
    root: Path,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> Config:
    """Build the effective configuration for ``root``.

    Args:
        root: Project directory that may contain ``autobuild.toml``.
        env: Environment mapping; defaults to :data:`os.environ`.
        overrides: CLI-level section overrides applied last.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If any layer is invalid.
    """

    data: dict[str, Any] = Config().to_dict()
    for source in (TomlConfigSource(root / CONFIG_FILENAME), EnvironmentConfigSource(env)):
        data = _deep_merge(data, source.load())
    config = build_config(data)
    if overrides:
        config = config.with_overrides(overrides)
    return config


__all__ = [
    "ENV_DEBUG",
    "ENV_EMOJI",
    "ENV_NO_COLOR",
    "EnvironmentConfigSource",
    "TomlConfigSource",
    "load_config",
]
