# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the autobuild dispatcher."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError


class OutputConfig(BaseModel):
    """Configuration controlling console output."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    emoji: bool = False
    color: bool = True
    debug: bool = False


class ResolutionConfig(BaseModel):
    """Configuration controlling how the project directory is scanned."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    sort_entries: bool = True


class Config(BaseModel):
    """Top-level configuration aggregating every section."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    output: OutputConfig = Field(default_factory=OutputConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain data."""

        return self.model_dump(mode="python")

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> Config:
        """Return a copy with section values replaced by ``overrides``.

        Args:
            overrides: Mapping of section name to field values. ``None``
                values are ignored so unset CLI flags leave settings alone.

        Returns:
            Config: Validated configuration.

        Raises:
            ConfigError: If a section or value is invalid.
        """

        data = self.to_dict()
        for section_name, values in overrides.items():
            if section_name not in data:
                raise ConfigError(f"Unknown configuration section '{section_name}'")
            for key, value in values.items():
                if value is not None:
                    data[section_name][key] = value
        return build_config(data)


def build_config(data: Mapping[str, Any]) -> Config:
    """Validate ``data`` into a :class:`Config`, wrapping validation errors."""

    try:
        return Config.model_validate(dict(data))
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "Config",
    "ConfigError",
    "OutputConfig",
    "ResolutionConfig",
    "build_config",
]
