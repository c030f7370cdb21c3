# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the resolver, dispatcher and CLI."""

from __future__ import annotations

from .constants import EXIT_CONFIG_ERROR, EXIT_NO_TARGET


class AutobuildError(RuntimeError):
    """Base class for errors that terminate an autobuild invocation."""

    exit_code: int = EXIT_CONFIG_ERROR

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        """Initialise the error with a message and optional exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status overriding the class default.
        """

        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ResolutionError(AutobuildError):
    """Raised when the project directory cannot be listed."""


class TargetNotFoundError(AutobuildError):
    """Raised when build or run was requested without a usable target."""

    exit_code = EXIT_NO_TARGET


class ConfigError(AutobuildError):
    """Raised when configuration input is invalid."""


__all__ = [
    "AutobuildError",
    "ConfigError",
    "ResolutionError",
    "TargetNotFoundError",
]
