# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for project detection and dispatch."""

from __future__ import annotations

import re
from typing import Final

MAKEFILE: Final[str] = "Makefile"
CARGO_MANIFEST: Final[str] = "Cargo.toml"

# Only files named ``<stem>.<ext>`` with one of these stems are candidates.
SOURCE_STEMS: Final[tuple[str, ...]] = ("main.", "index.", "test.")

MAKE_TARGET_PATTERN: Final[re.Pattern[str]] = re.compile(r"^TARGET\s*:=\s*(\w+)")
CARGO_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r'^name\s*=\s*"(\w+)"')

CONFIG_FILENAME: Final[str] = "autobuild.toml"

PROGRESS_PREFIX: Final[str] = "===="

EXIT_OK: Final[int] = 0
EXIT_CONFIG_ERROR: Final[int] = 1
EXIT_NO_TARGET: Final[int] = 2

ACTION_TOKENS: Final[frozenset[str]] = frozenset({"lint", "build", "run", "release"})

__all__ = [
    "ACTION_TOKENS",
    "CARGO_MANIFEST",
    "CARGO_NAME_PATTERN",
    "CONFIG_FILENAME",
    "EXIT_CONFIG_ERROR",
    "EXIT_NO_TARGET",
    "EXIT_OK",
    "MAKEFILE",
    "MAKE_TARGET_PATTERN",
    "PROGRESS_PREFIX",
    "SOURCE_STEMS",
]
