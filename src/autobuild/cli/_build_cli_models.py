# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations and normalised options for the autobuild command."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from ..dispatcher import ActionSet

TOKENS_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(
        help="Actions to perform: any of lint, build, run, release. Other words are ignored.",
        show_default=False,
    ),
]
ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project directory to inspect and build in."),
]
SORT_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--sort/--no-sort",
        help="Scan directory entries in lexicographic order (default) or filesystem order.",
        show_default=False,
    ),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Toggle ANSI colour output.", show_default=False),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output.", show_default=False),
]
DEBUG_OPTION = Annotated[
    bool | None,
    typer.Option("--debug/--no-debug", help="Show resolved kinds and spawned commands.", show_default=False),
]


def normalize_tokens(values: Sequence[str] | None) -> tuple[str, ...]:
    """Return stripped, non-empty argument tokens preserving order."""

    if not values:
        return ()
    return tuple(stripped for entry in values if (stripped := entry.strip()))


@dataclass(slots=True)
class BuildCLIOptions:
    """Capture the values supplied to the autobuild command."""

    root: Path
    actions: ActionSet
    sort: bool | None
    color: bool | None
    emoji: bool | None
    debug: bool | None

    def config_overrides(self) -> dict[str, dict[str, Any]]:
        """Return CLI values as configuration overrides; unset flags are ``None``."""

        return {
            "output": {"color": self.color, "emoji": self.emoji, "debug": self.debug},
            "resolution": {"sort_entries": self.sort},
        }


def build_cli_options(
    tokens: Sequence[str] | None,
    *,
    root: Path,
    sort: bool | None = None,
    color: bool | None = None,
    emoji: bool | None = None,
    debug: bool | None = None,
) -> BuildCLIOptions:
    """Construct :class:`BuildCLIOptions` from Typer callback parameters."""

    return BuildCLIOptions(
        root=root.resolve(),
        actions=ActionSet.from_tokens(normalize_tokens(tokens)),
        sort=sort,
        color=color,
        emoji=emoji,
        debug=debug,
    )


__all__ = [
    "BuildCLIOptions",
    "COLOR_OPTION",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "ROOT_OPTION",
    "SORT_OPTION",
    "TOKENS_ARGUMENT",
    "build_cli_options",
    "normalize_tokens",
]
