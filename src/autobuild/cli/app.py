# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring resolution and dispatch."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..config_loader import load_config
from ..constants import EXIT_OK
from ..dispatcher import Dispatcher
from ..errors import ConfigError, ResolutionError, TargetNotFoundError
from ..logging import ProgressReporter, fail
from ..resolver import resolve_directory
from ._build_cli_models import (
    COLOR_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    ROOT_OPTION,
    SORT_OPTION,
    TOKENS_ARGUMENT,
    build_cli_options,
)
from .shared import build_cli_logger

app = typer.Typer(
    help="Detect the project in a directory and lint, build or run it with the matching tool.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"autobuild {__version__}")
        raise typer.Exit(code=EXIT_OK)


@app.command(context_settings={"ignore_unknown_options": True, "allow_extra_args": True})
def autobuild(
    tokens: TOKENS_ARGUMENT = None,
    root: ROOT_OPTION = Path("."),
    sort: SORT_OPTION = None,
    color: COLOR_OPTION = None,
    emoji: EMOJI_OPTION = None,
    debug: DEBUG_OPTION = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Resolve the project kind of ROOT and run the requested actions."""

    del version
    options = build_cli_options(tokens, root=root, sort=sort, color=color, emoji=emoji, debug=debug)
    try:
        config = load_config(options.root, overrides=options.config_overrides())
    except ConfigError as exc:
        fail(str(exc), use_emoji=bool(options.emoji), use_color=options.color is not False)
        raise typer.Exit(code=exc.exit_code) from exc

    output = config.output
    logger = build_cli_logger(emoji=output.emoji, debug=output.debug, no_color=not output.color)
    reporter = ProgressReporter(use_emoji=output.emoji, use_color=output.color)

    try:
        kind = resolve_directory(options.root, sort=config.resolution.sort_entries)
    except ResolutionError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    actions = options.actions
    logger.debug(
        f"root={options.root} kind={kind.label if kind is not None else 'none'} "
        f"lint={actions.lint} build={actions.build} run={actions.run} release={actions.release}",
    )

    if actions.is_empty:
        if kind is None:
            reporter.warn("No target found")
        else:
            reporter.info(f"Detected target ({kind.display_name()})")
        raise typer.Exit(code=EXIT_OK)

    dispatcher = Dispatcher(reporter=reporter, cwd=options.root, debug=logger.debug)
    try:
        dispatcher.dispatch(kind, actions)
    except TargetNotFoundError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "autobuild", "main"]
