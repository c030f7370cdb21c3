# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; commands come from the fixed
# per-kind table and are passed as argument lists without ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path

from .errors import AutobuildError


class SpawnFailure(AutobuildError):
    """Raised when an external command cannot be launched."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        super().__init__(f"Unable to launch '{command[0] if command else '<empty>'}': {reason}")
        self.command = tuple(command)
        self.reason = reason


class AbnormalTermination(AutobuildError):
    """Raised when a child process ends without an exit status."""

    def __init__(self, command: Sequence[str], signal_number: int) -> None:
        super().__init__(f"Command '{command[0]}' terminated by signal {signal_number}")
        self.command = tuple(command)
        self.signal_number = signal_number


def _normalize_args(args: Sequence[str], cwd: Path | None) -> list[str]:
    if not args:
        raise SpawnFailure(args, "command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    if os.sep in head or (os.altsep and os.altsep in head):
        # ``./main`` style invocations are relative to the working directory.
        candidate = (cwd or Path.cwd()) / head_path
        if not candidate.is_file():
            raise SpawnFailure(args, f"'{head}' does not exist")
        if not os.access(candidate, os.X_OK):
            raise SpawnFailure(args, f"'{head}' is not executable")
        return [str(candidate), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise SpawnFailure(args, f"executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_child(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Run *args* to completion and return its exit status.

    The child inherits the standard streams, so its output reaches the
    terminal directly. No timeout is applied.

    Args:
        args: Program followed by its arguments.
        cwd: Working directory of the child.
        env: Optional environment replacing the inherited one.

    Returns:
        int: Exit status reported by the child.

    Raises:
        SpawnFailure: If the program is missing or cannot be launched.
        AbnormalTermination: If the child was killed by a signal.
    """

    normalized = _normalize_args(args, cwd)
    try:
        # Bandit: argument lists only, no shell expansion.
        completed = subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
        )
    except OSError as exc:
        raise SpawnFailure(args, exc.strerror or str(exc)) from exc

    # POSIX reports signal deaths as negative return codes.
    if completed.returncode < 0:
        raise AbnormalTermination(args, -completed.returncode)
    return completed.returncode


__all__ = ["AbnormalTermination", "SpawnFailure", "run_child"]
