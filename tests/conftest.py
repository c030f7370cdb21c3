# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest


@dataclass
class FakeRunner:
    """Record commands instead of spawning them.

    ``results`` maps either the full space-joined command or just the
    program name to a return code or an exception to raise. Unlisted
    commands succeed.
    """

    results: dict[str, int | Exception] = field(default_factory=dict)
    calls: list[tuple[tuple[str, ...], Path | None]] = field(default_factory=list)

    def __call__(self, args: Sequence[str], *, cwd: Path | None = None) -> int:
        argv = tuple(args)
        self.calls.append((argv, cwd))
        outcome = self.results.get(" ".join(argv), self.results.get(argv[0], 0))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a runner that records commands without spawning anything."""
    return FakeRunner()


@pytest.fixture
def make_project(tmp_path: Path):
    """Return a helper creating files under ``tmp_path`` and returning the root."""

    def _make(files: dict[str, str]) -> Path:
        for name, content in files.items():
            (tmp_path / name).write_text(content, encoding="utf-8")
        return tmp_path

    return _make
