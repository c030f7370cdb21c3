# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for progress output helpers."""

from __future__ import annotations

import pytest

from autobuild.logging import ProgressReporter, emoji


def test_progress_lines_start_with_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    reporter = ProgressReporter(use_emoji=True, use_color=False)

    reporter.step("Build target (main.c)")
    reporter.ok("Build successful")
    reporter.fail("Build failed [1]")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "==== Build target (main.c)"
    assert all(line.startswith("==== ") for line in lines)
    assert "✅" in lines[1]
    assert lines[2].endswith("Build failed [1]")


def test_plain_output_has_no_emoji(capsys: pytest.CaptureFixture[str]) -> None:
    ProgressReporter().warn("Skipping run, build failed")

    assert capsys.readouterr().out == "==== Skipping run, build failed\n"


def test_emoji_disabled_is_blank() -> None:
    assert emoji("x", True) == "x"
    assert emoji("x", False) == ""
