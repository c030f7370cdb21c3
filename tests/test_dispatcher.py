# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Behavioural tests for :mod:`autobuild.dispatcher`."""

from __future__ import annotations

from pathlib import Path

import pytest

from autobuild.dispatcher import ActionSet, Dispatcher, PhaseName, PhaseStatus
from autobuild.errors import TargetNotFoundError
from autobuild.kinds import Bash, Cargo, Cpp, Make
from autobuild.process_utils import AbnormalTermination, SpawnFailure


def _dispatcher(runner, tmp_path: Path | None = None) -> Dispatcher:
    return Dispatcher(runner=runner, cwd=tmp_path)


def test_action_set_from_tokens_ignores_unknown() -> None:
    actions = ActionSet.from_tokens(["autobuild", "run", "--fast", "release", "banana"])

    assert actions == ActionSet(run=True, release=True)
    assert actions.wants_build
    assert not actions.is_empty
    assert ActionSet.from_tokens(["nothing"]).is_empty


def test_build_then_run_cpp(fake_runner, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    report = _dispatcher(fake_runner, tmp_path).dispatch(Cpp("main.cpp"), ActionSet(build=True, run=True))

    assert fake_runner.commands == [("g++", "main.cpp", "-o", "main"), ("./main",)]
    assert all(cwd == tmp_path for _, cwd in fake_runner.calls)
    assert [command.argv for command in report.commands] == fake_runner.commands
    assert [outcome.status for outcome in report.outcomes] == [PhaseStatus.SUCCEEDED, PhaseStatus.SUCCEEDED]
    assert report.kind == Cpp("main.cpp")
    out = capsys.readouterr().out
    assert "==== Build target (main.cpp)" in out
    assert "==== Build successful" in out
    assert "==== Run target (main)" in out
    assert "==== Run return code [0]" in out


def test_cargo_release_build_and_run(fake_runner, tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "demo"\n', encoding="utf-8")

    _dispatcher(fake_runner).dispatch(Cargo(root=tmp_path), ActionSet(build=True, run=True, release=True))

    assert fake_runner.commands == [("cargo", "build", "--release"), ("cargo", "run", "--release")]


def test_release_alone_triggers_build(fake_runner) -> None:
    _dispatcher(fake_runner).dispatch(Cpp("main.cpp"), ActionSet(release=True))

    assert fake_runner.commands == [("g++", "main.cpp", "-o", "main", "-O3")]


def test_failed_build_suppresses_run(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    fake_runner.results["g++"] = 1

    report = _dispatcher(fake_runner).dispatch(Cpp("main.cpp"), ActionSet(build=True, run=True))

    assert fake_runner.commands == [("g++", "main.cpp", "-o", "main")]
    assert report.outcome(PhaseName.BUILD).status is PhaseStatus.FAILED
    assert report.outcome(PhaseName.RUN).status is PhaseStatus.SKIPPED
    out = capsys.readouterr().out
    assert "==== Build failed [1]" in out
    assert "==== Skipping run, build failed" in out
    assert "Run target" not in out


def test_abnormal_build_suppresses_run(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    fake_runner.results["g++"] = AbnormalTermination(("g++",), 9)

    report = _dispatcher(fake_runner).dispatch(Cpp("main.cpp"), ActionSet(build=True, run=True))

    assert report.outcome(PhaseName.BUILD).status is PhaseStatus.ABNORMAL
    assert report.outcome(PhaseName.RUN).status is PhaseStatus.SKIPPED
    assert "==== Build terminated by signal 9" in capsys.readouterr().out


def test_build_spawn_failure_still_runs(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    fake_runner.results["g++"] = SpawnFailure(("g++",), "executable 'g++' was not found on PATH")

    report = _dispatcher(fake_runner).dispatch(Cpp("main.cpp"), ActionSet(build=True, run=True))

    assert fake_runner.commands == [("g++", "main.cpp", "-o", "main"), ("./main",)]
    assert report.outcome(PhaseName.BUILD).status is PhaseStatus.SPAWN_FAILED
    assert "==== Failed to run build command" in capsys.readouterr().out


def test_run_spawn_failure_is_reported(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    fake_runner.results["./main"] = SpawnFailure(("./main",), "'./main' does not exist")

    report = _dispatcher(fake_runner).dispatch(Cpp("main.cpp"), ActionSet(run=True))

    assert report.outcome(PhaseName.RUN).status is PhaseStatus.SPAWN_FAILED
    assert "==== Failed to run program" in capsys.readouterr().out


def test_run_return_code_is_echoed(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    fake_runner.results["bash"] = 42

    report = _dispatcher(fake_runner).dispatch(Bash("main.sh"), ActionSet(run=True))

    assert report.outcome(PhaseName.RUN).returncode == 42
    assert "==== Run return code [42]" in capsys.readouterr().out


def test_phases_run_in_fixed_order(fake_runner) -> None:
    _dispatcher(fake_runner).dispatch(Bash("main.sh"), ActionSet(run=True, lint=True, build=True))

    assert [argv[0] for argv in fake_runner.commands] == ["shellcheck", "shellcheck", "bash"]
    assert fake_runner.commands[0][2] == "--severity=style"
    assert fake_runner.commands[1][2] == "--severity=warning"


def test_lint_failure_does_not_stop_build(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    fake_runner.results["make lint"] = 2

    report = _dispatcher(fake_runner).dispatch(Make(), ActionSet(lint=True, build=True))

    assert fake_runner.commands == [("make", "lint"), ("make",)]
    assert report.outcome(PhaseName.LINT).status is PhaseStatus.FAILED
    assert report.outcome(PhaseName.BUILD).succeeded
    assert "==== Lint failed [2]" in capsys.readouterr().out


def test_lint_without_target_is_advisory(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    report = _dispatcher(fake_runner).dispatch(None, ActionSet(lint=True))

    assert fake_runner.commands == []
    assert report.outcome(PhaseName.LINT).status is PhaseStatus.NO_TARGET
    assert "==== No lint target found" in capsys.readouterr().out


def test_build_without_target_exits_two(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(TargetNotFoundError) as excinfo:
        _dispatcher(fake_runner).dispatch(None, ActionSet(build=True, run=True))

    assert excinfo.value.exit_code == 2
    assert fake_runner.commands == []
    assert "==== No build target found" in capsys.readouterr().out


def test_run_without_target_exits_two(fake_runner, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(TargetNotFoundError) as excinfo:
        _dispatcher(fake_runner).dispatch(None, ActionSet(run=True))

    assert excinfo.value.exit_code == 2
    assert fake_runner.commands == []
    assert "==== No target to run found" in capsys.readouterr().out


def test_run_without_binary_name_exits_two(fake_runner, tmp_path: Path) -> None:
    (tmp_path / "Makefile").write_text("all:\n\tcc main.c\n", encoding="utf-8")

    with pytest.raises(TargetNotFoundError) as excinfo:
        _dispatcher(fake_runner).dispatch(Make(root=tmp_path), ActionSet(build=True, run=True))

    assert excinfo.value.exit_code == 2
    assert fake_runner.commands == [("make",)]


def test_cargo_run_requires_package_name(fake_runner, tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").write_text("[workspace]\n", encoding="utf-8")

    with pytest.raises(TargetNotFoundError):
        _dispatcher(fake_runner).dispatch(Cargo(root=tmp_path), ActionSet(run=True))

    assert fake_runner.commands == []


def test_make_run_uses_target_from_makefile(fake_runner, tmp_path: Path) -> None:
    (tmp_path / "Makefile").write_text("TARGET := server\n", encoding="utf-8")

    report = _dispatcher(fake_runner).dispatch(Make(root=tmp_path), ActionSet(run=True))

    assert fake_runner.commands == [("./server",)]
    assert [command.argv for command in report.commands] == [("./server",)]


def test_debug_sink_receives_commands(fake_runner) -> None:
    messages: list[str] = []
    dispatcher = Dispatcher(runner=fake_runner, debug=messages.append)

    dispatcher.dispatch(Cpp("main.cpp"), ActionSet(build=True))

    assert messages == ['kind=cpp phase=build command="g++ main.cpp -o main"']
