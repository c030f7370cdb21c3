# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run the lint, build and run phases for a resolved project kind.

Phases always execute in the order lint, build, run, one child process at a
time. Failures are handled at the phase boundary and recorded as
:class:`PhaseOutcome` values; only a missing target for build or run stops
the invocation, by raising :class:`~autobuild.errors.TargetNotFoundError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from .constants import ACTION_TOKENS
from .errors import TargetNotFoundError
from .kinds import Command, ProjectKind
from .logging import ProgressReporter
from .process_utils import AbnormalTermination, SpawnFailure, run_child


class PhaseName(StrEnum):
    """Independently requestable dispatcher phases."""

    LINT = "lint"
    BUILD = "build"
    RUN = "run"


class PhaseStatus(StrEnum):
    """Outcome classification for a single phase."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SPAWN_FAILED = "spawn-failed"
    ABNORMAL = "abnormal"
    SKIPPED = "skipped"
    NO_TARGET = "no-target"


class ActionSet(BaseModel):
    """Requested phases plus the ``release`` modifier."""

    model_config = ConfigDict(frozen=True)

    lint: bool = False
    build: bool = False
    run: bool = False
    release: bool = False

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> ActionSet:
        """Build an action set from bare argument tokens.

        ``lint``, ``build``, ``run`` and ``release`` switch the matching flag
        on; any other token is ignored.
        """

        seen = set(tokens) & ACTION_TOKENS
        return cls(
            lint="lint" in seen,
            build="build" in seen,
            run="run" in seen,
            release="release" in seen,
        )

    @property
    def wants_build(self) -> bool:
        """Return whether the build phase runs (``build`` or ``release``)."""

        return self.build or self.release

    @property
    def is_empty(self) -> bool:
        """Return whether no phase was requested."""

        return not (self.lint or self.wants_build or self.run)


@dataclass(frozen=True, slots=True)
class PhaseOutcome:
    """Result of one attempted phase."""

    phase: PhaseName
    status: PhaseStatus
    command: Command | None = None
    returncode: int | None = None
    detail: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is PhaseStatus.SUCCEEDED


@dataclass(slots=True)
class DispatchReport:
    """Collect phase outcomes for a single invocation."""

    kind: ProjectKind | None
    outcomes: list[PhaseOutcome] = field(default_factory=list)

    def record(self, outcome: PhaseOutcome) -> PhaseOutcome:
        self.outcomes.append(outcome)
        return outcome

    def outcome(self, phase: PhaseName) -> PhaseOutcome | None:
        """Return the outcome recorded for ``phase``, if it was attempted."""

        for candidate in self.outcomes:
            if candidate.phase is phase:
                return candidate
        return None

    @property
    def commands(self) -> list[Command]:
        """Return the commands that were handed to the runner, in order."""

        return [outcome.command for outcome in self.outcomes if outcome.command is not None]


@runtime_checkable
class RunnerCallable(Protocol):
    """Callable protocol for spawning and awaiting an external command."""

    def __call__(self, args: Sequence[str], *, cwd: Path | None = None) -> int:
        """Run ``args`` and return the child's exit status."""

        raise NotImplementedError


_PHASE_LABELS = {
    PhaseName.LINT: "Lint",
    PhaseName.BUILD: "Build",
    PhaseName.RUN: "Run",
}


class Dispatcher:
    """Execute the requested phases for a project kind."""

    def __init__(
        self,
        *,
        runner: RunnerCallable | None = None,
        reporter: ProgressReporter | None = None,
        cwd: Path | None = None,
        debug: Callable[[str], None] | None = None,
    ) -> None:
        """Create a dispatcher.

        Args:
            runner: Callable spawning a command; defaults to :func:`run_child`.
            reporter: Progress reporter printing ``====`` lines.
            cwd: Working directory for every child process.
            debug: Optional sink for ``key=value`` debug messages.
        """

        self._runner: RunnerCallable = runner if runner is not None else run_child
        self._reporter = reporter or ProgressReporter()
        self._cwd = cwd
        self._debug = debug

    def dispatch(self, kind: ProjectKind | None, actions: ActionSet) -> DispatchReport:
        """Run the phases requested in ``actions`` for ``kind``.

        Args:
            kind: Resolved project kind, or ``None`` when resolution failed.
            actions: Requested phases and release modifier.

        Returns:
            DispatchReport: Outcomes of the attempted phases.

        Raises:
            TargetNotFoundError: If build or run needs a target or binary
                that could not be resolved.
        """

        report = DispatchReport(kind=kind)
        if actions.lint:
            self._lint(kind, actions, report)

        build_ok = True
        if actions.wants_build:
            build_ok = self._build(kind, actions, report)

        if actions.run:
            if build_ok:
                self._run(kind, actions, report)
            else:
                self._reporter.warn("Skipping run, build failed")
                report.record(PhaseOutcome(PhaseName.RUN, PhaseStatus.SKIPPED, detail="build failed"))
        return report

    def _lint(self, kind: ProjectKind | None, actions: ActionSet, report: DispatchReport) -> None:
        if kind is None:
            self._reporter.warn("No lint target found")
            report.record(PhaseOutcome(PhaseName.LINT, PhaseStatus.NO_TARGET))
            return
        self._reporter.step(f"Lint target ({kind.display_name()})")
        outcome = report.record(self._execute(PhaseName.LINT, kind, kind.lint_command(actions.release)))
        if outcome.status is PhaseStatus.SUCCEEDED:
            self._reporter.ok("Lint passed")
        elif outcome.status is PhaseStatus.FAILED:
            self._reporter.fail(f"Lint failed [{outcome.returncode}]")

    def _build(self, kind: ProjectKind | None, actions: ActionSet, report: DispatchReport) -> bool:
        if kind is None:
            self._reporter.fail("No build target found")
            raise TargetNotFoundError("No build target found")
        self._reporter.step(f"Build target ({kind.display_name()})")
        outcome = report.record(self._execute(PhaseName.BUILD, kind, kind.build_command(actions.release)))
        if outcome.status is PhaseStatus.SUCCEEDED:
            self._reporter.ok("Build successful")
        elif outcome.status is PhaseStatus.FAILED:
            self._reporter.fail(f"Build failed [{outcome.returncode}]")
        # A build that never started leaves the run request in place.
        return outcome.status not in (PhaseStatus.FAILED, PhaseStatus.ABNORMAL)

    def _run(self, kind: ProjectKind | None, actions: ActionSet, report: DispatchReport) -> None:
        if kind is None:
            self._reporter.fail("No target to run found")
            raise TargetNotFoundError("No target to run found")
        binary = kind.binary_name()
        command = kind.run_command(actions.release) if binary else None
        if not binary or command is None:
            self._reporter.fail(f"No target to run found ({kind.display_name()})")
            raise TargetNotFoundError(f"No binary name could be resolved from {kind.display_name()}")
        self._reporter.step(f"Run target ({binary})")
        outcome = report.record(self._execute(PhaseName.RUN, kind, command))
        if outcome.returncode is not None:
            self._reporter.info(f"Run return code [{outcome.returncode}]")

    def _execute(self, phase: PhaseName, kind: ProjectKind, command: Command) -> PhaseOutcome:
        label = _PHASE_LABELS[phase]
        if self._debug is not None:
            self._debug(f'kind={kind.label} phase={phase.value} command="{command.describe()}"')
        try:
            returncode = self._runner(command.argv, cwd=self._cwd)
        except SpawnFailure as exc:
            if phase is PhaseName.RUN:
                self._reporter.fail(f"Failed to run program ({exc.reason})")
            else:
                self._reporter.fail(f"Failed to run {phase.value} command ({exc.reason})")
            return PhaseOutcome(phase, PhaseStatus.SPAWN_FAILED, command=command, detail=exc.reason)
        except AbnormalTermination as exc:
            self._reporter.fail(f"{label} terminated by signal {exc.signal_number}")
            return PhaseOutcome(phase, PhaseStatus.ABNORMAL, command=command, detail=str(exc))
        status = PhaseStatus.SUCCEEDED if kind.is_success(returncode) else PhaseStatus.FAILED
        return PhaseOutcome(phase, status, command=command, returncode=returncode)


__all__ = [
    "ActionSet",
    "DispatchReport",
    "Dispatcher",
    "PhaseName",
    "PhaseOutcome",
    "PhaseStatus",
    "RunnerCallable",
]
