# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project kinds and the per-kind lint/build/run command table.

Every supported ecosystem is one immutable variant of :class:`ProjectKind`.
A variant knows how to name itself, how to derive the binary it produces
and which external command implements each phase. The dispatcher never
branches on the concrete variant; it only calls the methods defined here.
"""

from __future__ import annotations

import re
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import ClassVar, Final

from .constants import CARGO_MANIFEST, CARGO_NAME_PATTERN, MAKE_TARGET_PATTERN, MAKEFILE


@dataclass(frozen=True, slots=True)
class Command:
    """Immutable external command made of a program and its arguments."""

    argv: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.argv:
            raise ValueError("command requires at least one argument")

    @classmethod
    def of(cls, *argv: str) -> Command:
        """Build a command from positional arguments."""

        return cls(tuple(argv))

    @property
    def program(self) -> str:
        """Return the executable invoked by the command."""

        return self.argv[0]

    @property
    def arguments(self) -> tuple[str, ...]:
        """Return the arguments following the executable."""

        return self.argv[1:]

    def describe(self) -> str:
        """Return a shell-quoted rendering suitable for logs."""

        return shlex.join(self.argv)


def read_manifest_identifier(path: Path, pattern: re.Pattern[str]) -> str | None:
    """Return the first capture of ``pattern`` found in ``path``.

    Lines are matched from their start, one at a time; the first matching
    line wins. A missing or unreadable file behaves like a file without a
    matching line.

    Args:
        path: Manifest file to scan.
        pattern: Compiled expression whose first group holds the identifier.

    Returns:
        str | None: Captured identifier, or ``None`` when nothing matched.
    """

    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            for line in handle:
                match = pattern.match(line)
                if match and match.group(1):
                    return match.group(1)
    except OSError:
        return None
    return None


@dataclass(frozen=True, slots=True)
class ProjectKind(ABC):
    """Base class for the closed set of detectable project kinds."""

    root: Path = field(default_factory=Path, compare=False, repr=False, kw_only=True)

    @abstractmethod
    def display_name(self) -> str:
        """Return the manifest filename or source path identifying the project."""

    @abstractmethod
    def binary_name(self) -> str | None:
        """Return the name of the produced binary, or ``None`` when unknown."""

    @abstractmethod
    def lint_command(self, release: bool = False) -> Command:
        """Return the command implementing the lint phase."""

    @abstractmethod
    def build_command(self, release: bool = False) -> Command:
        """Return the command implementing the build phase."""

    @abstractmethod
    def run_command(self, release: bool = False) -> Command | None:
        """Return the command implementing the run phase, if a binary is known."""

    def is_success(self, returncode: int) -> bool:
        """Return whether ``returncode`` denotes a successful phase."""

        return returncode == 0

    @property
    def label(self) -> str:
        """Return the lowercase kind name used in debug output."""

        return type(self).__name__.lower()


@dataclass(frozen=True, slots=True)
class ManifestKind(ProjectKind):
    """Project identified by a build manifest in the directory root."""

    manifest: ClassVar[str]
    identifier_pattern: ClassVar[re.Pattern[str]]

    @property
    def manifest_path(self) -> Path:
        """Return the manifest location under the project root."""

        return self.root / self.manifest

    def display_name(self) -> str:
        return self.manifest

    def binary_name(self) -> str | None:
        # Re-read on every call; the manifest may change between calls.
        return read_manifest_identifier(self.manifest_path, self.identifier_pattern)


@dataclass(frozen=True, slots=True)
class Make(ManifestKind):
    """Project driven by a ``Makefile`` declaring ``TARGET := <name>``."""

    manifest: ClassVar[str] = MAKEFILE
    identifier_pattern: ClassVar[re.Pattern[str]] = MAKE_TARGET_PATTERN

    def lint_command(self, release: bool = False) -> Command:
        del release
        return Command.of("make", "lint")

    def build_command(self, release: bool = False) -> Command:
        if release:
            return Command.of("make", "release")
        return Command.of("make")

    def run_command(self, release: bool = False) -> Command | None:
        del release
        binary = self.binary_name()
        return None if binary is None else Command.of(f"./{binary}")


@dataclass(frozen=True, slots=True)
class Cargo(ManifestKind):
    """Rust crate described by ``Cargo.toml``."""

    manifest: ClassVar[str] = CARGO_MANIFEST
    identifier_pattern: ClassVar[re.Pattern[str]] = CARGO_NAME_PATTERN

    def lint_command(self, release: bool = False) -> Command:
        del release
        return Command.of("cargo", "fmt")

    def build_command(self, release: bool = False) -> Command:
        return Command(("cargo", "build", *_release_flag(release)))

    def run_command(self, release: bool = False) -> Command | None:
        if self.binary_name() is None:
            return None
        return Command(("cargo", "run", *_release_flag(release)))


def _release_flag(release: bool) -> tuple[str, ...]:
    return ("--release",) if release else ()


@dataclass(frozen=True, slots=True)
class SourceKind(ProjectKind):
    """Single-file project identified by the extension of ``path``."""

    path: str

    def display_name(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class CompiledSourceKind(SourceKind):
    """Source file compiled to a native binary next to it."""

    def binary_name(self) -> str | None:
        # ``main.cpp`` -> ``main``; everything from the first dot is dropped.
        return self.path.split(".", 1)[0]

    def run_command(self, release: bool = False) -> Command | None:
        del release
        binary = self.binary_name()
        return None if not binary else Command.of(f"./{binary}")


@dataclass(frozen=True, slots=True)
class _GnuCompiledKind(CompiledSourceKind):
    compiler: ClassVar[str]

    def build_command(self, release: bool = False) -> Command:
        argv = [self.compiler, self.path, "-o", self.binary_name() or self.path]
        if release:
            argv.append("-O3")
        return Command(tuple(argv))

    def lint_command(self, release: bool = False) -> Command:
        return self.build_command(release)


@dataclass(frozen=True, slots=True)
class Cpp(_GnuCompiledKind):
    """C++ translation unit compiled with ``g++``."""

    compiler: ClassVar[str] = "g++"


@dataclass(frozen=True, slots=True)
class C(_GnuCompiledKind):
    """C translation unit compiled with ``gcc``."""

    compiler: ClassVar[str] = "gcc"


@dataclass(frozen=True, slots=True)
class Rust(CompiledSourceKind):
    """Standalone Rust source compiled with ``rustc``."""

    def build_command(self, release: bool = False) -> Command:
        del release
        return Command.of("rustc", self.path)

    def lint_command(self, release: bool = False) -> Command:
        return self.build_command(release)


@dataclass(frozen=True, slots=True)
class ScriptSourceKind(SourceKind):
    """Interpreted script re-invoked through its interpreter."""

    interpreter: ClassVar[str]
    checker: ClassVar[tuple[str, ...]]

    def binary_name(self) -> str | None:
        return self.path

    def lint_command(self, release: bool = False) -> Command:
        del release
        return Command((*self.checker, self.path))

    def build_command(self, release: bool = False) -> Command:
        return self.lint_command(release)

    def run_command(self, release: bool = False) -> Command | None:
        del release
        return Command.of(self.interpreter, f"./{self.path}")


@dataclass(frozen=True, slots=True)
class Js(ScriptSourceKind):
    """JavaScript entry point checked with ``eslint`` and run with ``node``."""

    interpreter: ClassVar[str] = "node"
    checker: ClassVar[tuple[str, ...]] = ("eslint", "--env", "es6")


@dataclass(frozen=True, slots=True)
class Lua(ScriptSourceKind):
    """Lua script checked with ``luacheck``."""

    interpreter: ClassVar[str] = "lua"
    checker: ClassVar[tuple[str, ...]] = ("luacheck", "-q")


@dataclass(frozen=True, slots=True)
class Bash(ScriptSourceKind):
    """Shell script checked with ``shellcheck``."""

    interpreter: ClassVar[str] = "bash"
    checker: ClassVar[tuple[str, ...]] = ("shellcheck", "--norc", "--severity=style")

    def build_command(self, release: bool = False) -> Command:
        del release
        return Command.of("shellcheck", "--norc", "--severity=warning", self.path)


SOURCE_EXTENSIONS: Final[dict[str, type[SourceKind]]] = {
    ".js": Js,
    ".cpp": Cpp,
    ".cxx": Cpp,
    ".lua": Lua,
    ".bash": Bash,
    ".sh": Bash,
    ".rs": Rust,
    ".c": C,
}


def kind_for_source(name: str, *, root: Path | None = None) -> SourceKind | None:
    """Return the source kind matching the extension of ``name``."""

    variant = SOURCE_EXTENSIONS.get(PurePath(name).suffix)
    if variant is None:
        return None
    return variant(name, root=root if root is not None else Path())


__all__ = [
    "Bash",
    "C",
    "Cargo",
    "Command",
    "CompiledSourceKind",
    "Cpp",
    "Js",
    "Lua",
    "Make",
    "ManifestKind",
    "ProjectKind",
    "Rust",
    "SOURCE_EXTENSIONS",
    "ScriptSourceKind",
    "SourceKind",
    "kind_for_source",
    "read_manifest_identifier",
]
