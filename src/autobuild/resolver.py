# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Infer the project kind of a directory from its entries.

Resolution is a pure reduction over directory entry names: each name is
classified on its own, and the candidates are folded into a single winner
with :func:`merge`. ``Makefile`` and ``Cargo.toml`` dominate source-file
candidates, and a ``Makefile`` ends the scan.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .constants import CARGO_MANIFEST, MAKEFILE, SOURCE_STEMS
from .errors import ResolutionError
from .kinds import Cargo, Make, ProjectKind, kind_for_source


def classify(name: str, *, root: Path | None = None) -> ProjectKind | None:
    """Return the candidate kind suggested by a single directory entry.

    Args:
        name: Directory entry name (no directory component).
        root: Directory containing the entry.

    Returns:
        ProjectKind | None: Candidate kind, or ``None`` for irrelevant entries.
    """

    base = root if root is not None else Path()
    if name == MAKEFILE:
        return Make(root=base)
    if name == CARGO_MANIFEST:
        return Cargo(root=base)
    if name.startswith(SOURCE_STEMS):
        return kind_for_source(name, root=base)
    return None


def merge(old: ProjectKind | None, new: ProjectKind | None) -> ProjectKind | None:
    """Fold ``new`` into ``old`` following the dominance rules.

    ``Make`` wins on either side, then ``Cargo`` on either side; otherwise a
    later non-empty candidate replaces the earlier one.
    """

    if isinstance(old, Make):
        return old
    if isinstance(new, Make):
        return new
    if isinstance(old, Cargo):
        return old
    if isinstance(new, Cargo):
        return new
    if new is not None:
        return new
    return old


def resolve(entries: Iterable[str], *, root: Path | None = None) -> ProjectKind | None:
    """Resolve the project kind for an ordered sequence of entry names.

    Args:
        entries: Directory entry names in scan order.
        root: Directory the entries were read from.

    Returns:
        ProjectKind | None: Winning kind, or ``None`` when nothing matched.
    """

    current: ProjectKind | None = None
    for name in entries:
        if name == MAKEFILE:
            return merge(current, classify(name, root=root))
        if name == CARGO_MANIFEST:
            current = merge(current, classify(name, root=root))
        elif current is None:
            current = merge(current, classify(name, root=root))
    return current


def scan_entries(root: Path, *, sort: bool = True) -> list[str]:
    """Return the names of the entries directly under ``root``.

    Args:
        root: Directory to list.
        sort: When ``True`` names are ordered lexicographically; otherwise
            the platform's iteration order is kept.

    Returns:
        list[str]: Entry names.

    Raises:
        ResolutionError: If ``root`` cannot be listed.
    """

    try:
        names = [entry.name for entry in root.iterdir()]
    except OSError as exc:
        raise ResolutionError(f"Unable to read directory {root}: {exc}") from exc
    return sorted(names) if sort else names


def resolve_directory(root: Path, *, sort: bool = True) -> ProjectKind | None:
    """Scan ``root`` once and resolve its project kind."""

    return resolve(scan_entries(root, sort=sort), root=root)


__all__ = [
    "classify",
    "merge",
    "resolve",
    "resolve_directory",
    "scan_entries",
]
