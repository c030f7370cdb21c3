# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from .constants import PROGRESS_PREFIX
from .runtime.console.manager import detect_tty, get_console_manager


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


@dataclass(slots=True)
class ProgressReporter:
    """Print dispatcher progress lines prefixed with ``====``.

    The prefix always starts the line; emoji glyphs, when enabled, follow
    it so that scripts grepping for the prefix keep working.
    """

    use_emoji: bool = False
    use_color: bool | None = None

    def _line(self, message: str, glyph: str) -> str:
        return f"{PROGRESS_PREFIX} {emoji(glyph, self.use_emoji)}{message}"

    def step(self, message: str) -> None:
        """Announce the phase about to run."""

        _print_line(self._line(message, ""), style="bold cyan", use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Report a neutral outcome such as a return code."""

        _print_line(self._line(message, "ℹ️ "), style=None, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Report a successful phase."""

        _print_line(self._line(message, "✅ "), style="green", use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Report a skipped or advisory condition."""

        _print_line(self._line(message, "⚠️ "), style="yellow", use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        """Report a failed phase."""

        _print_line(self._line(message, "❌ "), style="red", use_emoji=self.use_emoji, use_color=self.use_color)


__all__ = [
    "ProgressReporter",
    "emoji",
    "fail",
]
