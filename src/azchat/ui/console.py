"""Consoles shared by the azchat CLI."""

from __future__ import annotations

from rich.console import Console

from azchat.ui.theme import THEME

_STDOUT = Console(theme=THEME, highlight=False)
# error panels only; stdout carries results
_STDERR = Console(theme=THEME, highlight=False, stderr=True)


def get_console(*, stderr: bool = False) -> Console:
    return _STDERR if stderr else _STDOUT
