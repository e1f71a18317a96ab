"""Rich theme for azchat CLI."""

from __future__ import annotations

from rich.theme import Theme

THEME = Theme(
    {
        "title": "bold bright_blue",
        "subtitle": "dim",
        "border": "bright_blue",
        "info": "dim",
        "warning": "red3",
        "success": "green3",
        "error": "bold red3",
        "label": "dim",
        "value": "white",
        "filtered": "bold red3",
        "clean": "green3",
    }
)
