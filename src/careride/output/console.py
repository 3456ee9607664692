"""Rich Console factory and theme for careride output.

Consoles render into a StringIO buffer so renderers keep a
``str``-returning contract. Rich drops color codes on its own when the
output is not a terminal (CliRunner, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CARE_THEME = Theme(
    {
        "care.ok": "bold green",
        "care.error": "bold red",
        "care.warning": "bold yellow",
        "care.op": "bold cyan",
        "care.key": "dim",
        "care.id": "bold blue",
        "care.name": "bold",
        "care.price": "magenta",
        "care.sponsored": "bold yellow",
        "care.status.active": "green",
        "care.status.cancelled": "yellow",
        "care.status.expired": "red",
        "care.status.none": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console writing to an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=CARE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for an entitlement status (``active``, ``expired``...)."""
    return f"care.status.{status}" if status in ("active", "cancelled", "expired", "none") else ""
