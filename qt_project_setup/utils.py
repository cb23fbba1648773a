"""Shared utility functions for qt-project-setup.

Provides Rich-based console reporting (status lines, summary tables, a
progress spinner) and the small name/path helpers the generator feeds into
its templates.
"""

from __future__ import annotations

import re
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / path helpers
# ---------------------------------------------------------------------------


def include_guard_token(project_name: str) -> str:
    """Convert a project display name to a C preprocessor token.

    Uppercases the name and replaces every character that is not an ASCII
    letter or digit with an underscore.

    Examples::

        include_guard_token("my-app 2") -> "MY_APP_2"
        include_guard_token("Demo.App") -> "DEMO_APP"
    """
    return re.sub(r"[^A-Z0-9]", "_", project_name.upper())


def normalize_sdk_path(path: str | Path) -> str:
    """Return *path* with every backslash replaced by a forward slash.

    CMake accepts forward slashes on every platform, so the generated build
    scripts always use that form regardless of how the user typed the path.
    """
    return str(path).replace("\\", "/")


def parse_size(value: str) -> tuple[int, int]:
    """Parse a ``WIDTHxHEIGHT`` string such as ``"1280x720"``.

    Raises:
        ValueError: If the string is not two positive integers joined by
            ``x`` (case-insensitive).
    """
    match = re.fullmatch(r"\s*(\d+)\s*[xX]\s*(\d+)\s*", value)
    if not match:
        raise ValueError(f"Invalid size {value!r}, expected WIDTHxHEIGHT")
    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid size {value!r}, dimensions must be positive")
    return width, height


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_file_list(paths: list[str], title: str = "Files") -> None:
    """Print a single-column table of relative file paths."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Path")

    for index, path in enumerate(paths, start=1):
        table.add_row(str(index), path)

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich progress spinner for the generation step.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
    )
