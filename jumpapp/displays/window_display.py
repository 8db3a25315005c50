"""
Window List Display Module

Rich-formatted listing of matching windows for `jumpapp -L`.
"""

import json
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import WindowRecord


def build_window_table(windows: Sequence[WindowRecord]) -> Table:
    """
    Build a table with one row per window.

    Args:
        windows: Windows to list, in the order given
    """
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Window ID", style="cyan", no_wrap=True)
    table.add_column("Workspace", justify="right")
    table.add_column("PID", justify="right")
    table.add_column("Host", style="dim")
    table.add_column("Class")
    table.add_column("Title")

    for window in windows:
        workspace = "sticky" if window.is_sticky else str(window.workspace)
        table.add_row(
            window.hex_id,
            workspace,
            str(window.pid) if window.pid is not None else "N/A",
            window.hostname or "N/A",
            Text(window.window_class),
            Text(window.title),
        )

    return table


def display_windows(windows: Sequence[WindowRecord], console: Console = None) -> None:
    """
    Print matching windows; prints nothing when there are none.

    Args:
        windows: Matching windows
        console: Rich console (optional, creates new if not provided)
    """
    if not windows:
        return

    if console is None:
        console = Console()

    console.print(build_window_table(windows))


def format_windows_json(windows: Sequence[WindowRecord]) -> str:
    """
    Format windows as a JSON array.

    Args:
        windows: Matching windows

    Returns:
        JSON string
    """
    data = []
    for window in windows:
        entry = window.model_dump(mode="json")
        entry["id"] = window.hex_id
        entry["window_types"] = sorted(window.window_types)
        data.append(entry)
    return json.dumps(data, indent=2)
