#!/usr/bin/env python3
"""
UI components for texmaps command-line tools.

This module provides the themed rich console and the helpers used to print
consistent messages and tables.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

logger = logging.getLogger(__name__)

texmaps_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "filename": "bold blue",
    "path": "blue",
    "value": "green",
    "key": "cyan",
    "header": "bold magenta",
})

console = Console(theme=texmaps_theme)


def print_rich_table(data: List[Dict[str, Any]], title: str,
                     columns: Optional[List[Tuple[str, str]]] = None) -> None:
    """
    Print data as a rich table.

    Args:
        data: List of dictionaries with row data.
        title: Table title.
        columns: Optional list of (column_name, style) tuples.
    """
    table = Table(title=title)
    if not columns:
        columns = [(name, "cyan") for name in (data[0].keys() if data else [])]
    for name, style in columns:
        table.add_column(name, style=style)
    for row in data:
        table.add_row(*(str(row.get(name, "")) for name, _ in columns))
    console.print(table)


def print_warning(message: str) -> None:
    console.print(f"[warning]Warning:[/warning] {message}")


def print_error(message: str) -> None:
    """
    Print an error message.

    Args:
        message: Error message text
    """
    console.print(f"[error]Error:[/error] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/success]")


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/info]")


def display_written_maps(written: Dict[str, Path], timings_ms: Dict[str, int]) -> None:
    """Show the written maps with their calculation times."""
    rows = [
        {"Map": map_type, "File": str(path), "Time": f"{timings_ms.get(map_type, 0) / 1000.0:.3f}s"}
        for map_type, path in written.items()
    ]
    print_rich_table(rows, "Generated Maps", [("Map", "cyan"), ("File", "blue"), ("Time", "green")])
