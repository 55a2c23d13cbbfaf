#!/usr/bin/env python3
"""
rdu.render

Rich output for scan reports: headline, entry table, extension summary,
JSON document and the scan progress bar.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

from rich import box
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from .models import Entry, ExtensionGroup
from .scanner import ScanProgress
from .size_utils import format_bytes_binary

DIR_GLYPH = "📁"
FILE_GLYPH = "📄"
ROOT_GLYPH = "📂"


def make_console(stderr: bool = False) -> Console:
    """Interactive console on a TTY; wide and colorless when redirected so no column is dropped."""
    stream = sys.stderr if stderr else sys.stdout
    if stream.isatty():
        return Console(stderr=stderr, highlight=False)
    return Console(
        stderr=stderr,
        width=200,
        force_terminal=False,
        no_color=True,
        highlight=False,
        soft_wrap=False,
    )


def format_root_name(path: Path) -> str:
    """Final path component, or the whole path for filesystem roots like "/" or "C:\\"."""
    resolved = Path(path).resolve()
    if resolved.parent == resolved:
        return str(resolved)
    return resolved.name or str(resolved)


def display_path(entry: Entry, root: Path) -> str:
    try:
        return str(entry.path.relative_to(root))
    except ValueError:
        return str(entry.path)


def print_headline(console: Console, root: Path, total: int) -> None:
    console.print()
    console.print(Text(f"Dir: {ROOT_GLYPH}{format_root_name(root)}\tSize: {format_bytes_binary(total)}"))
    console.print()


def build_table(entries: Sequence[Entry], root: Path) -> Table:
    table = Table(box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("#", justify="center", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Size", justify="right", style="green", no_wrap=True)

    for entry in entries:
        table.add_row(
            DIR_GLYPH if entry.is_dir else FILE_GLYPH,
            Text(display_path(entry, root), style="bold blue" if entry.is_dir else ""),
            Text(entry.file_type),
            format_bytes_binary(entry.size),
        )
    return table


def print_table(console: Console, entries: Sequence[Entry], root: Path) -> None:
    console.print(build_table(entries, root))


def print_ext_summary(console: Console, groups: Iterable[ExtensionGroup], order: str = "key") -> None:
    groups = list(groups)
    ranking = "by size" if order == "size" else "by extension"
    console.print()
    console.print(Text(f"By extension (top {len(groups)}, {ranking}):", style="bold"))
    for group in groups:
        console.print(Text(f"{group.extension:>10}  {group.count:>6} files  {format_bytes_binary(group.size)}"))


def entries_to_json(entries: Iterable[Entry]) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


def entries_from_json(text: str) -> List[Entry]:
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of entries")
    return [Entry.from_dict(item) for item in data]


def create_progress(console: Console) -> Progress:
    """Transient progress bar for the first-layer scan."""
    return Progress(
        SpinnerColumn(style="green"),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style="cyan", finished_style="blue"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def bind_progress(progress: Progress, description: str = "Scanning") -> ScanProgress:
    """Return a ScanProgress that drives one task of ``progress``."""
    task_id = progress.add_task(description, total=None)

    def _update(completed: int, total: int, path=None) -> None:
        progress.update(task_id, completed=completed, total=total)

    return ScanProgress(callback=_update)
