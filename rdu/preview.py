from __future__ import annotations

"""
Single-file previews.

A .csv file is shown as a table (header plus the first rows); anything else is
printed as numbered text lines. The preview is built completely before it is
printed so a failure never leaves half a preview on screen.
"""

import csv
import itertools
import logging
from pathlib import Path
from typing import List, Tuple, Union

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .errors import PreviewError

logger = logging.getLogger(__name__)

CSV_PREVIEW_ROWS = 10
DEFAULT_HEAD_LINES = 400


def is_csv(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() == ".csv"


def read_csv_preview(path: Path, rows: int = CSV_PREVIEW_ROWS) -> Tuple[List[str], List[List[str]]]:
    """Return (header, first ``rows`` records).

    Raises:
        PreviewError: unreadable file, bad encoding, csv syntax error, or a
            record whose field count differs from the header.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                return [], []
            records: List[List[str]] = []
            for record in itertools.islice(reader, rows):
                if len(record) != len(header):
                    raise PreviewError(
                        f"Malformed CSV {path}: line {reader.line_num} has {len(record)} fields, expected {len(header)}"
                    )
                records.append(record)
    except csv.Error as e:
        raise PreviewError(f"Malformed CSV {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise PreviewError(f"Failed to decode {path} as UTF-8: {e.reason}") from e
    except OSError as e:
        raise PreviewError(f"Failed to read file {path}: {e.strerror or e}") from e
    return header, records


def read_text_head(path: Path, head: int = DEFAULT_HEAD_LINES) -> List[str]:
    """First ``head`` lines of a UTF-8 text file, without line endings."""
    if head < 0:
        raise PreviewError(f"head must be >= 0, got {head}")
    try:
        with path.open("r", encoding="utf-8") as f:
            return [line.rstrip("\r\n") for line in itertools.islice(f, head)]
    except UnicodeDecodeError as e:
        raise PreviewError(f"Failed to decode {path} as UTF-8: {e.reason}") from e
    except OSError as e:
        raise PreviewError(f"Failed to read file {path}: {e.strerror or e}") from e


def build_csv_table(header: List[str], records: List[List[str]]) -> Table:
    table = Table(box=box.SIMPLE_HEAVY)
    for name in header:
        table.add_column(Text(name), overflow="fold")
    for record in records:
        table.add_row(*(Text(cell) for cell in record))
    return table


def preview_file(path: Union[str, Path], console: Console, head: int = DEFAULT_HEAD_LINES) -> None:
    path = Path(path)
    logger.debug("Previewing %s", path)
    if is_csv(path):
        header, records = read_csv_preview(path)
        if not header:
            console.print(Text(f"{path.name}: empty CSV file", style="yellow"))
            return
        console.print(build_csv_table(header, records))
        return

    lines = read_text_head(path, head)
    for number, line in enumerate(lines, start=1):
        console.print(Text(f"{number:>5} {line}"), soft_wrap=True)
