from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from rdu.filetypes import DIR_TYPE
from rdu.models import Entry, ExtensionGroup
from rdu.render import (
    DIR_GLYPH,
    FILE_GLYPH,
    bind_progress,
    build_table,
    create_progress,
    display_path,
    entries_from_json,
    entries_to_json,
    format_root_name,
    print_ext_summary,
    print_headline,
    print_table,
)


@pytest.fixture
def entries(tmp_path: Path):
    return [
        Entry(path=tmp_path / "sub", is_dir=True, size=17, file_type=DIR_TYPE),
        Entry(path=tmp_path / "a.txt", is_dir=False, size=13, file_type="PLAIN TEXT"),
        Entry(path=tmp_path / "weird [name].bin", is_dir=False, size=2048, file_type="BIN"),
    ]


def test_json_round_trip(entries):
    text = entries_to_json(entries)
    data = json.loads(text)
    assert [set(item) for item in data] == [{"path", "is_dir", "size", "file_type"}] * 3
    assert data[0]["file_type"] == DIR_TYPE
    assert entries_from_json(text) == entries


def test_entries_from_json_requires_array():
    with pytest.raises(ValueError):
        entries_from_json('{"path": "x"}')


def test_table_rows(entries, tmp_path, string_console):
    console, buf = string_console
    print_table(console, entries, tmp_path)
    out = buf.getvalue()
    for header in ("#", "Path", "Type", "Size"):
        assert header in out
    assert "weird [name].bin" in out
    assert "2.00 KiB" in out
    assert "13 B" in out
    assert DIR_GLYPH in out and FILE_GLYPH in out
    assert str(tmp_path) not in out


def test_build_table_has_one_row_per_entry(entries, tmp_path):
    table = build_table(entries, tmp_path)
    assert table.row_count == 3
    assert [c.header for c in table.columns] == ["#", "Path", "Type", "Size"]


def test_display_path_falls_back_outside_root(tmp_path):
    entry = Entry(path=Path("/elsewhere/x"), is_dir=False, size=1, file_type="NO EXT")
    assert display_path(entry, tmp_path) == str(Path("/elsewhere/x"))


def test_format_root_name(tmp_path):
    assert format_root_name(tmp_path / "project") == "project"
    root = Path(tmp_path.anchor)
    assert format_root_name(root) == str(root)


def test_headline(tmp_path, string_console):
    console, buf = string_console
    (tmp_path / "proj").mkdir()
    print_headline(console, tmp_path / "proj", 30)
    out = buf.getvalue()
    assert "Dir:" in out and "proj" in out and "Size: 30 B" in out


def test_ext_summary_output(string_console):
    console, buf = string_console
    print_ext_summary(console, [ExtensionGroup("py", 1, 10), ExtensionGroup("rs", 2, 150)])
    lines = buf.getvalue().splitlines()
    assert any("By extension" in line for line in lines)
    assert any(line.split() == ["rs", "2", "files", "150", "B"] for line in lines)


def test_bind_progress_tracks_completion():
    console = Console(file=io.StringIO(), force_terminal=False)
    with create_progress(console) as progress:
        scan_progress = bind_progress(progress, "Scanning")
        scan_progress.start(4)
        for _ in range(4):
            scan_progress.advance()
        task = progress.tasks[0]
        assert task.total == 4
        assert task.completed == 4
        assert task.finished
