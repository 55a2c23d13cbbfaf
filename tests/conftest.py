import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Make the rdu package importable without installing it
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory, monkeypatch):
    """Keep a real ~/.config/rdu/config.yml out of the tests."""
    xdg = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    monkeypatch.setenv("APPDATA", str(xdg))
    return xdg


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """a.txt (13 bytes) and sub/b.txt (17 bytes)."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_bytes(b"x" * 13)
    (root / "sub").mkdir()
    (root / "sub" / "b.txt").write_bytes(b"y" * 17)
    return root


@pytest.fixture
def string_console():
    buf = io.StringIO()
    console = Console(file=buf, width=200, no_color=True, highlight=False, force_terminal=False)
    return console, buf


@pytest.fixture
def deep_tree():
    """Builds chains of nested ``d`` directories with ``leaf.bin`` at the bottom.

    Creation and removal are level by level; pathlib and shutil recurse per
    level and would hit the recursion limit on these trees.
    """
    chains = []

    def build(base: Path, levels: int, size: int = 7) -> Path:
        base.mkdir(parents=True, exist_ok=True)
        dirs = []
        current = base
        for _ in range(levels):
            current = current / "d"
            current.mkdir()
            dirs.append(current)
        (current / "leaf.bin").write_bytes(b"q" * size)
        chains.append(dirs)
        return base

    yield build

    for dirs in chains:
        for directory in reversed(dirs):
            for child in directory.iterdir():
                if not child.is_dir():
                    child.unlink()
            directory.rmdir()
