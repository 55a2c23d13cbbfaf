from __future__ import annotations

"""
File type labels shown in the Type column.

Labels come from a fixed extension table; unknown extensions fall back to the
uppercased extension itself.
"""

from pathlib import Path
from typing import Dict, Union

DIR_TYPE = "—"
DOT_FILE_TYPE = "DOT FILE"
NO_EXT_TYPE = "NO EXT"

EXTENSION_LABELS: Dict[str, str] = {
    "rs": "RUST",
    "py": "PYTHON",
    "js": "JAVASCRIPT",
    "ts": "TYPESCRIPT",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "java": "JAVA",
    "rb": "RUBY",
    "php": "PHP",
    "html": "HTML",
    "css": "CSS",
    "sh": "SHELL",
    "go": "GO",
    "zig": "ZIG",
    "json": "JSON",
    "xml": "XML",
    "toml": "CARGO",
    "yaml": "YAML",
    "yml": "YAML",
    "exe": "APPLICATION",
    "dll": "DLL",
    "pem": "KEY",
    "md": "MARKDOWN",
    "mp3": "MP3 AUDIO",
    "m4a": "M4A AUDIO",
    "mp4": "MP4 VIDEO",
    "mkv": "MKV VIDEO",
    "jpg": "JPEG IMAGE",
    "jpeg": "JPEG IMAGE",
    "png": "PNG IMAGE",
    "pdf": "PDF",
    "txt": "PLAIN TEXT",
    "csv": "CSV",
}


def extension_of(path: Union[str, Path]) -> str:
    """Lowercased extension without the dot, '' when there is none."""
    return Path(path).suffix.lower().lstrip(".")


def file_type_for(path: Union[str, Path]) -> str:
    """Return the display label for a file path."""
    name = Path(path).name
    # ".env", ".bashrc": Path.suffix is empty for these
    if name.startswith("."):
        return DOT_FILE_TYPE
    ext = extension_of(path)
    if not ext:
        return NO_EXT_TYPE
    return EXTENSION_LABELS.get(ext, ext.upper())
