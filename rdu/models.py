from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict


class SortKey(str, Enum):
    SIZE = "size"
    NAME = "name"
    TYPE = "type"


@dataclass
class Entry:
    """One direct child of the scanned root."""
    path: Path
    is_dir: bool
    size: int
    file_type: str

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape: path, is_dir, size, file_type."""
        return {
            "path": str(self.path),
            "is_dir": self.is_dir,
            "size": self.size,
            "file_type": self.file_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        return cls(
            path=Path(data["path"]),
            is_dir=bool(data["is_dir"]),
            size=int(data["size"]),
            file_type=str(data["file_type"]),
        )


@dataclass(frozen=True)
class ExtensionGroup:
    extension: str
    count: int
    size: int
