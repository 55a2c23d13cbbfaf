from __future__ import annotations

"""
Exception types raised by rdu.

Per-entry problems during a walk never surface as exceptions; these cover
failures that stop an invocation.
"""

from pathlib import Path
from typing import Optional, Union


class RduError(Exception):
    """Base class for all rdu failures reported to the user."""


class ScanError(RduError):
    """The scan root is missing, not a directory, or cannot be listed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = path


class PreviewError(RduError):
    """A single-file preview could not be produced."""


class ConfigError(RduError):
    """The defaults file is unreadable or holds invalid values."""
