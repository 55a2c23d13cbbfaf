#!/usr/bin/env python3
"""
rdu package: first-layer disk usage reports and file previews.
"""

__all__ = [
    "cli",
    "config",
    "errors",
    "filetypes",
    "models",
    "preview",
    "render",
    "report",
    "scanner",
    "size_utils",
]

__version__ = "0.4.0"
