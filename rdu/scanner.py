#!/usr/bin/env python3
"""
rdu.scanner

Size aggregation for a single directory level.

- accumulate_size: recursive byte total of everything below a directory.
- collect_first_layer: one Entry per direct child of a root, children measured
  concurrently in a thread pool.
- scan_directory: validates the root and wraps the collector result with its total.

Permission-denied and vanished entries are skipped where they are met and count
as zero. Any other OSError stops the accumulation of that subtree.
"""

from __future__ import annotations

import concurrent.futures
import errno
import logging
import os
import stat
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from .errors import ScanError
from .filetypes import DIR_TYPE, file_type_for
from .models import Entry

logger = logging.getLogger(__name__)

IGNORED_NAMES: FrozenSet[str] = frozenset(
    {".git", "node_modules", "target", "dist", "build", ".idea", ".vscode"}
)

ProgressCallback = Callable[[int, int, Optional[str]], None]


def is_ignored_name(name: str) -> bool:
    """True for names in the smart-ignore set (case-insensitive)."""
    return name.lower() in IGNORED_NAMES


def _is_skippable(exc: OSError) -> bool:
    # ELOOP shows up for self-referencing symlinks once they are followed
    if isinstance(exc, (PermissionError, FileNotFoundError)):
        return True
    return exc.errno == errno.ELOOP


@dataclass
class ScanOptions:
    depth: int = 1
    follow_symlinks: bool = False
    smart_ignore: bool = True
    workers: Optional[int] = None

    def max_workers(self) -> int:
        if self.workers is not None and self.workers > 0:
            return self.workers
        return os.cpu_count() or 1


@dataclass
class ScanResult:
    root: Path
    entries: List[Entry] = field(default_factory=list)
    total_size: int = 0


class ScanProgress:
    """Completed-children counter for one scan.

    Workers call advance() as they finish; the optional callback receives
    (completed, total, path) after every increment.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self.total = 0
        self.completed = 0
        self._callback = callback
        self._lock = threading.Lock()

    def start(self, total: int) -> None:
        with self._lock:
            self.total = total
            self.completed = 0
        if self._callback:
            self._callback(0, total, None)

    def advance(self, path: Optional[str] = None) -> int:
        with self._lock:
            self.completed += 1
            done = self.completed
        if self._callback:
            self._callback(done, self.total, path)
        return done


def accumulate_size(
    path: Union[str, Path],
    *,
    follow_symlinks: bool = False,
    smart_ignore: bool = True,
) -> int:
    """Return the total byte size of all files nested below ``path``.

    Iterative walk over an explicit stack of pending directories.

    Args:
        path: Directory to walk.
        follow_symlinks: Traverse symlinked directories. When False a symlink
            counts with its own lstat size.
        smart_ignore: Skip IGNORED_NAMES at every level.

    Raises:
        OSError: for failures other than permission denied / not found.
    """
    total = 0
    # Each pending directory carries the (st_dev, st_ino) chain of its
    # ancestors. Only the descent path is tracked, so a directory linked from
    # two places is still counted twice.
    pending: List[Tuple[str, FrozenSet[Tuple[int, int]]]] = [(os.fspath(path), frozenset())]

    while pending:
        current, ancestors = pending.pop()
        if follow_symlinks:
            try:
                st = os.stat(current)
            except OSError as e:
                if _is_skippable(e):
                    logger.debug("Skipping unreadable directory %s: %s", current, e)
                    continue
                raise
            key = (st.st_dev, st.st_ino)
            if key in ancestors:
                logger.debug("Symlink cycle at %s; not descending", current)
                continue
            ancestors = ancestors | {key}

        try:
            listing = os.scandir(current)
        except OSError as e:
            if _is_skippable(e):
                logger.debug("Skipping unreadable directory %s: %s", current, e)
                continue
            raise

        with listing:
            for child in listing:
                if smart_ignore and is_ignored_name(child.name):
                    continue
                try:
                    if child.is_dir(follow_symlinks=follow_symlinks):
                        pending.append((child.path, ancestors))
                    else:
                        total += child.stat(follow_symlinks=follow_symlinks).st_size
                except OSError as e:
                    if not _is_skippable(e):
                        raise
                    logger.debug("Skipping %s: %s", child.path, e)
    return total


def _measure_child(child: os.DirEntry, options: ScanOptions, progress: Optional[ScanProgress]) -> Optional[Entry]:
    try:
        if options.smart_ignore and is_ignored_name(child.name):
            return None
        try:
            st = child.stat(follow_symlinks=options.follow_symlinks)
        except OSError as e:
            logger.debug("Dropping %s: %s", child.path, e)
            return None

        is_dir = stat.S_ISDIR(st.st_mode)
        if not is_dir:
            size = st.st_size
        elif options.depth == 0:
            size = 0
        else:
            size = accumulate_size(
                child.path,
                follow_symlinks=options.follow_symlinks,
                smart_ignore=options.smart_ignore,
            )

        path = Path(child.path)
        return Entry(
            path=path,
            is_dir=is_dir,
            size=size,
            file_type=DIR_TYPE if is_dir else file_type_for(path),
        )
    finally:
        if progress is not None:
            progress.advance(child.path)


def collect_first_layer(
    root: Union[str, Path],
    options: Optional[ScanOptions] = None,
    progress: Optional[ScanProgress] = None,
) -> List[Entry]:
    """Measure every direct child of ``root``.

    Returned order is completion order. A child whose measurement fails with
    an unexpected OSError is logged and left out.

    Raises:
        ScanError: if ``root`` cannot be listed.
    """
    options = options or ScanOptions()
    root = Path(root)

    try:
        with os.scandir(root) as listing:
            children = list(listing)
    except OSError as e:
        raise ScanError(f"Failed to read directory {root}: {e.strerror or e}", root) from e

    if progress is not None:
        progress.start(len(children))
    logger.debug("Scanning %d entries under %s with %d workers", len(children), root, options.max_workers())

    entries: List[Entry] = []
    if not children:
        return entries

    with concurrent.futures.ThreadPoolExecutor(max_workers=options.max_workers()) as ex:
        futures = {ex.submit(_measure_child, child, options, progress): child for child in children}
        for fut in concurrent.futures.as_completed(futures):
            try:
                entry = fut.result()
            except OSError as e:
                logger.warning("Skipping %s: %s", futures[fut].path, e)
                continue
            if entry is not None:
                entries.append(entry)
    return entries


def scan_directory(
    root: Union[str, Path],
    options: Optional[ScanOptions] = None,
    progress: Optional[ScanProgress] = None,
) -> ScanResult:
    """Validate ``root`` and collect its first layer."""
    root_path = Path(root).expanduser()
    if not root_path.exists():
        raise ScanError(f"Path does not exist: {root_path}", root_path)
    if not root_path.is_dir():
        raise ScanError(f"Not a directory: {root_path}", root_path)

    entries = collect_first_layer(root_path, options, progress)
    return ScanResult(root=root_path, entries=entries, total_size=sum(e.size for e in entries))
