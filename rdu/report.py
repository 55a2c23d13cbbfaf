from __future__ import annotations

"""
Report pipeline: turns scanned entries into the rows that get printed.

Order is fixed: min-size filter, sort, truncate. The extension summary and the
headline total are computed from the unfiltered entries.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from .filetypes import extension_of
from .models import Entry, ExtensionGroup, SortKey

NO_EXTENSION_KEY = "(none)"
EXT_SUMMARY_LIMIT = 20
EXT_ORDERS = ("key", "size")

SORT_FUNCS: Dict[SortKey, Callable[[Entry], object]] = {
    SortKey.SIZE: lambda entry: entry.size,
    SortKey.NAME: lambda entry: str(entry.path).lower(),
    SortKey.TYPE: lambda entry: entry.file_type,
}


def filter_min_size(entries: Iterable[Entry], min_size: Optional[int]) -> List[Entry]:
    if min_size is None:
        return list(entries)
    return [e for e in entries if e.size >= min_size]


def sort_entries(entries: Iterable[Entry], key: Union[SortKey, str] = SortKey.SIZE) -> List[Entry]:
    """Stable sort. Size is largest first; name and type are ascending."""
    key = SortKey(key)
    # reverse=True keeps equal keys in their original order as well
    return sorted(entries, key=SORT_FUNCS[key], reverse=key is SortKey.SIZE)


def truncate(entries: Sequence[Entry], top: Optional[int]) -> List[Entry]:
    if top is None:
        return list(entries)
    if top < 0:
        raise ValueError(f"top must be >= 0, got {top}")
    return list(entries[:top])


def apply_filters(
    entries: Iterable[Entry],
    *,
    min_size: Optional[int] = None,
    sort: Union[SortKey, str] = SortKey.SIZE,
    top: Optional[int] = None,
) -> List[Entry]:
    """Filter by min_size, sort by ``sort``, keep the first ``top``."""
    kept = filter_min_size(entries, min_size)
    return truncate(sort_entries(kept, sort), top)


def total_size(entries: Iterable[Entry]) -> int:
    return sum(e.size for e in entries)


def extension_summary(
    entries: Iterable[Entry],
    *,
    limit: Optional[int] = EXT_SUMMARY_LIMIT,
    order: str = "key",
) -> List[ExtensionGroup]:
    """Group file entries by lowercased extension.

    Args:
        entries: Full scan result; directories are ignored.
        limit: Maximum number of groups returned (None for all).
        order: "key" sorts groups by extension name; "size" by byte total,
            largest first, ties by name.

    Returns:
        List of ExtensionGroup in report order.
    """
    if order not in EXT_ORDERS:
        raise ValueError(f"Unknown extension summary order '{order}'; expected one of {', '.join(EXT_ORDERS)}")

    counts: Dict[str, int] = defaultdict(int)
    sizes: Dict[str, int] = defaultdict(int)
    for entry in entries:
        if entry.is_dir:
            continue
        key = extension_of(entry.path) or NO_EXTENSION_KEY
        counts[key] += 1
        sizes[key] += entry.size

    groups = [ExtensionGroup(extension=k, count=counts[k], size=sizes[k]) for k in sorted(counts)]
    if order == "size":
        groups.sort(key=lambda g: g.size, reverse=True)
    if limit is not None:
        groups = groups[:limit]
    return groups
