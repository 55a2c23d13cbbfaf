from __future__ import annotations

"""
Byte-count parsing and formatting for rdu.

- parse_size_to_bytes: "500M", "2GiB", "1024" -> int byte count (binary multiples).
- format_bytes_binary: int byte count -> "1.50 MiB".
"""

from typing import Optional


_MULTIPLIERS = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "kib": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "mib": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "gib": 1024**3,
    "t": 1024**4,
    "tb": 1024**4,
    "tib": 1024**4,
}

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def parse_size_to_bytes(raw: Optional[str]) -> Optional[int]:
    """
    Parse a human-friendly size into bytes.

    Accepted forms (case-insensitive, optional space before the unit):
    - "123" -> 123
    - "64K", "64KB", "64KiB"
    - "1.5G" -> int(1.5 * 1024**3)

    Returns None for None or blank input.
    Raises ValueError for anything else that does not parse, including negatives.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None

    split_at = 0
    while split_at < len(text) and (text[split_at].isdigit() or text[split_at] in ".,"):
        split_at += 1
    number = text[:split_at].replace(",", "")
    unit = text[split_at:].strip().lower()

    if not number:
        raise ValueError(f"Invalid size '{raw}': missing number")
    try:
        value = float(number)
    except ValueError as e:
        raise ValueError(f"Invalid size '{raw}'") from e

    if unit not in _MULTIPLIERS:
        raise ValueError(f"Unknown size unit in '{raw}'; expected B, K, M, G or T (optional 'B'/'iB').")
    return int(value * _MULTIPLIERS[unit])


def format_bytes_binary(num_bytes: int) -> str:
    """
    Format a byte count with binary units.

        0 -> "0 B", 1023 -> "1023 B", 1536 -> "1.50 KiB"
    """
    value = float(num_bytes)
    idx = 0
    while value >= 1024.0 and idx < len(_UNITS) - 1:
        value /= 1024.0
        idx += 1
    if idx == 0:
        return f"{int(value)} B"
    return f"{value:.2f} {_UNITS[idx]}"
