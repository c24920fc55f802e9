"""Time-of-day helpers.

Session logs stamp each line with a wall-clock ``[HH:MM:SS]`` prefix and no date.
Times are kept as zero-padded strings and compared as seconds since midnight.
"""

from __future__ import annotations

import re

_PREFIX_RE = re.compile(r"^\[(?P<h>\d{2}):(?P<m>\d{2}):(?P<s>\d{2})\]")

MIDNIGHT = "00:00:00"


def parse_line_time(line: str) -> str | None:
    """Return the ``HH:MM:SS`` prefix of a line, or None if absent or out of range."""
    m = _PREFIX_RE.match(line)
    if not m:
        return None
    h, mi, s = int(m.group("h")), int(m.group("m")), int(m.group("s"))
    if h > 23 or mi > 59 or s > 59:
        return None
    return f"{h:02d}:{mi:02d}:{s:02d}"


def to_seconds(ts: str) -> int:
    """Convert a zero-padded ``HH:MM:SS`` string into seconds since midnight."""
    h, m, s = ts.split(":")
    return int(h) * 3600 + int(m) * 60 + int(s)


def elapsed_seconds(start: str, end: str) -> int:
    """Seconds from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return to_seconds(end) - to_seconds(start)
