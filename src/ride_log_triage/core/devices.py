"""Device resolution and the compiled device matcher."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .config import DEFAULT_DEVICE_PATTERNS

logger = logging.getLogger(__name__)

_STATUS_RE = re.compile(r'Device: "(?P<name>[^"]+)" has new connection status')


def detect_devices(lines: Sequence[str]) -> list[str]:
    """Collect device names from connection-status lines, in order of first appearance."""
    seen: dict[str, None] = {}
    for line in lines:
        m = _STATUS_RE.search(line)
        if m:
            seen.setdefault(m.group("name"), None)
    return list(seen)


def resolve_devices(
    lines: Sequence[str],
    *,
    explicit: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> tuple[str, ...]:
    """Return the device pattern set for a session; never empty.

    Explicit patterns are used verbatim. Otherwise names are auto-detected and
    any name containing an exclusion literal is dropped.
    """
    if explicit:
        patterns = [p for p in dict.fromkeys(explicit) if p]
    else:
        detected = detect_devices(lines)
        patterns = [name for name in detected if not any(x and x in name for x in exclude)]
        logger.debug("Auto-detected devices: %s (excluded by %s)", detected, list(exclude))

    if not patterns:
        logger.info("No devices resolved; falling back to %s", list(DEFAULT_DEVICE_PATTERNS))
        return DEFAULT_DEVICE_PATTERNS
    return tuple(patterns)


@dataclass(frozen=True, slots=True)
class DeviceMatcher:
    """Regexes compiled once from the resolved device set.

    Every pattern is escaped, so special characters in device names match literally.
    """

    patterns: tuple[str, ...]
    _any: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _status: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.patterns:
            raise ValueError("DeviceMatcher requires at least one pattern")
        alternation = "|".join(re.escape(p) for p in self.patterns)
        object.__setattr__(self, "_any", re.compile(alternation))
        object.__setattr__(
            self,
            "_status",
            re.compile(
                r'Device: "(?P<name>[^"]*(?:' + alternation + r')[^"]*)" '
                r"has new connection status: (?P<status>connected|disconnected)\b"
            ),
        )

    def mentions_device(self, line: str) -> bool:
        return self._any.search(line) is not None

    def connection_status(self, line: str) -> tuple[str, str] | None:
        """Return ``(device_name, status)`` for a status line of a known device."""
        m = self._status.search(line)
        if not m:
            return None
        return m.group("name"), m.group("status")
