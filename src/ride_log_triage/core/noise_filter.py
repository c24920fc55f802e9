"""Noise filter: split raw session lines into kept and excluded.

Stage order per line:
1. Candidate gate: transport, shutdown, event-phrase or device vocabulary must appear.
2. Force-exclude markers drop the bulk of sensor chatter.
3. Device mentions and graceful-shutdown markers are always kept.
4. Standard exclusion list removes unrelated subsystem noise.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .devices import DeviceMatcher
from .recognizers import event_phrases


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Vocabularies driving the noise filter (regex fragments, case-insensitive)."""

    transport_tokens: Sequence[str]
    shutdown_tokens: Sequence[str]
    event_phrases: Sequence[str]
    force_exclude: Sequence[str]
    graceful_markers: Sequence[str]
    standard_exclusions: Sequence[str]


def default_filter_config() -> FilterConfig:
    """Default vocabularies for cycling-app session logs."""
    return FilterConfig(
        transport_tokens=(
            r"\bTCP\b",
            r"\bUDP\b",
            r"\bsocket",
            r"\bmDNS\b",
            r"DirectConnect",
            r"\bWi-?Fi\b",
            r"\bBLE\b",
            r"Bluetooth",
            r"\bANT\+",
            r"ConnectionManager",
        ),
        shutdown_tokens=(
            r"shutdown",
            r"shutting down",
            r"graceful",
            r"\blogout\b",
            r"destroyed",
            r"WatchdogDestroyed",
        ),
        event_phrases=event_phrases(),
        force_exclude=(
            r"Advertising Characteristic",
            r"Battery Level",
        ),
        graceful_markers=(
            r"\bgraceful",
            r"shutdown started",
            r"logout started",
        ),
        standard_exclusions=(
            r"Loading asset",
            r"AssetManager",
            r"GroupEvents",
            r"\bHUD\b",
            r"\bUI:",
            r"Steering",
            r"VideoCapture",
            r"Texture",
            r"Notification",
        ),
    )


def _alternation(fragments: Sequence[str]) -> re.Pattern[str] | None:
    if not fragments:
        return None
    return re.compile("|".join(f"(?:{f})" for f in fragments), re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Disjoint kept/excluded partitions of the input, each in source order."""

    kept: tuple[str, ...]
    excluded: tuple[str, ...]

    @property
    def total(self) -> int:
        return len(self.kept) + len(self.excluded)


class NoiseFilter:
    """Line classifier built once per run from a device matcher and vocabularies."""

    def __init__(self, devices: DeviceMatcher, config: FilterConfig | None = None) -> None:
        cfg = config or default_filter_config()
        self._devices = devices
        self._candidate = _alternation(
            [*cfg.transport_tokens, *cfg.shutdown_tokens, *cfg.event_phrases]
        )
        self._force_exclude = _alternation(cfg.force_exclude)
        self._graceful = _alternation(cfg.graceful_markers)
        self._standard = _alternation(cfg.standard_exclusions)

    @staticmethod
    def _hit(pattern: re.Pattern[str] | None, line: str) -> bool:
        return pattern is not None and pattern.search(line) is not None

    def keep(self, line: str) -> bool:
        """Return True if the line belongs to the filtered (kept) set."""
        mentions_device = self._devices.mentions_device(line)
        if not (mentions_device or self._hit(self._candidate, line)):
            return False
        if self._hit(self._force_exclude, line):
            return False
        if mentions_device or self._hit(self._graceful, line):
            return True
        return not self._hit(self._standard, line)

    def split(self, lines: Sequence[str]) -> FilterResult:
        kept: list[str] = []
        excluded: list[str] = []
        for line in lines:
            (kept if self.keep(line) else excluded).append(line)
        return FilterResult(kept=tuple(kept), excluded=tuple(excluded))


def filter_lines(
    lines: Sequence[str],
    devices: DeviceMatcher,
    config: FilterConfig | None = None,
) -> FilterResult:
    """Partition lines into kept and excluded."""
    return NoiseFilter(devices, config).split(lines)
