"""Log loading and the end-to-end analysis pipeline.

This module is the main integration point: it reads a session log and runs
device resolution, noise filtering, event parsing, timeline analysis and
diagnosis over the fully materialized line sequence.
"""

from __future__ import annotations

import gzip
import logging
from collections import Counter
from collections.abc import Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiofiles
from aiofiles.threadpool import wrap

from .config import AnalysisConfig, resolve_analysis_config
from .devices import DeviceMatcher, resolve_devices
from .diagnosis import diagnose
from .event_parser import EventParser
from .models import Diagnosis, Event, EventKind
from .noise_filter import FilterConfig, FilterResult, NoiseFilter
from .timeline import TimelineAnalysis, analyze_timeline

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def read_log_lines(
    log_path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> list[str]:
    """Read every line of a session log into memory, without line endings."""
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
        return [line.rstrip("\r\n") async for line in f]


@dataclass(frozen=True, slots=True)
class SessionAnalysis:
    """Result of one pipeline run."""

    devices: tuple[str, ...]
    filter_result: FilterResult
    events: tuple[Event, ...]
    timeline: TimelineAnalysis
    diagnosis: Diagnosis

    @property
    def kept(self) -> tuple[str, ...]:
        return self.filter_result.kept

    @property
    def excluded(self) -> tuple[str, ...]:
        return self.filter_result.excluded

    def summary(self) -> dict[str, Any]:
        """Summary counts for reports."""
        total = self.filter_result.total
        kept = len(self.kept)
        counts = Counter(e.kind for e in self.events)
        return {
            "total_lines": total,
            "kept_lines": kept,
            "excluded_lines": len(self.excluded),
            "reduction_pct": round(100.0 * (total - kept) / total, 1) if total else 0.0,
            "events": {kind.value: counts.get(kind, 0) for kind in EventKind},
            "seamless_reconnects": len(self.timeline.seamless),
            "disruptive_disconnects": len(self.timeline.disruptive),
        }


def analyze_lines(
    lines: Sequence[str],
    config: AnalysisConfig | None = None,
    *,
    filter_config: FilterConfig | None = None,
) -> SessionAnalysis:
    """Run the full diagnosis pipeline over an in-memory line sequence."""
    config = config or AnalysisConfig()
    config.validate()
    lines = tuple(lines)

    devices = resolve_devices(
        lines,
        explicit=config.device_patterns,
        exclude=config.exclude_patterns,
    )
    matcher = DeviceMatcher(devices)
    logger.debug("Resolved devices: %s", list(devices))

    filtered = NoiseFilter(matcher, filter_config).split(lines)
    logger.debug(
        "Noise filter kept %d of %d lines (%d excluded)",
        len(filtered.kept),
        filtered.total,
        len(filtered.excluded),
    )

    events = EventParser(matcher, config).parse(filtered.kept)
    logger.debug("Parsed %d events", len(events))

    timeline = analyze_timeline(events, seamless_threshold_sec=config.seamless_threshold_sec)
    diagnosis = diagnose(timeline, config)

    return SessionAnalysis(
        devices=devices,
        filter_result=filtered,
        events=tuple(events),
        timeline=timeline,
        diagnosis=diagnosis,
    )


async def analyze_log_file(
    log_path: str | Path,
    config: AnalysisConfig | None = None,
    **read_kwargs,
) -> SessionAnalysis:
    """Read a log file and analyze it.

    An explicit ``config`` is used as given; without one, the defaults with env
    overrides apply.
    """
    if config is None:
        config = resolve_analysis_config(None)
    lines = await read_log_lines(log_path, **read_kwargs)
    return analyze_lines(lines, config)
