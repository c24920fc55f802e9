"""Turn kept lines into a chronological Event sequence."""

from __future__ import annotations

from collections.abc import Sequence

from .config import AnalysisConfig
from .devices import DeviceMatcher
from .models import Event
from .recognizers import ParseContext, Recognizer, default_recognizers
from .timeofday import parse_line_time


class EventParser:
    """Apply an ordered recognizer table to each kept line."""

    def __init__(
        self,
        devices: DeviceMatcher,
        config: AnalysisConfig,
        recognizers: Sequence[Recognizer] | None = None,
    ) -> None:
        self._devices = devices
        self._config = config
        self._recognizers = list(recognizers) if recognizers is not None else default_recognizers()

    def parse_line(self, lines: Sequence[str], index: int) -> Event | None:
        """Return the event for ``lines[index]``, or None when nothing matches."""
        time = parse_line_time(lines[index])
        if time is None:
            return None
        ctx = ParseContext(
            lines=lines,
            index=index,
            time=time,
            devices=self._devices,
            config=self._config,
        )
        for r in self._recognizers:
            event = r.recognize(ctx)
            if event is not None:
                return event
        return None

    def parse(self, lines: Sequence[str]) -> list[Event]:
        events: list[Event] = []
        for i in range(len(lines)):
            event = self.parse_line(lines, i)
            if event is not None:
                events.append(event)
        return events


def parse_events(
    lines: Sequence[str],
    devices: DeviceMatcher,
    config: AnalysisConfig | None = None,
) -> list[Event]:
    """Parse kept lines into events (source order, at most one per line)."""
    return EventParser(devices, config or AnalysisConfig()).parse(tuple(lines))
