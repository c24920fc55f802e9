"""Timeline analysis: session window, relevant problems, reconnect classification."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

from .models import Event, EventKind
from .timeofday import MIDNIGHT, elapsed_seconds, to_seconds


@dataclass(frozen=True, slots=True)
class SessionWindow:
    """Session bounds. ``end`` is None when no graceful shutdown was logged."""

    start: str
    end: str | None

    def after_start(self, event: Event) -> bool:
        return event.seconds > to_seconds(self.start)

    def before_end(self, event: Event) -> bool:
        # No shutdown recorded: every event counts as before the end.
        if self.end is None:
            return True
        return event.seconds < to_seconds(self.end)


@dataclass(frozen=True, slots=True)
class TimelineAnalysis:
    """Everything the diagnoser needs, derived from the event sequence."""

    groups: dict[EventKind, tuple[Event, ...]]
    window: SessionWindow
    errors: tuple[Event, ...]  # post-start transport errors
    timeouts: tuple[Event, ...]  # post-start
    dns_errors: tuple[Event, ...]  # post-start
    device_disconnects: tuple[Event, ...]  # before session end
    transport_disconnects: tuple[Event, ...]  # post-start
    seamless: tuple[Event, ...]
    disruptive: tuple[Event, ...]

    def events(self, kind: EventKind) -> tuple[Event, ...]:
        return self.groups.get(kind, ())

    @property
    def hellos(self) -> tuple[Event, ...]:
        return self.events(EventKind.SERVER_HELLO)

    @property
    def connections(self) -> tuple[Event, ...]:
        return self.events(EventKind.DEVICE_CONNECTED)

    @property
    def has_problems(self) -> bool:
        return bool(self.errors or self.timeouts or self.disruptive or self.device_disconnects)


def group_events(events: Sequence[Event]) -> dict[EventKind, tuple[Event, ...]]:
    """Group events by kind; each group keeps chronological order."""
    grouped: dict[EventKind, list[Event]] = defaultdict(list)
    for e in events:
        grouped[e.kind].append(e)
    return {kind: tuple(grouped.get(kind, ())) for kind in EventKind}


def session_window(groups: dict[EventKind, tuple[Event, ...]]) -> SessionWindow:
    hellos = groups.get(EventKind.SERVER_HELLO, ())
    shutdowns = groups.get(EventKind.SHUTDOWN_STARTED, ())
    start = hellos[0].time if hellos else MIDNIGHT
    end = shutdowns[0].time if shutdowns else None
    return SessionWindow(start=start, end=end)


def is_seamless(disconnect: Event, hellos: Sequence[Event], threshold_sec: int) -> bool:
    """True if the first hello at or after the disconnect arrives within the threshold.

    Hellos are chronological, so only the first candidate needs checking; no
    later hello can be closer.
    """
    for hello in hellos:
        elapsed = elapsed_seconds(disconnect.time, hello.time)
        if elapsed < 0:
            continue
        return elapsed <= threshold_sec
    return False


def analyze_timeline(events: Sequence[Event], *, seamless_threshold_sec: int = 5) -> TimelineAnalysis:
    """Derive session bounds, relevant problems and reconnect partitions."""
    groups = group_events(events)
    window = session_window(groups)

    errors = tuple(e for e in groups[EventKind.TRANSPORT_ERROR] if window.after_start(e))
    timeouts = tuple(e for e in groups[EventKind.CONNECTION_TIMEOUT] if window.after_start(e))
    dns_errors = tuple(e for e in groups[EventKind.DNS_ERROR] if window.after_start(e))
    device_disconnects = tuple(
        e for e in groups[EventKind.DEVICE_DISCONNECTED] if window.before_end(e)
    )
    transport_disconnects = tuple(
        e for e in groups[EventKind.TRANSPORT_DISCONNECTED] if window.after_start(e)
    )

    hellos = groups[EventKind.SERVER_HELLO]
    seamless: list[Event] = []
    disruptive: list[Event] = []
    for d in transport_disconnects:
        if is_seamless(d, hellos, seamless_threshold_sec):
            seamless.append(d)
        else:
            disruptive.append(d)

    return TimelineAnalysis(
        groups=groups,
        window=window,
        errors=errors,
        timeouts=timeouts,
        dns_errors=dns_errors,
        device_disconnects=device_disconnects,
        transport_disconnects=transport_disconnects,
        seamless=tuple(seamless),
        disruptive=tuple(disruptive),
    )
