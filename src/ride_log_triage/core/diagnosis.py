"""Root-cause selection and narrative composition."""

from __future__ import annotations

from dataclasses import dataclass

from .config import AnalysisConfig
from .models import (
    Diagnosis,
    DiagnosisCategory,
    Event,
    ProblemCategory,
    ProblemRecord,
)
from .recognizers import DIRECT_MARKER
from .timeline import TimelineAnalysis

WHAT_HAPPENED = "=== WHAT HAPPENED ==="
PROBLEMS_DETECTED = "=== PROBLEMS DETECTED ==="
RESOLUTION = "=== RESOLUTION ==="
CONCLUSIONS = "=== CONCLUSIONS ==="

REJECTION_PHRASE = "actively refused"
NO_RECOVERY = "No recovery detected."

# Lower value wins when two candidates share the earliest timestamp.
_PRECEDENCE: dict[ProblemCategory, int] = {
    ProblemCategory.TRANSPORT_ERROR: 0,
    ProblemCategory.CONNECTION_TIMEOUT: 1,
    ProblemCategory.DISRUPTIVE_DISCONNECT: 2,
}

_DEVICE_PATH = {
    DiagnosisCategory.DIRECT_CONNECT_REJECTED,
    DiagnosisCategory.DEVICE_CONNECTION_FAILURE,
    DiagnosisCategory.DEVICE_DROPOUT,
}

_CONCLUSIONS: dict[DiagnosisCategory, tuple[str, ...]] = {
    DiagnosisCategory.INTERNET_LOST: (
        "The computer lost its internet connection: server hostnames could not be resolved.",
        "Check the router/modem and the WiFi signal at the riding spot.",
        "Prefer a wired Ethernet connection for the machine running the app.",
    ),
    DiagnosisCategory.DIRECT_CONNECT_REJECTED: (
        "The trainer's DirectConnect service actively refused the connection.",
        "This is a failure of the service on the device itself; it rarely recovers on its own.",
        "Power-cycle the trainer, then check for a firmware update.",
        "If it keeps happening, pair over BLE until the device is serviced.",
    ),
    DiagnosisCategory.DEVICE_CONNECTION_FAILURE: (
        "The link between the app and the device failed (DirectConnect or wireless).",
        "Reduce the distance to the device and remove sources of 2.4 GHz interference.",
        "For DirectConnect, make sure the device and computer share the same network segment.",
    ),
    DiagnosisCategory.SERVER_DISRUPTED: (
        "The connection to the game server dropped and took too long to come back.",
        "This is usually transient and on the server side; no local action is required.",
        "If it repeats across sessions, check the local network for drops.",
    ),
    DiagnosisCategory.NETWORK_LATENCY: (
        "The server connection was closed due to inactivity.",
        "This points at network latency or packet loss between the computer and the server.",
        "Check for bandwidth-heavy applications and test the line for packet loss.",
    ),
    DiagnosisCategory.DEVICE_DROPOUT: (
        "A paired device disconnected during the session without a transport error being logged.",
        "Check the device battery and the distance between the device and the receiver.",
    ),
}


@dataclass(frozen=True, slots=True)
class _RootCause:
    event: Event
    category: ProblemCategory


def collect_problems(timeline: TimelineAnalysis) -> list[ProblemRecord]:
    """All relevant problem events, merged and time-sorted across categories."""
    groups = (
        (ProblemCategory.TRANSPORT_ERROR, timeline.errors),
        (ProblemCategory.CONNECTION_TIMEOUT, timeline.timeouts),
        (ProblemCategory.DISRUPTIVE_DISCONNECT, timeline.disruptive),
        (ProblemCategory.DNS_ERROR, timeline.dns_errors),
        (ProblemCategory.DEVICE_DISCONNECT, timeline.device_disconnects),
    )
    records = [
        ProblemRecord(time=e.time, category=category, source_text=e.details)
        for category, events in groups
        for e in events
    ]
    # sorted() is stable, so same-second records keep the category order above.
    return sorted(records, key=lambda r: r.seconds)


def select_root_cause(timeline: TimelineAnalysis) -> _RootCause | None:
    """Earliest problem among first error, first timeout and first disruptive disconnect."""
    candidates: list[_RootCause] = []
    if timeline.errors:
        candidates.append(_RootCause(timeline.errors[0], ProblemCategory.TRANSPORT_ERROR))
    if timeline.timeouts:
        candidates.append(_RootCause(timeline.timeouts[0], ProblemCategory.CONNECTION_TIMEOUT))
    if timeline.disruptive:
        candidates.append(_RootCause(timeline.disruptive[0], ProblemCategory.DISRUPTIVE_DISCONNECT))

    if candidates:
        return min(candidates, key=lambda c: (c.event.seconds, _PRECEDENCE[c.category]))
    if timeline.device_disconnects:
        return _RootCause(timeline.device_disconnects[0], ProblemCategory.DEVICE_DISCONNECT)
    return None


def classify(timeline: TimelineAnalysis, root: _RootCause) -> DiagnosisCategory:
    """Map a root cause plus secondary evidence to a diagnosis (first rule wins)."""
    if timeline.dns_errors:
        return DiagnosisCategory.INTERNET_LOST
    if root.category is ProblemCategory.TRANSPORT_ERROR:
        details = root.event.details
        if REJECTION_PHRASE in details.lower() and DIRECT_MARKER in details:
            return DiagnosisCategory.DIRECT_CONNECT_REJECTED
        return DiagnosisCategory.DEVICE_CONNECTION_FAILURE
    if root.category is ProblemCategory.DISRUPTIVE_DISCONNECT:
        return DiagnosisCategory.SERVER_DISRUPTED
    if root.category is ProblemCategory.CONNECTION_TIMEOUT:
        return DiagnosisCategory.NETWORK_LATENCY
    return DiagnosisCategory.DEVICE_DROPOUT


def _first_after(events: tuple[Event, ...], seconds: int) -> Event | None:
    for e in events:
        if e.seconds > seconds:
            return e
    return None


def _was_direct(timeline: TimelineAnalysis, root: _RootCause) -> bool:
    if DIRECT_MARKER in root.event.details:
        return True
    earlier = [c for c in timeline.connections if c.seconds <= root.event.seconds]
    return bool(earlier) and DIRECT_MARKER in earlier[-1].details


def _resolution(
    timeline: TimelineAnalysis,
    root: _RootCause,
    category: DiagnosisCategory,
) -> tuple[list[str], str | None]:
    lines: list[str] = []
    if category in _DEVICE_PATH:
        recovered = _first_after(timeline.connections, root.event.seconds)
        if recovered is None:
            return [NO_RECOVERY], None
        lines.append(f"Device reconnected at {recovered.time} ({recovered.details}).")
        if _was_direct(timeline, root) and DIRECT_MARKER not in recovered.details:
            lines.append(
                f"Fallback: the device was originally linked via {DIRECT_MARKER} "
                "and came back over standard BLE."
            )
        return lines, recovered.time

    recovered = _first_after(timeline.hellos, root.event.seconds)
    if recovered is None:
        return [NO_RECOVERY], None
    lines.append(f"Server connection re-established at {recovered.time} (server hello received).")
    return lines, recovered.time


def _what_happened(timeline: TimelineAnalysis, has_problems: bool) -> list[str]:
    window = timeline.window
    lines = [f"Session started at {window.start} (first server hello)."]
    for c in timeline.connections:
        lines.append(f"{c.time} connected: {c.details}")
    if not has_problems:
        lines.append("The session ran without connection issues.")
    if window.end is not None:
        lines.append(f"Session ended gracefully at {window.end}.")
    else:
        lines.append("No graceful shutdown was recorded.")
    return lines


def _nearby_seamless(timeline: TimelineAnalysis, proximity_sec: int) -> list[str]:
    if not timeline.errors:
        return []
    ref = timeline.errors[0].seconds
    return [s.time for s in timeline.seamless if abs(s.seconds - ref) <= proximity_sec]


def diagnose(timeline: TimelineAnalysis, config: AnalysisConfig | None = None) -> Diagnosis:
    """Build the Diagnosis for an analyzed timeline. Never raises on log content."""
    config = config or AnalysisConfig()
    has_problems = timeline.has_problems

    # Without a server session nothing is diagnosed, so nothing is reported as a problem.
    if not timeline.hellos:
        return Diagnosis(
            has_problems=False,
            root_cause=None,
            category=DiagnosisCategory.NONE,
            first_problem_time=None,
            narrative=(),
        )

    narrative = [WHAT_HAPPENED, *_what_happened(timeline, has_problems)]
    root = select_root_cause(timeline) if has_problems else None

    if root is None:
        narrative += ["", CONCLUSIONS, "No connection problems were detected."]
        return Diagnosis(
            has_problems=has_problems,
            root_cause=None,
            category=DiagnosisCategory.NONE,
            first_problem_time=None,
            narrative=tuple(narrative),
        )

    problems = collect_problems(timeline)
    category = classify(timeline, root)

    narrative += ["", PROBLEMS_DETECTED]
    narrative += [f"{p.time} [{p.category.value}] {p.source_text}" for p in problems]
    nearby = _nearby_seamless(timeline, config.problem_proximity_sec)
    if nearby:
        narrative.append(f"Seamless server reconnects near the first error: {', '.join(nearby)}")
    narrative.append(f"Root cause: {root.category.value} at {root.event.time}.")

    resolution, recovery_time = _resolution(timeline, root, category)
    narrative += ["", RESOLUTION, *resolution]

    narrative += ["", CONCLUSIONS, f"Diagnosis: {category.value}."]
    narrative += list(_CONCLUSIONS[category])

    return Diagnosis(
        has_problems=True,
        root_cause=root.category,
        category=category,
        first_problem_time=root.event.time,
        narrative=tuple(narrative),
        problems=tuple(problems),
        recovery_time=recovery_time,
    )
