"""Core data models for session diagnosis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .timeofday import to_seconds


class EventKind(str, Enum):
    """Structured event types recognized in a session log."""

    DEVICE_CONNECTED = "device_connected"
    DEVICE_DISCONNECTED = "device_disconnected"
    TRANSPORT_ERROR = "transport_error"
    TRANSPORT_DISCONNECTED = "transport_disconnected"
    DNS_ERROR = "dns_error"
    CONNECTION_TIMEOUT = "connection_timeout"
    SERVER_HELLO = "server_hello"
    SHUTDOWN_STARTED = "shutdown_started"


class ProblemCategory(str, Enum):
    """Normalized problem categories; values are the user-facing labels."""

    TRANSPORT_ERROR = "device connection error"
    CONNECTION_TIMEOUT = "transport timeout"
    DISRUPTIVE_DISCONNECT = "disruptive server disconnection"
    DNS_ERROR = "DNS error"
    DEVICE_DISCONNECT = "unexpected device disconnect"


class DiagnosisCategory(str, Enum):
    """Final diagnosis derived from the root cause and secondary evidence."""

    NONE = "none"
    INTERNET_LOST = "internet connectivity lost"
    DIRECT_CONNECT_REJECTED = "device's direct-connection service rejected the connection"
    DEVICE_CONNECTION_FAILURE = "direct/wireless connection failure"
    SERVER_DISRUPTED = "server connection disrupted, transient"
    NETWORK_LATENCY = "network latency/packet loss"
    DEVICE_DROPOUT = "device dropped out"


@dataclass(frozen=True, slots=True)
class Event:
    """One structured event parsed from a kept log line."""

    time: str  # zero-padded HH:MM:SS
    kind: EventKind
    details: str
    line_no: int = 0  # index in the kept-line sequence

    @property
    def seconds(self) -> int:
        return to_seconds(self.time)


@dataclass(frozen=True, slots=True)
class ProblemRecord:
    """A problem candidate surfaced in the narrative."""

    time: str
    category: ProblemCategory
    source_text: str

    @property
    def seconds(self) -> int:
        return to_seconds(self.time)


@dataclass(frozen=True, slots=True)
class Diagnosis:
    """Terminal output of the diagnostic stage."""

    has_problems: bool
    root_cause: ProblemCategory | None
    category: DiagnosisCategory
    first_problem_time: str | None
    narrative: tuple[str, ...]
    problems: tuple[ProblemRecord, ...] = ()
    recovery_time: str | None = None
