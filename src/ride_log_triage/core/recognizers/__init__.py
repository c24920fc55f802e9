"""Event recognizers.

Each recognizer inspects one kept line (with read-only access to its
neighbours) and returns at most one Event. The default table is ordered;
the first recognizer that matches wins.
"""

from __future__ import annotations

from .base import DIRECT_MARKER, ParseContext, Recognizer
from .device import DeviceConnectedRecognizer, DeviceDisconnectedRecognizer, direct_link_nearby
from .network import (
    RegexRecognizer,
    TransportErrorRecognizer,
    connection_timeout_recognizer,
    dns_error_recognizer,
    transport_disconnected_recognizer,
)
from .session import server_hello_recognizer, shutdown_started_recognizer


def event_phrases() -> tuple[str, ...]:
    """Regex sources of the phrase recognizers, for the noise filter's candidate gate."""
    return tuple(r.pattern.pattern for r in default_recognizers() if isinstance(r, RegexRecognizer))


def default_recognizers() -> list[Recognizer]:
    """Default recognizer table (first match wins)."""
    return [
        DeviceConnectedRecognizer(),
        DeviceDisconnectedRecognizer(),
        TransportErrorRecognizer(),
        transport_disconnected_recognizer(),
        dns_error_recognizer(),
        connection_timeout_recognizer(),
        server_hello_recognizer(),
        shutdown_started_recognizer(),
    ]


__all__ = [
    "DIRECT_MARKER",
    "DeviceConnectedRecognizer",
    "DeviceDisconnectedRecognizer",
    "ParseContext",
    "Recognizer",
    "RegexRecognizer",
    "TransportErrorRecognizer",
    "connection_timeout_recognizer",
    "default_recognizers",
    "direct_link_nearby",
    "event_phrases",
    "dns_error_recognizer",
    "server_hello_recognizer",
    "shutdown_started_recognizer",
    "transport_disconnected_recognizer",
]
