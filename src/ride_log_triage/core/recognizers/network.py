"""Transport-level recognizers (errors, disconnects, DNS, inactivity)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import Event, EventKind
from .base import DIRECT_MARKER, ParseContext

_FAILURE_RE = re.compile(
    r"failed to (?:receive|connect)|(?:receive|recv|connect) failed|could not connect",
    re.IGNORECASE,
)
_TRANSPORT_DISCONNECT_RE = re.compile(
    r"TCP (?:server )?connection (?:lost|reset|dropped)|disconnected from (?:the )?(?:TCP )?server",
    re.IGNORECASE,
)
_DNS_RE = re.compile(
    r"(?:could not|unable to|failed to) resolve (?:host(?:name)?|server)"
    r"|DNS (?:lookup|resolution) failed|getaddrinfo failed",
    re.IGNORECASE,
)
_INACTIVITY_RE = re.compile(r"closed due to inactivity|inactivity timeout", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class TransportErrorRecognizer:
    """``[ERROR]`` receive/connect failures on a device link."""

    def recognize(self, ctx: ParseContext) -> Event | None:
        line = ctx.line
        if "[ERROR]" not in line or not _FAILURE_RE.search(line):
            return None
        if DIRECT_MARKER not in line and not ctx.devices.mentions_device(line):
            return None
        details = ctx.message[: ctx.config.max_error_detail_len]
        return Event(time=ctx.time, kind=EventKind.TRANSPORT_ERROR, details=details, line_no=ctx.index)


@dataclass(frozen=True, slots=True)
class RegexRecognizer:
    """Emit ``kind`` when ``pattern`` matches; details are the line message."""

    kind: EventKind
    pattern: re.Pattern[str]

    def recognize(self, ctx: ParseContext) -> Event | None:
        if not self.pattern.search(ctx.line):
            return None
        return Event(time=ctx.time, kind=self.kind, details=ctx.message, line_no=ctx.index)


def transport_disconnected_recognizer() -> RegexRecognizer:
    return RegexRecognizer(EventKind.TRANSPORT_DISCONNECTED, _TRANSPORT_DISCONNECT_RE)


def dns_error_recognizer() -> RegexRecognizer:
    return RegexRecognizer(EventKind.DNS_ERROR, _DNS_RE)


def connection_timeout_recognizer() -> RegexRecognizer:
    return RegexRecognizer(EventKind.CONNECTION_TIMEOUT, _INACTIVITY_RE)
