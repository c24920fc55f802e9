"""Device connection-status recognizers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import Event, EventKind
from ..timeofday import parse_line_time
from .base import DIRECT_MARKER, ParseContext


def direct_link_nearby(
    lines: Sequence[str],
    index: int,
    time: str,
    *,
    before: int,
    after: int,
) -> bool:
    """True if a DirectConnect line with the same timestamp sits within the window."""
    lo = max(0, index - before)
    hi = min(len(lines), index + after + 1)
    for line in lines[lo:hi]:
        if DIRECT_MARKER in line and parse_line_time(line) == time:
            return True
    return False


@dataclass(frozen=True, slots=True)
class DeviceConnectedRecognizer:
    """``Device: "<name>" has new connection status: connected``."""

    def recognize(self, ctx: ParseContext) -> Event | None:
        status = ctx.devices.connection_status(ctx.line)
        if status is None or status[1] != "connected":
            return None
        name = status[0]
        direct = direct_link_nearby(
            ctx.lines,
            ctx.index,
            ctx.time,
            before=ctx.config.context_before,
            after=ctx.config.context_after,
        )
        via = DIRECT_MARKER if direct else "BLE"
        return Event(
            time=ctx.time,
            kind=EventKind.DEVICE_CONNECTED,
            details=f"{name} via {via}",
            line_no=ctx.index,
        )


@dataclass(frozen=True, slots=True)
class DeviceDisconnectedRecognizer:
    """``Device: "<name>" has new connection status: disconnected``."""

    def recognize(self, ctx: ParseContext) -> Event | None:
        status = ctx.devices.connection_status(ctx.line)
        if status is None or status[1] != "disconnected":
            return None
        return Event(
            time=ctx.time,
            kind=EventKind.DEVICE_DISCONNECTED,
            details=status[0],
            line_no=ctx.index,
        )
