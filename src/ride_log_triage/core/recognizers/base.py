"""Recognizer interface and the per-line parse context."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ..config import AnalysisConfig
from ..devices import DeviceMatcher
from ..models import Event

DIRECT_MARKER = "DirectConnect"


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Read-only view of one kept line and its neighbours."""

    lines: Sequence[str]
    index: int
    time: str
    devices: DeviceMatcher
    config: AnalysisConfig

    @property
    def line(self) -> str:
        return self.lines[self.index]

    @property
    def message(self) -> str:
        """Line text after the ``[HH:MM:SS]`` prefix."""
        return self.line[10:].strip()


class Recognizer(Protocol):
    """Recognizer interface: return an Event if the line matches, else None."""

    def recognize(self, ctx: ParseContext) -> Event | None:
        """Build an Event for the current line if recognized."""
        ...
