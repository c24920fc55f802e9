"""Analysis configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_DEVICE_PATTERNS: tuple[str, ...] = ("KICKR", "HRM")

SEAMLESS_ENV = "RIDE_LOG_TRIAGE_SEAMLESS_SEC"
PROXIMITY_ENV = "RIDE_LOG_TRIAGE_PROXIMITY_SEC"


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Tunables for one pipeline run.

    device_patterns:
        Literal substrings naming trainers/sensors. Empty means auto-detect from
        the log's own connection-status lines.
    exclude_patterns:
        Literal substrings removed from auto-detected devices (ignored when
        ``device_patterns`` is given).
    seamless_threshold_sec:
        A server reconnect at most this many seconds after a transport
        disconnect is considered imperceptible.
    context_before / context_after:
        Kept-line window inspected around a device connection to detect a
        DirectConnect link at the same timestamp.
    problem_proximity_sec:
        Seamless reconnects are only reported within this distance of the first
        transport error.
    max_error_detail_len:
        Transport-error details are truncated to this many characters.
    """

    device_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    seamless_threshold_sec: int = 5
    context_before: int = 10
    context_after: int = 5
    problem_proximity_sec: int = 120
    max_error_detail_len: int = 250

    def validate(self) -> None:
        """Raise ValueError for settings the pipeline cannot honor."""
        for name in (
            "seamless_threshold_sec",
            "context_before",
            "context_after",
            "problem_proximity_sec",
            "max_error_detail_len",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be >= 0")
    return value


def resolve_analysis_config(cfg: AnalysisConfig | None) -> AnalysisConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = AnalysisConfig()

    overrides: dict[str, int] = {}
    seamless = _env_int(SEAMLESS_ENV)
    if seamless is not None:
        overrides["seamless_threshold_sec"] = seamless
    proximity = _env_int(PROXIMITY_ENV)
    if proximity is not None:
        overrides["problem_proximity_sec"] = proximity

    if not overrides:
        return cfg
    return replace(cfg, **overrides)
