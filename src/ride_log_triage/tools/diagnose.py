"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from ride_log_triage.core.config import resolve_analysis_config
from ride_log_triage.core.log_service import analyze_log_file
from ride_log_triage.core.report import build_report

DEFAULT_MAX_LINES = 500
HARD_MAX_LINES = 5000


def _clean_names(names: Sequence[str] | None) -> tuple[str, ...]:
    """Strip user-supplied device names and drop empties."""
    if not names:
        return ()
    if isinstance(names, str):
        names = names.split(",")
    return tuple(n.strip() for n in names if n.strip())


async def diagnose_session_log_impl(
    *,
    log_path: str,
    devices: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    seamless_threshold_sec: int | None = None,
    include_lines: bool = False,
    max_lines: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `diagnose_session_log` MCP tool.

    Notes
    -----
    - devices overrides auto-detection; exclude only applies when auto-detecting
    - env overrides are defaults; an explicit seamless_threshold_sec wins
    - include_lines adds the kept (filtered) lines, capped at max_lines
    """
    if max_lines is None:
        max_lines = DEFAULT_MAX_LINES
    if max_lines <= 0:
        raise ValueError("max_lines must be > 0")
    if max_lines > HARD_MAX_LINES:
        max_lines = HARD_MAX_LINES

    cfg = replace(
        resolve_analysis_config(None),
        device_patterns=_clean_names(devices),
        exclude_patterns=_clean_names(exclude),
    )
    if seamless_threshold_sec is not None:
        if seamless_threshold_sec < 0:
            raise ValueError("seamless_threshold_sec must be >= 0")
        cfg = replace(cfg, seamless_threshold_sec=seamless_threshold_sec)

    analysis = await analyze_log_file(log_path, cfg)
    out: dict[str, Any] = build_report(analysis).model_dump()

    if include_lines:
        kept = analysis.kept
        out["kept_lines"] = list(kept[:max_lines])
        out["kept_lines_truncated"] = len(kept) > max_lines
    return out
