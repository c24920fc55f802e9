"""Report models and rendering for a diagnosed session."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .log_service import SessionAnalysis


class ProblemItem(BaseModel):
    time: str = Field(description="HH:MM:SS of the problem event.")
    category: str = Field(description="Problem category label.")
    source_text: str = Field(description="Log text the problem was derived from.")


class DiagnosisReport(BaseModel):
    """JSON-serializable diagnosis of one session log."""

    has_problems: bool = Field(description="True if connectivity problems were found; False when no server session was recorded.")
    root_cause: str | None = Field(default=None, description="Earliest problem category.")
    diagnosis: str = Field(description="Diagnosis category label ('none' when clean).")
    first_problem_time: str | None = Field(default=None)
    recovery_time: str | None = Field(default=None)
    session_start: str | None = Field(
        default=None, description="First server hello; None when no session was recorded."
    )
    session_end: str | None = Field(
        default=None, description="First graceful shutdown; None when the session never ended cleanly."
    )
    devices: list[str] = Field(default_factory=list)
    problems: list[ProblemItem] = Field(default_factory=list)
    narrative: list[str] = Field(default_factory=list)
    summary: dict[str, Any] = Field(default_factory=dict)


def build_report(analysis: SessionAnalysis) -> DiagnosisReport:
    """Convert a SessionAnalysis into its report model."""
    d = analysis.diagnosis
    window = analysis.timeline.window
    return DiagnosisReport(
        has_problems=d.has_problems,
        root_cause=d.root_cause.value if d.root_cause is not None else None,
        diagnosis=d.category.value,
        first_problem_time=d.first_problem_time,
        recovery_time=d.recovery_time,
        session_start=window.start if analysis.timeline.hellos else None,
        session_end=window.end,
        devices=list(analysis.devices),
        problems=[
            ProblemItem(time=p.time, category=p.category.value, source_text=p.source_text)
            for p in d.problems
        ],
        narrative=list(d.narrative),
        summary=analysis.summary(),
    )


def render_report(analysis: SessionAnalysis, *, title: str = "Session connectivity report") -> str:
    """Render a plain-text report: header, devices, statistics, narrative."""
    s = analysis.summary()
    out = [
        title,
        "=" * len(title),
        f"Devices: {', '.join(analysis.devices)}",
        (
            f"Lines: {s['total_lines']} total, {s['kept_lines']} kept, "
            f"{s['excluded_lines']} excluded ({s['reduction_pct']}% reduction)"
        ),
        f"Events: {sum(s['events'].values())}",
    ]
    out += [f"  {kind}: {count}" for kind, count in s["events"].items() if count]
    out.append(
        f"Server reconnects: {s['seamless_reconnects']} seamless, "
        f"{s['disruptive_disconnects']} disruptive"
    )
    out.append("")
    if analysis.diagnosis.narrative:
        out += list(analysis.diagnosis.narrative)
    else:
        out.append("No server session was found in this log; nothing to diagnose.")
    return "\n".join(out) + "\n"


def write_report_files(
    analysis: SessionAnalysis,
    output_dir: str | Path,
    stem: str = "session",
) -> dict[str, Path]:
    """Write filtered, excluded and report files; return their paths by role."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "filtered": out_dir / f"{stem}_filtered.txt",
        "excluded": out_dir / f"{stem}_excluded.txt",
        "report": out_dir / f"{stem}_report.txt",
    }
    paths["filtered"].write_text(_join(analysis.kept), encoding="utf-8")
    paths["excluded"].write_text(_join(analysis.excluded), encoding="utf-8")
    paths["report"].write_text(render_report(analysis), encoding="utf-8")
    return paths


def _join(lines: tuple[str, ...]) -> str:
    return "".join(line + "\n" for line in lines)
