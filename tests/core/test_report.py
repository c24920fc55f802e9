from __future__ import annotations

from pathlib import Path

from ride_log_triage.core.log_service import analyze_lines
from ride_log_triage.core.report import DiagnosisReport, build_report, render_report, write_report_files

from session_lines import hello, refused


def test_build_report_clean(clean_session: list[str]) -> None:
    report = build_report(analyze_lines(clean_session))
    assert report.has_problems is False
    assert report.diagnosis == "none"
    assert report.session_start == "10:00:00"
    assert report.session_end == "11:00:00"
    assert report.problems == []


def test_build_report_problem_fields() -> None:
    report = build_report(analyze_lines([hello("10:00:00"), refused("10:05:00")]))
    assert report.root_cause == "device connection error"
    assert report.first_problem_time == "10:05:00"
    assert report.session_end is None
    assert report.problems[0].category == "device connection error"


def test_report_json_round_trips(clean_session: list[str]) -> None:
    report = build_report(analyze_lines(clean_session))
    assert DiagnosisReport.model_validate_json(report.model_dump_json()) == report


def test_render_report_without_session() -> None:
    text = render_report(analyze_lines(["[10:00:00] BLE: scanning"]))
    assert "nothing to diagnose" in text
    assert "Lines: 1 total, 1 kept, 0 excluded" in text


def test_report_without_session_has_no_problems() -> None:
    report = build_report(analyze_lines(["[00:10:00] [ERROR] BLE: failed to connect to KICKR"]))
    assert report.has_problems is False
    assert report.diagnosis == "none"
    assert report.narrative == []
    assert report.session_start is None


def test_write_report_files(tmp_path: Path, clean_session: list[str]) -> None:
    analysis = analyze_lines(clean_session)
    paths = write_report_files(analysis, tmp_path / "out", stem="Log")

    assert paths["filtered"].name == "Log_filtered.txt"
    assert paths["filtered"].read_text(encoding="utf-8").splitlines() == list(analysis.kept)
    assert paths["excluded"].read_text(encoding="utf-8").splitlines() == list(analysis.excluded)
    assert "=== WHAT HAPPENED ===" in paths["report"].read_text(encoding="utf-8")
