from __future__ import annotations

import pytest

from ride_log_triage.core.config import AnalysisConfig, resolve_analysis_config


def test_defaults() -> None:
    cfg = AnalysisConfig()
    assert cfg.seamless_threshold_sec == 5
    assert (cfg.context_before, cfg.context_after) == (10, 5)
    assert cfg.problem_proximity_sec == 120
    assert cfg.max_error_detail_len == 250


def test_resolve_without_env_returns_same_object(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RIDE_LOG_TRIAGE_SEAMLESS_SEC", raising=False)
    monkeypatch.delenv("RIDE_LOG_TRIAGE_PROXIMITY_SEC", raising=False)
    cfg = AnalysisConfig(device_patterns=("KICKR",))
    assert resolve_analysis_config(cfg) is cfg


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDE_LOG_TRIAGE_SEAMLESS_SEC", "8")
    monkeypatch.setenv("RIDE_LOG_TRIAGE_PROXIMITY_SEC", "60")
    cfg = resolve_analysis_config(AnalysisConfig(device_patterns=("KICKR",)))
    assert cfg.seamless_threshold_sec == 8
    assert cfg.problem_proximity_sec == 60
    assert cfg.device_patterns == ("KICKR",)


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_invalid_env_raises(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("RIDE_LOG_TRIAGE_SEAMLESS_SEC", value)
    with pytest.raises(ValueError, match="RIDE_LOG_TRIAGE_SEAMLESS_SEC"):
        resolve_analysis_config(None)
