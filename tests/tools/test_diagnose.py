from __future__ import annotations

from pathlib import Path

import pytest

from ride_log_triage.tools.diagnose import diagnose_session_log_impl

from session_lines import device_status, hello, refused, shutdown, tcp_lost


def _write_log(path: Path) -> None:
    path.write_text(
        "\n".join(
            [
                hello("10:00:00"),
                device_status("10:00:04", "connected"),
                device_status("10:00:05", "connected", "HRM Pro 55"),
                refused("10:05:00"),
                device_status("10:12:00", "connected"),
                shutdown("11:00:00"),
            ]
        )
        + "\n",
        encoding="utf-8",
    )


@pytest.mark.asyncio
async def test_diagnose_session_log_impl_report(tmp_path: Path) -> None:
    log = tmp_path / "Log.txt"
    _write_log(log)

    out = await diagnose_session_log_impl(log_path=str(log))

    assert out["has_problems"] is True
    assert out["diagnosis"] == "device's direct-connection service rejected the connection"
    assert out["devices"] == ["KICKR CORE 1A2B", "HRM Pro 55"]
    assert "kept_lines" not in out


@pytest.mark.asyncio
async def test_diagnose_session_log_impl_exclude_and_lines(tmp_path: Path) -> None:
    log = tmp_path / "Log.txt"
    _write_log(log)

    out = await diagnose_session_log_impl(
        log_path=str(log),
        exclude=["HRM"],
        include_lines=True,
        max_lines=2,
    )

    assert out["devices"] == ["KICKR CORE 1A2B"]
    assert len(out["kept_lines"]) == 2
    assert out["kept_lines_truncated"] is True


@pytest.mark.asyncio
async def test_diagnose_session_log_impl_accepts_comma_string(tmp_path: Path) -> None:
    log = tmp_path / "Log.txt"
    _write_log(log)

    out = await diagnose_session_log_impl(log_path=str(log), devices="KICKR, HRM")
    assert out["devices"] == ["KICKR", "HRM"]


@pytest.mark.asyncio
async def test_diagnose_session_log_impl_rejects_bad_max_lines(tmp_path: Path) -> None:
    log = tmp_path / "Log.txt"
    _write_log(log)
    with pytest.raises(ValueError, match="max_lines"):
        await diagnose_session_log_impl(log_path=str(log), max_lines=0)


@pytest.mark.asyncio
async def test_diagnose_session_log_impl_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await diagnose_session_log_impl(log_path=str(tmp_path / "nope.txt"))


@pytest.mark.asyncio
async def test_explicit_threshold_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    log = tmp_path / "Log.txt"
    log.write_text(
        "\n".join([hello("09:00:00"), tcp_lost("09:30:00"), hello("09:30:20")]) + "\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("RIDE_LOG_TRIAGE_SEAMLESS_SEC", "5")

    assert (await diagnose_session_log_impl(log_path=str(log)))["has_problems"] is True
    out = await diagnose_session_log_impl(log_path=str(log), seamless_threshold_sec=30)
    assert out["has_problems"] is False
