from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from session_lines import device_status, hello, shutdown


@pytest.fixture
def clean_session() -> list[str]:
    return [
        "[09:59:58] ASSETS: Loading asset road_texture_04",
        hello("10:00:00"),
        device_status("10:00:04", "connected"),
        "[10:00:09] [BLE] HUD: BLE icon refresh",
        "[10:30:00] RENDER: frame time 16ms",
        shutdown("11:00:00"),
        device_status("11:00:01", "disconnected"),
    ]


@pytest.fixture
def write_session_log() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return _write
