from __future__ import annotations

import pytest

from ride_log_triage.core.config import DEFAULT_DEVICE_PATTERNS
from ride_log_triage.core.devices import DeviceMatcher, detect_devices, resolve_devices

from session_lines import device_status


def test_detect_devices_first_appearance_order() -> None:
    lines = [
        device_status("10:00:00", "connected", "HRM Pro 55"),
        device_status("10:00:01", "connected", "KICKR CORE 1A2B"),
        device_status("10:00:02", "disconnected", "HRM Pro 55"),
    ]
    assert detect_devices(lines) == ["HRM Pro 55", "KICKR CORE 1A2B"]


def test_resolve_devices_explicit_is_verbatim() -> None:
    lines = [device_status("10:00:00", "connected", "HRM Pro 55")]
    assert resolve_devices(lines, explicit=["KICKR", "Tacx"]) == ("KICKR", "Tacx")


def test_resolve_devices_excludes_only_in_auto_mode() -> None:
    lines = [
        device_status("10:00:00", "connected", "HRM Pro 55"),
        device_status("10:00:01", "connected", "KICKR CORE 1A2B"),
    ]
    assert resolve_devices(lines, exclude=["HRM"]) == ("KICKR CORE 1A2B",)
    assert resolve_devices(lines, explicit=["HRM"], exclude=["HRM"]) == ("HRM",)


def test_resolve_devices_falls_back_to_defaults() -> None:
    assert resolve_devices(["[10:00:00] nothing here"]) == DEFAULT_DEVICE_PATTERNS
    lines = [device_status("10:00:00", "connected", "HRM Pro 55")]
    assert resolve_devices(lines, exclude=["HRM"]) == DEFAULT_DEVICE_PATTERNS


def test_matcher_treats_patterns_literally() -> None:
    m = DeviceMatcher(("Trainer (2)",))
    assert m.mentions_device("[10:00:00] BLE: Trainer (2) ready")
    assert not m.mentions_device("[10:00:00] BLE: Trainer 2 ready")


def test_matcher_is_case_sensitive() -> None:
    m = DeviceMatcher(("KICKR",))
    assert not m.mentions_device("[10:00:00] kickr found")


def test_matcher_connection_status() -> None:
    m = DeviceMatcher(("KICKR",))
    assert m.connection_status(device_status("10:00:00", "connected")) == (
        "KICKR CORE 1A2B",
        "connected",
    )
    assert m.connection_status(device_status("10:00:00", "disconnected")) == (
        "KICKR CORE 1A2B",
        "disconnected",
    )
    assert m.connection_status(device_status("10:00:00", "connected", "HRM")) is None


def test_matcher_requires_patterns() -> None:
    with pytest.raises(ValueError):
        DeviceMatcher(())
