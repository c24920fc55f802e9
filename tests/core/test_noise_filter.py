from __future__ import annotations

from ride_log_triage.core.devices import DeviceMatcher
from ride_log_triage.core.noise_filter import NoiseFilter, filter_lines

from session_lines import device_status, hello, refused, shutdown

MATCHER = DeviceMatcher(("KICKR CORE 1A2B",))


def test_lines_without_candidate_vocabulary_are_excluded() -> None:
    nf = NoiseFilter(MATCHER)
    assert not nf.keep("[10:00:01] ASSETS: Loading asset road_texture_04")
    assert not nf.keep("[10:00:01] a possible table of contents")


def test_transport_lines_are_kept() -> None:
    nf = NoiseFilter(MATCHER)
    assert nf.keep(hello("10:00:00"))
    assert nf.keep(refused("10:05:00"))


def test_force_exclude_wins_over_device_mention() -> None:
    nf = NoiseFilter(MATCHER)
    assert not nf.keep("[10:00:02] [BLE] KICKR CORE 1A2B: Battery Level 80")
    assert not nf.keep("[10:00:02] [BLE] Advertising Characteristic update from KICKR CORE 1A2B")


def test_device_mention_overrides_standard_exclusions() -> None:
    nf = NoiseFilter(MATCHER)
    assert nf.keep("[10:00:03] Steering: KICKR CORE 1A2B angle 0.0")
    assert not nf.keep("[10:00:03] [BLE] Steering: angle 0.0")


def test_graceful_markers_override_standard_exclusions() -> None:
    nf = NoiseFilter(MATCHER)
    assert nf.keep("[10:59:59] UI: GroupEvents window closed gracefully")
    assert nf.keep(shutdown("11:00:00"))


def test_recognizer_phrases_pass_the_gate() -> None:
    nf = NoiseFilter(MATCHER)
    assert nf.keep("[11:00:00] GAME: beginning graceful logout")
    assert nf.keep("[11:00:00] GAME: logout started")
    assert nf.keep("[10:00:00] NET: server hello received")
    assert nf.keep("[10:31:00] NET: getaddrinfo failed")


def test_standard_exclusions_drop_subsystem_noise() -> None:
    nf = NoiseFilter(MATCHER)
    assert not nf.keep("[10:00:09] [BLE] HUD: BLE icon refresh")
    assert not nf.keep("[10:00:09] VideoCapture: socket opened")


def test_partition_is_complete_and_disjoint() -> None:
    lines = [
        "[09:59:58] ASSETS: Loading asset road_texture_04",
        hello("10:00:00"),
        device_status("10:00:04", "connected"),
        "[10:00:05] [BLE] KICKR CORE 1A2B: Battery Level 80",
        "[10:00:09] [BLE] HUD: BLE icon refresh",
        hello("10:00:00"),
        "no timestamp at all",
    ]
    nf = NoiseFilter(MATCHER)
    result = filter_lines(lines, MATCHER)

    assert result.total == len(lines)
    assert list(result.kept) == [line for line in lines if nf.keep(line)]
    assert list(result.excluded) == [line for line in lines if not nf.keep(line)]
    assert result.kept == (hello("10:00:00"), device_status("10:00:04", "connected"), hello("10:00:00"))


def test_every_device_line_is_kept() -> None:
    lines = [
        device_status("10:00:04", "connected"),
        "[10:00:06] KICKR CORE 1A2B: power 210W",
        "[10:00:07] Texture streaming for KICKR CORE 1A2B avatar",
    ]
    result = filter_lines(lines, MATCHER)
    assert result.kept == tuple(lines)
    assert result.excluded == ()
