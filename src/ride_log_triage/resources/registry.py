"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from mcp.server.fastmcp import FastMCP

from ride_log_triage.core.config import DEFAULT_DEVICE_PATTERNS, AnalysisConfig
from ride_log_triage.core.noise_filter import default_filter_config
from ride_log_triage.core.report import DiagnosisReport

SAMPLE_LOG = (
    "[10:00:00] NETCLIENT: [INFO] TCP: received hello from server 10.0.0.1\n"
    '[10:00:04] [BLE] Device: "KICKR CORE 1A2B" has new connection status: connected\n'
    "[10:00:09] ASSETS: Loading asset road_texture_04\n"
    "[10:05:00] [ERROR] DirectConnect: failed to connect to KICKR CORE 1A2B: "
    "No connection could be made because the target machine actively refused it\n"
    '[10:05:01] [BLE] Device: "KICKR CORE 1A2B" has new connection status: disconnected\n'
    '[10:12:00] [BLE] Device: "KICKR CORE 1A2B" has new connection status: connected\n'
    "[11:00:00] GAME: shutdown started, logging out gracefully\n"
)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://ride-log-triage/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://ride-log-triage/help\n"
            "- app://ride-log-triage/config/defaults\n"
            "- app://ride-log-triage/config/filter-vocabulary\n"
            "- app://ride-log-triage/schemas/diagnosis-report\n"
            "- app://ride-log-triage/examples/sample-log\n"
            "\nTools:\n"
            "- diagnose_session_log(log_path, devices?, exclude?, ...)\n"
        )

    @mcp.resource("app://ride-log-triage/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample session log for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://ride-log-triage/config/defaults")
    def defaults() -> dict[str, Any]:
        """Return default analysis settings and the fallback device set."""
        out = asdict(AnalysisConfig())
        out["fallback_devices"] = list(DEFAULT_DEVICE_PATTERNS)
        return out

    @mcp.resource("app://ride-log-triage/config/filter-vocabulary")
    def filter_vocabulary() -> dict[str, list[str]]:
        """Return the noise-filter vocabularies."""
        return {k: list(v) for k, v in asdict(default_filter_config()).items()}

    @mcp.resource("app://ride-log-triage/schemas/diagnosis-report")
    def report_schema() -> dict[str, Any]:
        """Return the JSON schema for diagnosis reports."""
        return DiagnosisReport.model_json_schema()
