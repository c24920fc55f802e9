"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (diagnose a session log)
- Resources: addressable data blobs (defaults, vocabularies, report schema)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m ride_log_triage.server.log_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from ride_log_triage.cli import configure_logging
from ride_log_triage.prompts.registry import register_prompts
from ride_log_triage.resources.registry import register_resources
from ride_log_triage.tools.diagnose import diagnose_session_log_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("ride-log-triage", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def diagnose_session_log(
    log_path: str,
    devices: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    seamless_threshold_sec: int | None = None,
    include_lines: bool = False,
    max_lines: int | None = None,
) -> dict[str, Any]:
    """Diagnose connectivity problems in a cycling-app session log.

    Parameters
    ----------
    log_path:
        Path to a local session log. Supports plain text and .gz.
    devices:
        Device names to track (literal substrings, case-sensitive). When omitted,
        devices are auto-detected from connection-status lines.
    exclude:
        Names to drop from auto-detected devices (e.g., ["HRM"]).
    seamless_threshold_sec:
        Max seconds for a server reconnect to count as seamless (default 5).
    include_lines:
        Whether to include the kept (filtered) log lines.
    max_lines:
        Cap on returned kept lines (hard-capped in the implementation).

    Returns
    -------
    dict:
        The diagnosis report (has_problems, root_cause, diagnosis, narrative, summary, ...).
    """
    return await diagnose_session_log_impl(
        log_path=log_path,
        devices=devices,
        exclude=exclude,
        seamless_threshold_sec=seamless_threshold_sec,
        include_lines=include_lines,
        max_lines=max_lines,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
