"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP


def _format_names(names: Sequence[str] | str | None) -> str:
    """Return names as a JSON array literal for prompt display."""
    if not names:
        return "[]"
    if isinstance(names, str):
        items = [s.strip() for s in names.split(",") if s.strip()]
    else:
        items = [str(s).strip() for s in names if str(s).strip()]
    if not items:
        return "[]"
    quoted = ", ".join(f'"{item}"' for item in items)
    return f"[{quoted}]"


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def diagnose_ride_session(
        log_path: str,
        devices: Sequence[str] | str | None = None,
        exclude: Sequence[str] | str | None = None,
    ) -> list[dict[str, Any]]:
        """Build a prompt that explains a session's connectivity problems."""
        call_lines = [
            f"- log_path: {log_path}",
            f"- devices: {_format_names(devices)}",
            f"- exclude: {_format_names(exclude)}",
            "- include_lines: true",
        ]
        call_block = "\n".join(call_lines)
        return [
            {
                "role": "system",
                "content": (
                    "You help cyclists understand dropouts during indoor training sessions. "
                    "Explain findings in plain language and base every claim on tool output. "
                    "Do not invent details; if the evidence is insufficient, say so."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Diagnose the session log using diagnose_session_log. Follow this workflow:\n"
                    "- Call diagnose_session_log first with the parameters below.\n"
                    "- Devices must be a list of strings; an empty list means auto-detect.\n"
                    "- If has_problems is false, say the session was clean and stop.\n"
                    "- Quote the narrative's problem lines as evidence; do not fabricate lines.\n\n"
                    "Call diagnose_session_log with:\n"
                    f"{call_block}\n\n"
                    "Return this structure:\n"
                    "1) What happened (1-3 bullets)\n"
                    "2) Evidence (2-5 quoted lines with their HH:MM:SS time)\n"
                    "3) Root cause (1-2 sentences, from the diagnosis field)\n"
                    "4) What to do next (2-4 bullets)\n"
                ),
            },
        ]
