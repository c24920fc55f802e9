"""Session lifecycle recognizers: server hello and shutdown."""

from __future__ import annotations

import re

from ..models import EventKind
from .network import RegexRecognizer

_HELLO_RE = re.compile(
    r"\bhello from (?:the )?server\b|\bserver hello\b|\breceived (?:TCP |UDP )?hello\b",
    re.IGNORECASE,
)
_SHUTDOWN_RE = re.compile(
    r"\b(?:graceful )?shutdown started\b|\blogout started\b"
    r"|\bbegin(?:ning)? graceful (?:shutdown|logout)\b|\bshutting down gracefully\b",
    re.IGNORECASE,
)


def server_hello_recognizer() -> RegexRecognizer:
    return RegexRecognizer(EventKind.SERVER_HELLO, _HELLO_RE)


def shutdown_started_recognizer() -> RegexRecognizer:
    return RegexRecognizer(EventKind.SHUTDOWN_STARTED, _SHUTDOWN_RE)
