"""
Logging setup shared by the API process and the seed script.

Format: 2026-01-06T14:05:52Z [delivery-registry] INFO app.services.registry: message
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

_CONFIGURED = False


class ISO8601Formatter(logging.Formatter):
    def __init__(self, source: str = "delivery-registry"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        line = f"{ts} [{self.source}] {record.levelname} {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: str = "INFO", source: str = "delivery-registry") -> None:
    """Install a single stderr handler on the root logger. Safe to call twice."""
    global _CONFIGURED

    root = logging.getLogger()
    root.setLevel(level.upper())
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ISO8601Formatter(source))
    root.addHandler(handler)
    _CONFIGURED = True
