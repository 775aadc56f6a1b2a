"""Logging setup for the Briscola table service.

``LOG_FORMAT=json`` switches to one JSON object per line; anything else gives
human-readable output.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional


class JSONFormatter(logging.Formatter):
    """Format records as JSON for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        table_id = getattr(record, "table_id", None)
        if table_id:
            log_data["table_id"] = table_id
        player = getattr(record, "player", None)
        if player:
            log_data["player"] = player

        if record.levelno >= logging.ERROR:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable single-line output."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        table_id = getattr(record, "table_id", None)
        context = f" [table={table_id[:8]}]" if table_id else ""
        output = f"{timestamp} {record.levelname:8} {record.name}{context} - {record.getMessage()}"
        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)
        return output


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Configure the root logger from arguments or ``LOG_LEVEL`` / ``LOG_FORMAT``."""
    level = level or os.environ.get("LOG_LEVEL", "INFO")
    if json_output is None:
        json_output = os.environ.get("LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured: level=%s, json=%s", level, json_output)
