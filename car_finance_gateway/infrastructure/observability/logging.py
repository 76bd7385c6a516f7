"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from pythonjsonlogger import jsonlogger

from car_finance_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Configure structured JSON logging.

    The MCP stdio transport owns stdout, so stdio servers pass sys.stderr.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_tool_call(tool: str, **params: Any) -> None:
    """Log an incoming tool invocation with its arguments"""
    logging.info(
        "Tool called",
        extra={"tool": tool, "step": "tool_call", **{k: v for k, v in params.items() if v is not None}},
    )


def log_tool_result(tool: str, status: str, duration_ms: float, **fields: Any) -> None:
    """Log the outcome of a tool invocation for analysis"""
    log = logging.info if status == "success" else logging.warning
    log(
        "Tool completed",
        extra={"tool": tool, "step": "tool_complete", "status": status, "duration_ms": duration_ms, **fields},
    )
