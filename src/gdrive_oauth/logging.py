"""Logging configuration using loguru.

Logs go to stderr: when the Drive server speaks MCP over stdio, stdout
carries protocol messages and must stay clean. In containers, JSON output
with Cloud Logging severities is used instead of colored text.
"""

import json
import logging
import sys
import traceback
from typing import Any

from loguru import logger

SEVERITY_MAP = {
    "TRACE": "DEBUG",
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "SUCCESS": "INFO",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "CRITICAL",
}


def _serialize(record: dict[str, Any]) -> str:
    """Serialize a log record as a Cloud Logging JSON line."""
    log_entry: dict[str, Any] = {
        "severity": SEVERITY_MAP.get(record["level"].name, "INFO"),
        "message": record["message"],
        "time": record["time"].isoformat(),
        "logger": record["name"],
    }

    if record["exception"] is not None:
        exc_info = record["exception"]
        tb_str = None
        if exc_info.traceback:
            tb_str = "".join(
                traceback.format_exception(exc_info.type, exc_info.value, exc_info.traceback)
            )
        log_entry["exception"] = {
            "type": exc_info.type.__name__ if exc_info.type else None,
            "value": str(exc_info.value) if exc_info.value else None,
            "traceback": tb_str,
        }

    return json.dumps(log_entry, default=str)


def _json_sink(message: Any) -> None:
    sys.stderr.write(_serialize(message.record) + "\n")
    sys.stderr.flush()


def configure_logging(*, json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure loguru for the package.

    Args:
        json_logs: If True, write one JSON object per line.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logger.remove()

    if json_logs:
        logger.add(
            _json_sink,
            level=log_level,
            format="{message}",
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=log_level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
                "{exception}"
            ),
            colorize=True,
            # Tracebacks must not print local variables; they may hold secrets.
            diagnose=False,
        )

    _intercept_standard_logging(log_level)


class InterceptHandler(logging.Handler):
    """Route standard library log records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _intercept_standard_logging(log_level: str) -> None:
    """Capture logs from google-auth, oauthlib and requests-oauthlib."""
    # TRACE and SUCCESS only exist in loguru
    std_level = {"TRACE": "DEBUG", "SUCCESS": "INFO"}.get(log_level, log_level)
    logging.basicConfig(handlers=[InterceptHandler()], level=std_level, force=True)

    for name in ["google_auth_oauthlib", "requests_oauthlib", "oauthlib", "google.auth"]:
        logging.getLogger(name).setLevel(std_level)
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False
