"""Centralized logging configuration using Loguru with Pino-compatible output.

Usage:
    from ctxfix.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if CTXFIX_LOG_LEVEL=DEBUG

Environment Variables:
    CTXFIX_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    CTXFIX_LOG_JSON: 0|1 (default: 0, human-readable)
    CTXFIX_LOG_FILE: path to log file (optional)
"""

import json
import os
import sys

from loguru import logger

# Remove default handler
logger.remove()

# Pino-compatible numeric levels
PINO_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("CTXFIX_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("CTXFIX_LOG_JSON", "0") == "1"
_log_file = os.environ.get("CTXFIX_LOG_FILE")


def _to_pino(record) -> dict:
    """Convert a loguru record into a Pino-shaped dict."""
    pino_log = {
        "level": PINO_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "name": "ctxfix",
    }

    for key, value in record["extra"].items():
        pino_log[key] = value

    if record["exception"]:
        pino_log["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return pino_log


def pino_compatible_sink(message):
    """Format log records as Pino-compatible NDJSON on stdout."""
    # Never call logger.* inside a sink - causes infinite recursion
    sys.stdout.write(json.dumps(_to_pino(message.record)) + "\n")
    sys.stdout.flush()


# Human-readable format (no emojis - Windows CP1252 compatibility)
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(
        pino_compatible_sink,
        level=_log_level,
        colorize=False,
    )
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:

    def _file_pino_sink(message):
        """Append Pino-format JSON to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(_to_pino(message.record)) + "\n")

    logger.add(
        _file_pino_sink,
        level="DEBUG",  # File always captures everything
    )


def set_level(level: str) -> None:
    """Re-install the console handler at a new level (used by --log-level)."""
    global _log_level

    _log_level = level.upper()
    logger.remove()
    if _json_mode:
        logger.add(pino_compatible_sink, level=_log_level, colorize=False)
    else:
        logger.add(sys.stderr, level=_log_level, format=_human_format, colorize=None)
    if _log_file:
        logger.add(_file_pino_sink, level="DEBUG")


__all__ = [
    "logger",
    "set_level",
]
