"""Progress trace sinks.

The trace is informational: one human-readable line per file and per
function describing why it was or was not rewritten. Callers inject the
sink; tests pass ``lines.append``.
"""

from collections.abc import Callable

from ctxfix.utils.logging import logger

TraceSink = Callable[[str], None]


def log_sink(line: str) -> None:
    """Default sink: route trace lines through loguru at INFO."""
    logger.info(line)
