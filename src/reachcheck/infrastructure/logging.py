"""Logging configuration using Loguru.

reachcheck is a library: its loggers stay disabled until the application
calls configure_logging().

Usage:
    from reachcheck.infrastructure.logging import configure_logging
    configure_logging()            # INFO, human-readable on stderr
    configure_logging("DEBUG")     # per-file parse and cache events

Environment Variables:
    REACHCHECK_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    REACHCHECK_LOG_JSON: 0|1 (default: 0, human-readable)
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Final

from loguru import logger
from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Callable

    from loguru import Message

PACKAGE: Final = "reachcheck"

# Level name -> rich style
_LEVEL_STYLES: Final = {
    "TRACE": "dim",
    "DEBUG": "blue",
    "INFO": "white",
    "SUCCESS": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}

_handler_id: int | None = None


def _rich_sink(console: Console) -> Callable[[Message], None]:
    """Loguru sink rendering records through a rich console."""

    def sink(message: Message) -> None:
        record = message.record
        level = record["level"].name
        line = Text()
        line.append(record["time"].strftime("%H:%M:%S"), style="green")
        line.append(" | ")
        line.append(f"{level: <8}", style=_LEVEL_STYLES.get(level, ""))
        line.append(" | ")
        line.append(f"{record['name']}:{record['function']}:{record['line']}", style="cyan")
        line.append(" - ")
        line.append(record["message"], style=_LEVEL_STYLES.get(level, ""))
        # Never call logger.* inside a sink
        console.print(line, soft_wrap=True)
        if record["exception"] is not None:
            console.print(Text(str(record["exception"].value), style="red"))

    return sink


def configure_logging(
    level: str | None = None,
    json_mode: bool | None = None,
    console: Console | None = None,
) -> int:
    """Enable reachcheck logging with a single sink.

    Replaces the sink installed by a previous call.

    Args:
        level: Minimum level (default: REACHCHECK_LOG_LEVEL or INFO)
        json_mode: One JSON object per line on stderr (default: REACHCHECK_LOG_JSON == "1")
        console: Rich console for human mode (default: stderr console)

    Returns:
        Loguru handler id
    """
    global _handler_id

    resolved_level = (level or os.environ.get("REACHCHECK_LOG_LEVEL", "INFO")).upper()
    if json_mode is None:
        json_mode = os.environ.get("REACHCHECK_LOG_JSON", "0") == "1"

    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            pass  # Already removed by the application

    package_filter = {"": False, PACKAGE: resolved_level}
    if json_mode:
        _handler_id = logger.add(
            sys.stderr,
            level=resolved_level,
            serialize=True,
            filter=package_filter,
        )
    else:
        _handler_id = logger.add(
            _rich_sink(console if console is not None else Console(stderr=True)),
            level=resolved_level,
            filter=package_filter,
        )

    logger.enable(PACKAGE)
    return _handler_id


def disable_logging() -> None:
    """Remove the sink installed by configure_logging() and silence reachcheck."""
    global _handler_id

    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            pass
        _handler_id = None
    logger.disable(PACKAGE)

