"""Configuration exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reachcheck.domain.exceptions.base import ReachCheckError

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(ReachCheckError):
    """Invalid configuration file or value.

    Attributes:
        reason: What is wrong
        source: Config file the error came from (None for programmatic config)
    """

    def __init__(self, reason: str, source: Path | None = None) -> None:
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.reason = reason
        self.source = source
        where = f" in {source}" if source is not None else ""
        super().__init__(f"Invalid configuration{where}: {reason}")
