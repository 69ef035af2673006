"""Parsing exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reachcheck.domain.exceptions.base import ReachCheckError

if TYPE_CHECKING:
    from pathlib import Path


class ParsingError(ReachCheckError):
    """Error while reading or parsing one source file.

    Recovered at the file level: the orchestrator records it as a
    ParseFailure and skips the file.

    Attributes:
        path: File that failed to parse
        reason: Why parsing failed
    """

    def __init__(self, path: Path, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")
