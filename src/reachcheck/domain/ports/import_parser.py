"""Import parser port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reachcheck.domain.model.import_record import ImportRecord


class ImportParserPort(ABC):
    """Port for turning one source unit into import records.

    One implementation per target language; classification never
    depends on which one produced the records.
    """

    @abstractmethod
    def parse(self, content: str, path: Path) -> tuple[ImportRecord, ...]:
        """Extract import records in source order.

        Args:
            content: File content
            path: File identity (stamped into every record's location)

        Returns:
            Import records, one per occurrence

        Raises:
            ParsingError: If the content cannot be parsed at all
        """
        ...
