"""Tests for domain/model/location.py."""

from pathlib import Path

import pytest

from reachcheck.domain.model.location import Location


class TestLocationCreation:
    """Tests for valid Location creation."""

    def test_minimal_valid(self) -> None:
        loc = Location(file=Path("index.js"), line=1, column=0)
        assert loc.file == Path("index.js")
        assert loc.line == 1
        assert loc.column == 0
        assert loc.end_line is None
        assert loc.end_column is None
        assert loc.snippet is None

    def test_with_span_and_snippet(self) -> None:
        loc = Location(
            file=Path("index.js"),
            line=1,
            column=0,
            end_line=3,
            end_column=2,
            snippet="import {",
        )
        assert loc.end_line == 3
        assert loc.snippet == "import {"

    def test_is_frozen(self) -> None:
        loc = Location(file=Path("index.js"), line=1, column=0)
        with pytest.raises(AttributeError):
            loc.line = 2  # type: ignore[misc]


class TestLocationFailFirst:
    """Tests for FAIL-FIRST validation in Location."""

    def test_line_zero_raises(self) -> None:
        with pytest.raises(ValueError, match="line must be > 0"):
            Location(file=Path("index.js"), line=0, column=0)

    def test_column_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="column must be >= 0"):
            Location(file=Path("index.js"), line=1, column=-1)

    def test_end_line_before_line_raises(self) -> None:
        with pytest.raises(ValueError, match="end_line.*must be >= line"):
            Location(file=Path("index.js"), line=10, column=0, end_line=5)

    def test_none_file_raises(self) -> None:
        with pytest.raises(TypeError, match="file"):
            Location(file=None, line=1, column=0)  # type: ignore[arg-type]


class TestLocationStr:
    """Tests for Location.__str__."""

    def test_str_format(self) -> None:
        loc = Location(file=Path("src/index.ts"), line=42, column=10)
        result = str(loc)
        assert "index.ts" in result
        assert result.endswith(":42:10")
