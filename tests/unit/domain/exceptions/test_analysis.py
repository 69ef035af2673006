"""Tests for domain/exceptions/analysis.py and configuration.py."""

from pathlib import Path

import pytest

from reachcheck.domain.exceptions import (
    AnalysisError,
    ConfigurationError,
    ReachCheckError,
    SourceRootNotFoundError,
    UnsupportedEcosystemError,
)


class TestUnsupportedEcosystemError:
    """Tests for UnsupportedEcosystemError."""

    def test_hierarchy(self) -> None:
        assert issubclass(UnsupportedEcosystemError, AnalysisError)
        assert issubclass(AnalysisError, ReachCheckError)

    def test_named_ecosystem(self) -> None:
        err = UnsupportedEcosystemError("cobol", "no adapter")
        assert err.ecosystem == "cobol"
        assert str(err) == "Unsupported ecosystem cobol: no adapter"

    def test_auto_detection(self) -> None:
        err = UnsupportedEcosystemError(None, "nothing matched")
        assert "<auto>" in str(err)

    def test_empty_reason_raises(self) -> None:
        with pytest.raises(ValueError, match="reason"):
            UnsupportedEcosystemError("x", "")


class TestSourceRootNotFoundError:
    """Tests for SourceRootNotFoundError."""

    def test_path(self) -> None:
        err = SourceRootNotFoundError(Path("/missing"))
        assert err.path == Path("/missing")
        assert "/missing" in str(err)

    def test_none_path_raises(self) -> None:
        with pytest.raises(TypeError, match="path"):
            SourceRootNotFoundError(None)  # type: ignore[arg-type]


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_with_source(self) -> None:
        err = ConfigurationError("unknown key 'x'", Path(".reachcheckrc"))
        assert err.source == Path(".reachcheckrc")
        assert "in .reachcheckrc" in str(err)

    def test_programmatic(self) -> None:
        err = ConfigurationError("bad value")
        assert err.source is None
        assert str(err) == "Invalid configuration: bad value"

    def test_empty_reason_raises(self) -> None:
        with pytest.raises(ValueError, match="reason"):
            ConfigurationError("")
