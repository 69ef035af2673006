"""Tests for application/registry.py."""

from pathlib import Path

import pytest

from reachcheck.application.registry import AdapterRegistry
from reachcheck.domain.exceptions.analysis import UnsupportedEcosystemError
from tests.factories import FakeAdapter


class TestAdapterRegistry:
    """Tests for AdapterRegistry."""

    def test_get_by_name_and_alias(self) -> None:
        registry = AdapterRegistry()
        adapter = FakeAdapter("javascript", "package.json", aliases=("npm",))
        registry.register(adapter)

        assert registry.get("javascript") is adapter
        assert registry.get("npm") is adapter

    def test_lookup_case_insensitive(self) -> None:
        registry = AdapterRegistry()
        adapter = FakeAdapter("javascript", "package.json", aliases=("TypeScript",))
        registry.register(adapter)

        assert registry.get("JavaScript") is adapter
        assert registry.get("typescript") is adapter
        assert "TYPESCRIPT" in registry

    def test_unknown_ecosystem(self) -> None:
        registry = AdapterRegistry()
        registry.register(FakeAdapter("javascript", "package.json"))

        with pytest.raises(UnsupportedEcosystemError, match="javascript") as exc_info:
            registry.get("cobol")

        assert exc_info.value.ecosystem == "cobol"

    def test_duplicate_name_rejected(self) -> None:
        registry = AdapterRegistry()
        registry.register(FakeAdapter("javascript", "package.json", aliases=("npm",)))

        with pytest.raises(ValueError, match="npm"):
            registry.register(FakeAdapter("node", "package.json", aliases=("npm",)))
        assert len(registry) == 1

    def test_detect_in_registration_order(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")
        (tmp_path / "Cargo.toml").write_text("", encoding="utf-8")
        registry = AdapterRegistry()
        registry.register(FakeAdapter("rust", "Cargo.toml"))
        registry.register(FakeAdapter("javascript", "package.json"))

        adapter = registry.detect(tmp_path)

        assert adapter is not None
        assert adapter.ecosystem == "rust"

    def test_detect_nothing(self, tmp_path: Path) -> None:
        registry = AdapterRegistry()
        registry.register(FakeAdapter("javascript", "package.json"))

        assert registry.detect(tmp_path) is None

    def test_ecosystems(self) -> None:
        registry = AdapterRegistry()
        registry.register(FakeAdapter("javascript", "package.json", aliases=("npm",)))
        registry.register(FakeAdapter("python", "pyproject.toml"))

        assert registry.ecosystems == ("javascript", "python")
        assert 42 not in registry
