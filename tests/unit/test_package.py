"""Tests for the top-level reachcheck package."""

import importlib

import pytest

import reachcheck

PORTS = [
    ("reachcheck.domain.ports.adapter", "EcosystemAdapterPort"),
    ("reachcheck.domain.ports.import_parser", "ImportParserPort"),
    ("reachcheck.domain.ports.workspace", "WorkspaceResolverPort"),
]


class TestPublicApi:
    """Entry points re-exported from reachcheck."""

    def test_all_names_resolve(self) -> None:
        for name in reachcheck.__all__:
            assert hasattr(reachcheck, name), name

    def test_version(self) -> None:
        assert reachcheck.__version__ == "0.1.0"


class TestPorts:
    """Port interfaces are importable on their own."""

    @pytest.mark.parametrize(("module", "name"), PORTS)
    def test_port_class_defined(self, module: str, name: str) -> None:
        port = getattr(importlib.import_module(module), name)

        assert isinstance(port, type)
