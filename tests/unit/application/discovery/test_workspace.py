"""Tests for application/discovery/workspace.py."""

import json
from pathlib import Path

from reachcheck.application.discovery.workspace import detect_workspace
from reachcheck.domain.model.enums import WorkspaceKind


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def add_package(root: Path, relative: str, name: str) -> Path:
    package_dir = root / relative
    write_json(package_dir / "package.json", {"name": name, "version": "1.0.0"})
    return package_dir


class TestDetectWorkspace:
    """Tests for detect_workspace()."""

    def test_npm_workspaces(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "root", "workspaces": ["packages/*"]})
        add_package(tmp_path, "packages/utils", "@acme/utils")
        app = add_package(tmp_path, "packages/app", "@acme/app")

        info = detect_workspace(app)

        assert info is not None
        assert info.kind is WorkspaceKind.NPM
        assert info.root == tmp_path.resolve()
        assert info.packages == frozenset({"@acme/utils", "@acme/app"})
        assert info.is_internal("@acme/utils") is True
        assert info.is_internal("lodash") is False

    def test_yarn_lock_marks_yarn(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"workspaces": {"packages": ["libs/*"]}})
        (tmp_path / "yarn.lock").write_text("", encoding="utf-8")
        add_package(tmp_path, "libs/core", "core")

        info = detect_workspace(tmp_path)

        assert info is not None
        assert info.kind is WorkspaceKind.YARN
        assert info.packages == frozenset({"core"})

    def test_pnpm_workspace_yaml(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "root"})
        (tmp_path / "pnpm-workspace.yaml").write_text(
            "packages:\n  - 'packages/*'\n  - '!packages/ignored'\n", encoding="utf-8"
        )
        add_package(tmp_path, "packages/ui", "@acme/ui")

        info = detect_workspace(tmp_path)

        assert info is not None
        assert info.kind is WorkspaceKind.PNPM
        assert info.packages == frozenset({"@acme/ui"})

    def test_invalid_pnpm_yaml_ignored(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "root"})
        (tmp_path / "pnpm-workspace.yaml").write_text("packages: [unclosed\n", encoding="utf-8")

        assert detect_workspace(tmp_path) is None

    def test_lerna_default_patterns(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "root"})
        write_json(tmp_path / "lerna.json", {"version": "independent"})
        add_package(tmp_path, "packages/a", "a")

        info = detect_workspace(tmp_path)

        assert info is not None
        assert info.kind is WorkspaceKind.LERNA

    def test_nx_default_patterns(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "root"})
        write_json(tmp_path / "nx.json", {})
        add_package(tmp_path, "apps/web", "web")
        add_package(tmp_path, "libs/shared", "shared")

        info = detect_workspace(tmp_path)

        assert info is not None
        assert info.kind is WorkspaceKind.NX
        assert info.packages == frozenset({"web", "shared"})

    def test_turbo_with_npm_workspaces(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"workspaces": ["apps/*"]})
        write_json(tmp_path / "turbo.json", {})
        add_package(tmp_path, "apps/docs", "docs")

        info = detect_workspace(tmp_path)

        assert info is not None
        assert info.kind is WorkspaceKind.TURBOREPO

    def test_package_dirs_recorded(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"workspaces": ["packages/*"]})
        utils = add_package(tmp_path, "packages/utils", "utils")

        info = detect_workspace(tmp_path)

        assert info is not None
        assert info.package_dirs["utils"] == utils.resolve()

    def test_plain_project(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"name": "app", "dependencies": {"lodash": "4"}})

        assert detect_workspace(tmp_path) is None

    def test_no_manifest(self, tmp_path: Path) -> None:
        assert detect_workspace(tmp_path / "nowhere") is None

    def test_workspace_without_named_packages(self, tmp_path: Path) -> None:
        write_json(tmp_path / "package.json", {"workspaces": ["packages/*"]})
        (tmp_path / "packages" / "empty").mkdir(parents=True)

        assert detect_workspace(tmp_path) is None
