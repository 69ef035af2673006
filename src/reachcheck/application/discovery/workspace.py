"""Monorepo workspace detection.

Finds the workspace containing the source root so components naming one
of its own packages are not mistaken for third-party dependencies.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final

import yaml
from loguru import logger

from reachcheck.domain.model.enums import WorkspaceKind
from reachcheck.domain.model.workspace import WorkspaceInfo

MAX_PARENT_LEVELS: Final = 10

LERNA_DEFAULT_PATTERNS: Final = ("packages/*",)
NX_DEFAULT_PATTERNS: Final = ("packages/*", "apps/*", "libs/*")


def detect_workspace(source_root: Path) -> WorkspaceInfo | None:
    """Find the workspace the source root belongs to.

    Walks up from source_root (at most 10 levels) to the first directory
    that declares workspace packages.

    Args:
        source_root: Analyzed directory

    Returns:
        WorkspaceInfo, or None when source_root is not inside a workspace
    """
    current = source_root.resolve()
    for _ in range(MAX_PARENT_LEVELS):
        info = _check_workspace_root(current)
        if info is not None:
            logger.debug(
                f"Detected {info.kind.value} workspace at {info.root} "
                f"with {len(info.packages)} packages"
            )
            return info
        if current.parent == current:
            break
        current = current.parent
    return None


def _check_workspace_root(directory: Path) -> WorkspaceInfo | None:
    """Workspace declared by directory, if any."""
    manifest = _read_json(directory / "package.json")
    if manifest is None:
        return None

    patterns: tuple[str, ...] = ()
    kind = WorkspaceKind.UNKNOWN

    workspaces = manifest.get("workspaces")
    if workspaces:
        if isinstance(workspaces, dict):
            workspaces = workspaces.get("packages", [])
        patterns = _string_tuple(workspaces)
        kind = WorkspaceKind.YARN if (directory / "yarn.lock").exists() else WorkspaceKind.NPM

    pnpm_file = directory / "pnpm-workspace.yaml"
    if pnpm_file.is_file():
        kind = WorkspaceKind.PNPM
        try:
            pnpm = yaml.safe_load(pnpm_file.read_text(encoding="utf-8")) or {}
        except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to parse {pnpm_file}: {e}")
            pnpm = {}
        if isinstance(pnpm, dict) and pnpm.get("packages"):
            patterns = _string_tuple(pnpm["packages"])

    lerna_file = directory / "lerna.json"
    if lerna_file.is_file():
        kind = WorkspaceKind.LERNA
        lerna = _read_json(lerna_file) or {}
        patterns = _string_tuple(lerna.get("packages")) or LERNA_DEFAULT_PATTERNS

    if (directory / "nx.json").is_file():
        kind = WorkspaceKind.NX
        patterns = patterns or NX_DEFAULT_PATTERNS

    if (directory / "turbo.json").is_file():
        kind = WorkspaceKind.TURBOREPO

    if not patterns:
        return None

    package_dirs: dict[str, Path] = {}
    for pattern in patterns:
        if pattern.startswith("!"):
            continue
        for package_dir in sorted(directory.glob(pattern.rstrip("/"))):
            package = _read_json(package_dir / "package.json")
            name = package.get("name") if package else None
            if isinstance(name, str) and name:
                package_dirs.setdefault(name, package_dir)

    if not package_dirs:
        return None

    return WorkspaceInfo(
        root=directory,
        kind=kind,
        packages=frozenset(package_dirs),
        package_dirs=package_dirs,
    )


def _read_json(path: Path) -> dict[str, Any] | None:
    """Parse a JSON object file; None if missing or invalid."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.debug(f"Ignoring invalid {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def _string_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item)
