"""Source file discovery with gitignore-style exclusion.

Uses fnmatch for glob matching (* matches any character including /).
"""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterable

# Build output, dependency install trees, minified/bundled files
DEFAULT_IGNORE_PATTERNS: Final = (
    "node_modules/",
    "dist/",
    "build/",
    ".git/",
    "coverage/",
    "*.min.js",
    "*.bundle.js",
)

# First one found at the source root is used
IGNORE_FILE_NAMES: Final = (".reachcheckignore", ".gitignore")


@dataclass(frozen=True, slots=True)
class IgnoreRule:
    """One gitignore-style pattern.

    Attributes:
        pattern: Glob without leading '!', leading '/' or trailing '/'
        negated: '!pattern' re-includes a previously ignored path
        directory_only: 'pattern/' matches directories only
        anchored: Matches the root-relative path; otherwise any path component
    """

    pattern: str
    negated: bool = False
    directory_only: bool = False
    anchored: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.pattern:
            raise ValueError("pattern must be non-empty string")

    @classmethod
    def parse(cls, line: str) -> IgnoreRule | None:
        """Parse one ignore-file line; None for blanks and comments."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None

        negated = text.startswith("!")
        if negated:
            text = text[1:]
        text = text.replace("\\", "")

        directory_only = text.endswith("/")
        text = text.rstrip("/")
        anchored = text.startswith("/") or "/" in text
        text = text.lstrip("/")
        if not text:
            return None

        return cls(pattern=text, negated=negated, directory_only=directory_only, anchored=anchored)

    def matches(self, relative: str, is_dir: bool) -> bool:
        """Check a root-relative POSIX path against this rule."""
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            if self.pattern.startswith("**/") and fnmatch.fnmatchcase(relative, self.pattern[3:]):
                return True
            return fnmatch.fnmatchcase(relative, self.pattern)
        return fnmatch.fnmatchcase(relative.rsplit("/", 1)[-1], self.pattern)


class IgnoreRules:
    """Ordered ignore rules; the last matching rule wins."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self._rules = tuple(rules)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> IgnoreRules:
        """Build from ignore-file lines, skipping blanks and comments."""
        return cls(rule for rule in map(IgnoreRule.parse, lines) if rule is not None)

    @property
    def rules(self) -> tuple[IgnoreRule, ...]:
        return self._rules

    def extend(self, other: IgnoreRules) -> IgnoreRules:
        """New rule set with other's rules applied after these."""
        return IgnoreRules((*self._rules, *other.rules))

    def is_ignored(self, relative: str, is_dir: bool = False) -> bool:
        """Check a root-relative POSIX path."""
        ignored = False
        for rule in self._rules:
            if rule.matches(relative, is_dir):
                ignored = not rule.negated
        return ignored


def load_ignore_rules(
    root: Path,
    extra_patterns: Iterable[str] = (),
    use_ignore_file: bool = True,
) -> IgnoreRules:
    """Default rules, then the root ignore file, then caller patterns.

    Args:
        root: Source root
        extra_patterns: Additional gitignore-style patterns
        use_ignore_file: Read .reachcheckignore (falling back to .gitignore)

    Returns:
        Combined rules in precedence order
    """
    rules = IgnoreRules.from_lines(DEFAULT_IGNORE_PATTERNS)

    if use_ignore_file:
        for name in IGNORE_FILE_NAMES:
            ignore_file = root / name
            if not ignore_file.is_file():
                continue
            try:
                lines = ignore_file.read_text(encoding="utf-8").splitlines()
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping unreadable ignore file {ignore_file}: {e}")
                continue
            logger.debug(f"Loaded ignore rules from {ignore_file}")
            rules = rules.extend(IgnoreRules.from_lines(lines))
            break

    return rules.extend(IgnoreRules.from_lines(extra_patterns))


def discover_source_files(
    root: Path,
    extensions: Iterable[str],
    rules: IgnoreRules | None = None,
) -> tuple[Path, ...]:
    """Static snapshot of source files under root.

    Recursively scans root, pruning ignored directories. The listing is
    taken once and sorted; files created afterwards are not seen.

    Args:
        root: Directory to scan
        extensions: File suffixes to include, with leading dot
        rules: Exclusion rules (defaults only when None)

    Returns:
        Sorted file paths

    Raises:
        ValueError: If root is not a directory
    """
    if not root.is_dir():
        raise ValueError(f"root must be a directory: {root}")

    suffixes = frozenset(ext.lower() for ext in extensions)
    rules = rules if rules is not None else IgnoreRules.from_lines(DEFAULT_IGNORE_PATTERNS)
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        base = current.relative_to(root).as_posix()
        prefix = "" if base == "." else f"{base}/"

        # Prune in place so os.walk never descends into ignored trees
        dirnames[:] = sorted(d for d in dirnames if not rules.is_ignored(f"{prefix}{d}", is_dir=True))

        for filename in filenames:
            if Path(filename).suffix.lower() not in suffixes:
                continue
            if rules.is_ignored(f"{prefix}{filename}"):
                continue
            found.append(current / filename)

    return tuple(sorted(found))
