"""Tests for application/discovery/files.py."""

from pathlib import Path

import pytest

from reachcheck.application.discovery.files import (
    IgnoreRule,
    IgnoreRules,
    discover_source_files,
    load_ignore_rules,
)

EXTENSIONS = (".js", ".ts", ".tsx")


def touch(root: Path, *relatives: str) -> None:
    for relative in relatives:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("", encoding="utf-8")


def names(root: Path, paths: tuple[Path, ...]) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


class TestIgnoreRuleParse:
    """Tests for IgnoreRule.parse()."""

    @pytest.mark.parametrize("line", ["", "   ", "# comment", "/", "!"])
    def test_skipped_lines(self, line: str) -> None:
        assert IgnoreRule.parse(line) is None

    def test_plain_pattern(self) -> None:
        assert IgnoreRule.parse("*.log") == IgnoreRule(pattern="*.log")

    def test_directory_only(self) -> None:
        rule = IgnoreRule.parse("dist/")

        assert rule is not None
        assert rule.pattern == "dist"
        assert rule.directory_only is True
        assert rule.anchored is False

    def test_negated(self) -> None:
        rule = IgnoreRule.parse("!keep.js")

        assert rule is not None
        assert rule.negated is True
        assert rule.pattern == "keep.js"

    def test_leading_slash_anchors(self) -> None:
        rule = IgnoreRule.parse("/generated")

        assert rule is not None
        assert rule.anchored is True
        assert rule.pattern == "generated"

    def test_inner_slash_anchors(self) -> None:
        rule = IgnoreRule.parse("src/fixtures")

        assert rule is not None
        assert rule.anchored is True

    def test_empty_pattern_raises(self) -> None:
        with pytest.raises(ValueError, match="pattern"):
            IgnoreRule(pattern="")


class TestIgnoreRuleMatches:
    """Tests for IgnoreRule.matches()."""

    def test_basename_match_at_any_depth(self) -> None:
        rule = IgnoreRule(pattern="*.min.js")

        assert rule.matches("vendor/jquery.min.js", is_dir=False) is True
        assert rule.matches("app.js", is_dir=False) is False

    def test_directory_only_skips_files(self) -> None:
        rule = IgnoreRule(pattern="build", directory_only=True)

        assert rule.matches("build", is_dir=True) is True
        assert rule.matches("build", is_dir=False) is False

    def test_anchored_matches_full_path(self) -> None:
        rule = IgnoreRule(pattern="src/fixtures", anchored=True)

        assert rule.matches("src/fixtures", is_dir=True) is True
        assert rule.matches("lib/src/fixtures", is_dir=True) is False

    def test_double_star_prefix_matches_root(self) -> None:
        rule = IgnoreRule(pattern="**/fixtures", anchored=True)

        assert rule.matches("fixtures", is_dir=True) is True
        assert rule.matches("test/fixtures", is_dir=True) is True


class TestIgnoreRules:
    """Tests for IgnoreRules."""

    def test_last_match_wins(self) -> None:
        rules = IgnoreRules.from_lines(["*.js", "!keep.js"])

        assert rules.is_ignored("drop.js") is True
        assert rules.is_ignored("keep.js") is False

    def test_reignored_after_negation(self) -> None:
        rules = IgnoreRules.from_lines(["*.js", "!keep.js", "keep.js"])

        assert rules.is_ignored("keep.js") is True

    def test_extend_keeps_order(self) -> None:
        rules = IgnoreRules.from_lines(["a"]).extend(IgnoreRules.from_lines(["b"]))

        assert [r.pattern for r in rules.rules] == ["a", "b"]

    def test_empty_ignores_nothing(self) -> None:
        assert IgnoreRules().is_ignored("anything.js") is False


class TestLoadIgnoreRules:
    """Tests for load_ignore_rules()."""

    def test_defaults(self, tmp_path: Path) -> None:
        rules = load_ignore_rules(tmp_path)

        assert rules.is_ignored("node_modules", is_dir=True) is True
        assert rules.is_ignored("app.bundle.js") is True

    def test_reachcheckignore_preferred_over_gitignore(self, tmp_path: Path) -> None:
        (tmp_path / ".reachcheckignore").write_text("scripts/\n", encoding="utf-8")
        (tmp_path / ".gitignore").write_text("tmp/\n", encoding="utf-8")

        rules = load_ignore_rules(tmp_path)

        assert rules.is_ignored("scripts", is_dir=True) is True
        assert rules.is_ignored("tmp", is_dir=True) is False

    def test_gitignore_fallback(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("# generated\ntmp/\n", encoding="utf-8")

        assert load_ignore_rules(tmp_path).is_ignored("tmp", is_dir=True) is True

    def test_ignore_file_disabled(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("tmp/\n", encoding="utf-8")

        rules = load_ignore_rules(tmp_path, use_ignore_file=False)

        assert rules.is_ignored("tmp", is_dir=True) is False

    def test_extra_patterns_apply_last(self, tmp_path: Path) -> None:
        rules = load_ignore_rules(tmp_path, extra_patterns=["!dist/"])

        assert rules.is_ignored("dist", is_dir=True) is False


class TestDiscoverSourceFiles:
    """Tests for discover_source_files()."""

    def test_filters_extensions_and_sorts(self, tmp_path: Path) -> None:
        touch(tmp_path, "src/b.ts", "src/a.js", "README.md", "src/c.tsx", "src/d.json")

        found = discover_source_files(tmp_path, EXTENSIONS)

        assert names(tmp_path, found) == ["src/a.js", "src/b.ts", "src/c.tsx"]

    def test_default_directories_pruned(self, tmp_path: Path) -> None:
        touch(
            tmp_path,
            "index.js",
            "node_modules/lodash/index.js",
            "dist/index.js",
            "packages/a/node_modules/x/index.js",
            "vendor/lib.min.js",
        )

        found = discover_source_files(tmp_path, EXTENSIONS)

        assert names(tmp_path, found) == ["index.js"]

    def test_custom_rules(self, tmp_path: Path) -> None:
        touch(tmp_path, "src/index.js", "src/__fixtures__/bad.js")
        rules = IgnoreRules.from_lines(["__fixtures__/"])

        found = discover_source_files(tmp_path, EXTENSIONS, rules)

        assert names(tmp_path, found) == ["src/index.js"]

    def test_extension_case_insensitive(self, tmp_path: Path) -> None:
        touch(tmp_path, "LEGACY.JS")

        assert len(discover_source_files(tmp_path, EXTENSIONS)) == 1

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert discover_source_files(tmp_path, EXTENSIONS) == ()

    def test_not_a_directory(self, tmp_path: Path) -> None:
        touch(tmp_path, "file.js")

        with pytest.raises(ValueError, match="directory"):
            discover_source_files(tmp_path / "file.js", EXTENSIONS)
