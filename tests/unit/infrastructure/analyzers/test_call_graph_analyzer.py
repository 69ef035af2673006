"""Tests for infrastructure/analyzers/call_graph_analyzer.py."""

from pathlib import Path

import pytest

from reachcheck.domain.model.call_graph import CallGraphResult
from reachcheck.domain.model.enums import BindingState, DynamicCodeKind
from reachcheck.infrastructure.analyzers.call_graph_analyzer import CallGraphAnalyzer
from reachcheck.infrastructure.analyzers.syntax import parse_tree

JS_FILE = Path("/test/src/index.js")
TS_FILE = Path("/test/src/index.ts")


def analyze(code: str, path: Path = JS_FILE) -> CallGraphResult:
    """Parse code and build its call graph."""
    tree = parse_tree(code, path)
    return CallGraphAnalyzer().analyze(tree.root_node, path)


def kinds(code: str) -> list[DynamicCodeKind]:
    """Dynamic code construct kinds found in code."""
    return [w.kind for w in analyze(code).dynamic_code_warnings]


class TestCalls:
    """Tests for call site extraction."""

    def test_direct_call(self) -> None:
        result = analyze("merge(a, b);")

        assert len(result.calls) == 1
        call = result.calls[0]
        assert call.callee == "merge"
        assert call.receiver is None
        assert call.is_method_call is False
        assert call.location.line == 1
        assert "merge" in result.called_identifiers

    def test_method_call_records_receiver(self) -> None:
        result = analyze("_.merge(a, b);")

        call = result.calls[0]
        assert call.callee == "merge"
        assert call.receiver == "_"
        assert call.is_method_call is True
        assert call.qualified_name == "_.merge"
        assert {"merge", "_.merge"} <= result.called_identifiers
        assert result.is_called("merge", receiver="_") is True

    def test_nested_receiver_is_dotted(self) -> None:
        result = analyze("a.b.c();")

        assert result.calls[0].receiver == "a.b"
        assert result.calls[0].callee == "c"

    def test_this_receiver(self) -> None:
        result = analyze("class A { run() { this.go(); } }")

        assert [(c.receiver, c.callee) for c in result.calls] == [("this", "go")]

    def test_string_subscript_call(self) -> None:
        result = analyze("_['merge'](a);")

        call = result.calls[0]
        assert call.callee == "merge"
        assert call.receiver == "_"

    def test_computed_subscript_call_ignored(self) -> None:
        assert analyze("_[name](a);").calls == ()

    def test_constructor_call(self) -> None:
        result = analyze("const e = new EventEmitter();")

        call = result.calls[0]
        assert call.callee == "EventEmitter"
        assert call.is_constructor is True

    def test_require_is_not_a_call(self) -> None:
        result = analyze("const _ = require('lodash');")

        assert result.calls == ()

    def test_dynamic_import_is_not_a_call(self) -> None:
        assert analyze("import('chalk');").calls == ()

    def test_nested_calls_in_source_order(self) -> None:
        result = analyze("outer(inner());")

        assert [c.callee for c in result.calls] == ["outer", "inner"]

    def test_calls_inside_functions(self) -> None:
        code = "function run() {\n  return merge(a);\n}\nconst f = () => clone(b);\n"

        result = analyze(code)

        assert {"merge", "clone"} <= result.called_identifiers


class TestReferences:
    """Tests for value-reference tracking."""

    def test_callback_is_referenced_not_called(self) -> None:
        result = analyze("items.map(merge);")

        assert "merge" in result.referenced_identifiers
        assert "merge" not in result.called_identifiers
        assert "merge" in result.referenced_only_identifiers

    def test_shorthand_property_is_reference(self) -> None:
        result = analyze("module.exports = { merge };")

        assert "merge" in result.referenced_identifiers

    def test_declared_names_are_not_references(self) -> None:
        code = "const merge = 1;\nfunction clone(x) { return 1; }\nclass Tpl {}\n"

        result = analyze(code)

        assert {"merge", "clone", "x", "Tpl"}.isdisjoint(result.referenced_identifiers)

    def test_destructured_names_are_declarations(self) -> None:
        result = analyze("const { a, b: c } = obj;")

        assert "obj" in result.referenced_identifiers
        assert {"a", "c"}.isdisjoint(result.referenced_identifiers)

    def test_default_value_reads_name(self) -> None:
        result = analyze("function f(x = fallback) {}")

        assert "fallback" in result.referenced_identifiers
        assert "x" not in result.referenced_identifiers

    def test_arrow_parameter_is_declaration(self) -> None:
        result = analyze("const f = item => item;")

        # The body still reads the parameter
        assert "item" in result.referenced_identifiers
        assert "f" not in result.referenced_identifiers

    def test_import_statement_is_not_a_use(self) -> None:
        result = analyze("import { merge } from 'lodash';")

        assert result.referenced_identifiers == frozenset()

    def test_type_annotations_are_not_references(self) -> None:
        code = "import type { Options } from 'lodash';\nlet o: Options;\ntype A = Options;\n"

        result = analyze(code, TS_FILE)

        assert "Options" not in result.referenced_identifiers


class TestDynamicCode:
    """Tests for runtime code execution detection."""

    def test_direct_eval(self) -> None:
        assert kinds("eval('1 + 1');") == [DynamicCodeKind.EVAL]

    def test_function_constructor(self) -> None:
        assert kinds("const f = new Function('a', 'return a');") == [
            DynamicCodeKind.FUNCTION_CONSTRUCTOR
        ]

    def test_function_call_without_new(self) -> None:
        assert kinds("const f = Function('return 1');") == [DynamicCodeKind.FUNCTION_CONSTRUCTOR]

    def test_set_timeout_with_string(self) -> None:
        assert kinds("setTimeout('tick()', 10);") == [DynamicCodeKind.SET_TIMEOUT_STRING]

    def test_set_interval_with_template(self) -> None:
        assert kinds("setInterval(`tick()`, 10);") == [DynamicCodeKind.SET_INTERVAL_STRING]

    def test_set_timeout_with_function_is_safe(self) -> None:
        assert kinds("setTimeout(() => tick(), 10);") == []

    @pytest.mark.parametrize("receiver", ["window", "globalThis", "global", "self"])
    def test_global_object_eval(self, receiver: str) -> None:
        assert kinds(f"{receiver}.eval(code);") == [DynamicCodeKind.INDIRECT_EVAL]

    def test_global_object_subscript_eval(self) -> None:
        assert kinds("window['eval'](code);") == [DynamicCodeKind.INDIRECT_EVAL]

    def test_comma_indirect_eval(self) -> None:
        assert kinds("(0, eval)(code);") == [DynamicCodeKind.INDIRECT_EVAL]

    def test_global_object_timer(self) -> None:
        assert kinds("window.setTimeout('x()', 1);") == [DynamicCodeKind.SET_TIMEOUT_STRING]

    def test_warning_has_location_and_context(self) -> None:
        warning = analyze("\n\neval(code);").dynamic_code_warnings[0]

        assert warning.location.line == 3
        assert warning.location.file == JS_FILE
        assert "eval" in warning.context

    def test_unrelated_method_named_eval(self) -> None:
        assert kinds("engine.eval(code);") == []


class TestMemberAccesses:
    """Tests for find_member_accesses()."""

    def test_dot_and_string_subscript(self) -> None:
        code = "_.merge(a);\nconst t = _['template'];\nother.clone();\n"
        tree = parse_tree(code, JS_FILE)

        members = CallGraphAnalyzer().find_member_accesses(tree.root_node, ["_"])

        assert members == {"_": frozenset({"merge", "template"})}

    def test_names_without_access_omitted(self) -> None:
        tree = parse_tree("console.log(_);", JS_FILE)

        members = CallGraphAnalyzer().find_member_accesses(tree.root_node, ["_", "console"])

        assert members == {"console": frozenset({"log"})}

    def test_no_names(self) -> None:
        tree = parse_tree("_.merge(a);", JS_FILE)

        assert CallGraphAnalyzer().find_member_accesses(tree.root_node, []) == {}


class TestClassifyBindings:
    """Tests for classify_bindings()."""

    def test_called_referenced_unused(self) -> None:
        code = "merge(a);\nitems.map(clone);\n"
        result = analyze(code)

        usage = CallGraphAnalyzer().classify_bindings(result, ["merge", "clone", "template"])

        assert usage.state_of("merge") is BindingState.CALLED
        assert usage.state_of("clone") is BindingState.REFERENCED_ONLY
        assert usage.state_of("template") is BindingState.UNUSED
        assert usage.unused == frozenset({"template"})

    def test_method_call_receiver_is_referenced_not_called(self) -> None:
        result = analyze("_.merge(a);")

        usage = CallGraphAnalyzer().classify_bindings(result, ["_"])

        assert usage.state_of("_") is BindingState.REFERENCED_ONLY

    def test_method_on_call_result_is_not_a_direct_call(self) -> None:
        result = analyze("getClient().merge(a);")

        usage = CallGraphAnalyzer().classify_bindings(result, ["merge"])

        assert usage.state_of("merge") is BindingState.UNUSED

    def test_constructor_counts_as_called(self) -> None:
        result = analyze("new Emitter();")

        usage = CallGraphAnalyzer().classify_bindings(result, ["Emitter"])

        assert usage.state_of("Emitter") is BindingState.CALLED

    def test_empty_names(self) -> None:
        usage = CallGraphAnalyzer().classify_bindings(analyze("merge();"), [])

        assert dict(usage.states) == {}
