"""Call graph analyzer: calls, references and dynamic code execution.

Distinguishes an identifier that is invoked (merge(...)) from one that is
only referenced as a value (arr.map(merge)), so an imported binding can be
classified as called, referenced-only or unused.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from reachcheck.domain.model.call_graph import (
    BindingUsage,
    CallGraphResult,
    CallInfo,
    DynamicCodeWarning,
)
from reachcheck.domain.model.enums import BindingState, DynamicCodeKind
from reachcheck.infrastructure.analyzers.syntax import (
    SKIP_CHILDREN,
    TreeVisitor,
    first_argument,
    is_field,
    make_location,
    node_text,
    string_value,
    unwrap_parentheses,
)

if TYPE_CHECKING:
    from pathlib import Path

    from tree_sitter import Node

# Objects through which eval reaches global scope
GLOBAL_OBJECTS: Final = frozenset({"window", "globalThis", "global", "self"})

_TIMER_KINDS: Final = {
    "setTimeout": DynamicCodeKind.SET_TIMEOUT_STRING,
    "setInterval": DynamicCodeKind.SET_INTERVAL_STRING,
}

_NAMED_DECLARATIONS: Final = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "class_declaration",
        "class",
        "method_definition",
    }
)

# Pattern nodes between a bound identifier and its declaration
_PATTERN_NODES: Final = frozenset(
    {
        "object_pattern",
        "array_pattern",
        "pair_pattern",
        "rest_pattern",
        "assignment_pattern",
        "object_assignment_pattern",
        "required_parameter",
        "optional_parameter",
    }
)


class CallGraphAnalyzer:
    """Builds per-file call/reference evidence.

    Stateless analyzer - no state between calls.
    """

    def analyze(self, root: Node, path: Path) -> CallGraphResult:
        """Collect calls, value references and dynamic code constructs.

        Args:
            root: Root node of the parsed file
            path: Source file path

        Returns:
            CallGraphResult for the file
        """
        visitor = _CallVisitor(path)
        visitor.visit(root)

        called: set[str] = set()
        for call in visitor.calls:
            called.add(call.callee)
            if call.receiver is not None:
                called.add(call.qualified_name)

        return CallGraphResult(
            calls=tuple(visitor.calls),
            called_identifiers=frozenset(called),
            referenced_identifiers=frozenset(visitor.references),
            dynamic_code_warnings=tuple(visitor.warnings),
        )

    def find_member_accesses(
        self,
        root: Node,
        local_names: Iterable[str],
    ) -> dict[str, frozenset[str]]:
        """Recover members touched on whole-module bindings.

        Finds binding.member and binding['member'] for each local name.

        Args:
            root: Root node of the parsed file
            local_names: Namespace/default/require bindings

        Returns:
            Local name -> accessed member names (only names with accesses)
        """
        names = frozenset(local_names)
        if not names:
            return {}

        visitor = _MemberAccessVisitor(names)
        visitor.visit(root)
        return {name: frozenset(members) for name, members in visitor.members.items() if members}

    def classify_bindings(
        self,
        call_graph: CallGraphResult,
        local_names: Iterable[str],
    ) -> BindingUsage:
        """Classify imported bindings as called, referenced-only or unused.

        A binding is CALLED when it is the direct callee of a call or new
        expression, REFERENCED_ONLY when it appears as a value outside its
        import but is never invoked, UNUSED otherwise.

        Args:
            call_graph: Evidence for the file declaring the bindings
            local_names: Local binding names introduced by imports

        Returns:
            BindingUsage covering every given name
        """
        direct_calls = frozenset(c.callee for c in call_graph.calls if not c.is_method_call)
        states: dict[str, BindingState] = {}
        for name in local_names:
            if name in direct_calls:
                states[name] = BindingState.CALLED
            elif name in call_graph.referenced_identifiers:
                states[name] = BindingState.REFERENCED_ONLY
            else:
                states[name] = BindingState.UNUSED
        return BindingUsage(states=states)


class _CallVisitor(TreeVisitor):
    """Collects calls, references and dynamic code warnings."""

    def __init__(self, path: Path) -> None:
        if path is None:
            raise TypeError("path must not be None")

        self.path = path
        self.calls: list[CallInfo] = []
        self.references: set[str] = set()
        self.warnings: list[DynamicCodeWarning] = []

    # Import declarations bind names; they never use them
    def visit_import_statement(self, node: Node) -> object:
        return SKIP_CHILDREN

    def visit_export_statement(self, node: Node) -> object:
        if node.child_by_field_name("source") is not None:
            return SKIP_CHILDREN
        return None

    # Types are erased before runtime
    def visit_type_annotation(self, node: Node) -> object:
        return SKIP_CHILDREN

    def visit_type_alias_declaration(self, node: Node) -> object:
        return SKIP_CHILDREN

    def visit_interface_declaration(self, node: Node) -> object:
        return SKIP_CHILDREN

    def visit_type_arguments(self, node: Node) -> object:
        return SKIP_CHILDREN

    def visit_identifier(self, node: Node) -> None:
        if not _is_declaration(node):
            self.references.add(node_text(node))

    def visit_shorthand_property_identifier(self, node: Node) -> None:
        # { merge } in an object literal reads the merge binding
        self.references.add(node_text(node))

    def visit_call_expression(self, node: Node) -> None:
        raw_function = node.child_by_field_name("function")
        if raw_function is None or raw_function.type == "import":
            return

        self._check_indirect_eval(node, raw_function)
        function = unwrap_parentheses(raw_function)

        match function.type:
            case "identifier":
                callee = node_text(function)
                if callee != "require":
                    self._add_call(node, callee)
                self._check_global_call(node, callee)
            case "member_expression":
                callee = node_text(function.child_by_field_name("property"))
                receiver = _receiver_name(function.child_by_field_name("object"))
                if callee:
                    self._add_call(node, callee, receiver=receiver, is_method_call=True)
                    if receiver in GLOBAL_OBJECTS:
                        if callee == "eval":
                            self._warn(
                                DynamicCodeKind.INDIRECT_EVAL,
                                node,
                                f"{receiver}.eval - global scope code execution",
                            )
                        else:
                            self._check_global_call(node, callee)
            case "subscript_expression":
                callee = string_value(unwrap_parentheses(function.child_by_field_name("index")))
                receiver = _receiver_name(function.child_by_field_name("object"))
                if callee:
                    self._add_call(node, callee, receiver=receiver, is_method_call=True)
                    if receiver in GLOBAL_OBJECTS and callee == "eval":
                        self._warn(
                            DynamicCodeKind.INDIRECT_EVAL,
                            node,
                            f"{receiver}['eval'] - global scope code execution",
                        )

    def visit_new_expression(self, node: Node) -> None:
        constructor = node.child_by_field_name("constructor")
        if constructor is None:
            return
        constructor = unwrap_parentheses(constructor)

        if constructor.type == "identifier":
            callee = node_text(constructor)
            self._add_call(node, callee, is_constructor=True)
            if callee == "Function":
                self._warn(
                    DynamicCodeKind.FUNCTION_CONSTRUCTOR,
                    node,
                    "Function constructor - runtime code execution",
                )
        elif constructor.type == "member_expression":
            callee = node_text(constructor.child_by_field_name("property"))
            receiver = _receiver_name(constructor.child_by_field_name("object"))
            if callee:
                self._add_call(
                    node, callee, receiver=receiver, is_constructor=True, is_method_call=True
                )
                if receiver in GLOBAL_OBJECTS and callee == "Function":
                    self._warn(
                        DynamicCodeKind.FUNCTION_CONSTRUCTOR,
                        node,
                        "Function constructor - runtime code execution",
                    )

    def _check_global_call(self, node: Node, callee: str) -> None:
        """eval(), Function() and string-bodied timers, bare or via a global object."""
        if callee == "eval":
            self._warn(DynamicCodeKind.EVAL, node, "Direct eval() call - runtime code execution")
        elif callee == "Function":
            self._warn(
                DynamicCodeKind.FUNCTION_CONSTRUCTOR,
                node,
                "Function constructor - runtime code execution",
            )
        elif callee in _TIMER_KINDS:
            body = first_argument(node)
            if body is not None and body.type in ("string", "template_string"):
                self._warn(
                    _TIMER_KINDS[callee],
                    node,
                    f"{callee} with string argument - runtime code execution",
                )

    def _check_indirect_eval(self, node: Node, function: Node) -> None:
        """(0, eval)(code) evaluates in global scope."""
        if function.type != "parenthesized_expression":
            return
        inner = unwrap_parentheses(function)
        if inner.type != "sequence_expression":
            return
        last = _last_in_sequence(inner)
        if last is not None and last.type == "identifier" and node_text(last) == "eval":
            self._warn(
                DynamicCodeKind.INDIRECT_EVAL,
                node,
                "Indirect eval - global scope code execution",
            )

    def _add_call(
        self,
        node: Node,
        callee: str,
        *,
        receiver: str | None = None,
        is_constructor: bool = False,
        is_method_call: bool = False,
    ) -> None:
        self.calls.append(
            CallInfo(
                callee=callee,
                location=make_location(node, self.path),
                receiver=receiver or None,
                is_constructor=is_constructor,
                is_method_call=is_method_call,
            )
        )

    def _warn(self, kind: DynamicCodeKind, node: Node, context: str) -> None:
        self.warnings.append(
            DynamicCodeWarning(kind=kind, location=make_location(node, self.path), context=context)
        )


class _MemberAccessVisitor(TreeVisitor):
    """Collects binding.member / binding['member'] for given bindings."""

    def __init__(self, names: frozenset[str]) -> None:
        self.names = names
        self.members: dict[str, set[str]] = {name: set() for name in names}

    def visit_import_statement(self, node: Node) -> object:
        return SKIP_CHILDREN

    def visit_member_expression(self, node: Node) -> None:
        obj = node.child_by_field_name("object")
        if obj is not None and obj.type == "identifier" and node_text(obj) in self.names:
            prop = node_text(node.child_by_field_name("property"))
            if prop:
                self.members[node_text(obj)].add(prop)

    def visit_subscript_expression(self, node: Node) -> None:
        obj = node.child_by_field_name("object")
        if obj is not None and obj.type == "identifier" and node_text(obj) in self.names:
            member = string_value(unwrap_parentheses(node.child_by_field_name("index")))
            if member:
                self.members[node_text(obj)].add(member)


def _receiver_name(obj: Node | None) -> str | None:
    """Identifier or dotted path of a call receiver (a, a.b); None otherwise."""
    if obj is None:
        return None
    obj = unwrap_parentheses(obj)
    if obj.type in ("identifier", "this"):
        return node_text(obj)
    if obj.type == "member_expression":
        return node_text(obj) or None
    return None


def _last_in_sequence(sequence: Node) -> Node | None:
    """Rightmost expression of a (possibly nested) comma sequence."""
    current: Node | None = sequence
    while current is not None and current.type == "sequence_expression":
        children = [c for c in current.named_children if c.type != "comment"]
        current = children[-1] if children else None
    return current


def _is_declaration(node: Node) -> bool:
    """Check if an identifier declares a name rather than reading one."""
    parent = node.parent
    if parent is None:
        return False

    if parent.type in _NAMED_DECLARATIONS and is_field(node, parent, "name"):
        return True
    if parent.type == "variable_declarator" and is_field(node, parent, "name"):
        return True
    if parent.type == "arrow_function" and is_field(node, parent, "parameter"):
        return True
    if parent.type == "catch_clause" and is_field(node, parent, "parameter"):
        return True
    if parent.type == "formal_parameters":
        return True

    # Walk out of destructuring/parameter patterns to their owner
    child = node
    while parent is not None and parent.type in _PATTERN_NODES:
        if parent.type in ("assignment_pattern", "object_assignment_pattern") and is_field(
            child, parent, "right"
        ):
            # Default value expression reads names
            return False
        if parent.type == "pair_pattern" and is_field(child, parent, "key"):
            return False
        child, parent = parent, parent.parent

    if child is node or parent is None:
        return False
    if parent.type == "variable_declarator":
        return is_field(child, parent, "name")
    return parent.type in ("formal_parameters", "catch_clause", "arrow_function")
