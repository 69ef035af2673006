"""Import statement analyzer for JavaScript/TypeScript syntax trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from reachcheck.domain.model.enums import ImportStyle
from reachcheck.domain.model.import_record import ImportRecord
from reachcheck.infrastructure.analyzers.context import CONDITIONAL_BRANCHES, AnalysisContext
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

_TYPE_KEYWORDS = frozenset({"type", "typeof"})

# Wrappers between a load call and the declarator receiving its value
_TRANSPARENT_PARENTS = frozenset({"await_expression", "parenthesized_expression", "non_null_expression"})

# import('m').then(...) chains on the promise, not the module
_PROMISE_METHODS = frozenset({"then", "catch", "finally"})

# a || require('m'), a ?? require('m'), a && require('m') may all yield the module
_FALLBACK_OPERATORS = frozenset({"||", "??", "&&"})


class ImportAnalyzer:
    """Extracts import records from a JavaScript/TypeScript syntax tree.

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(self, root: Node, path: Path) -> tuple[ImportRecord, ...]:
        """Extract all imports from one file.

        Args:
            root: Root node of the parsed file
            path: Source file path

        Returns:
            Tuple of ImportRecord objects in source order
        """
        visitor = _ImportVisitor(path)
        visitor.visit(root)
        return tuple(visitor.imports)


@dataclass(slots=True)
class _Bindings:
    """Identifiers bound by one load expression."""

    named: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    local_name: str | None = None
    side_effect_only: bool = False
    inline: bool = False

    def add(self, name: str, local: str) -> None:
        if name not in self.named:
            self.named.append(name)
        if local != name:
            self.aliases[name] = local


class _ImportVisitor(TreeVisitor):
    """Collects imports with conditional-context tracking."""

    def __init__(self, path: Path) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")

        self.path = path
        self.imports: list[ImportRecord] = []
        self.context = AnalysisContext()

    def enter(self, node: Node) -> None:
        self.context.enter(node.type, *_branch_of(node))

    def leave(self, node: Node) -> None:
        self.context.leave(node.type, *_branch_of(node))

    # ------------------------------------------------------------------
    # ESM
    # ------------------------------------------------------------------

    def visit_import_statement(self, node: Node) -> object:
        """Handle: import d, * as ns, { a as b }, 'm', type { T }, x = require('m')."""
        is_type_only = any(child.type in _TYPE_KEYWORDS for child in node.children)

        require_clause = _child_of_type(node, "import_require_clause")
        if require_clause is not None:
            self._handle_import_require(node, require_clause, is_type_only)
            return SKIP_CHILDREN

        module = string_value(node.child_by_field_name("source"))
        if not module:
            return SKIP_CHILDREN

        clause = _child_of_type(node, "import_clause")
        if clause is None:
            self._add(node, module, ImportStyle.SIDE_EFFECT, _Bindings(side_effect_only=True))
            return SKIP_CHILDREN

        bindings = _Bindings()
        style = ImportStyle.NAMED
        type_only_specifiers = 0
        specifiers = 0

        for child in clause.named_children:
            match child.type:
                case "identifier":
                    bindings.local_name = node_text(child)
                    style = ImportStyle.DEFAULT
                case "namespace_import":
                    name = _child_of_type(child, "identifier")
                    if name is not None:
                        bindings.local_name = node_text(name)
                    style = ImportStyle.NAMESPACE
                case "named_imports":
                    for spec in child.named_children:
                        if spec.type != "import_specifier":
                            continue
                        specifiers += 1
                        if any(c.type in _TYPE_KEYWORDS for c in spec.children):
                            # import { type T } - erased, binds nothing at runtime
                            type_only_specifiers += 1
                            continue
                        name = _export_name(spec.child_by_field_name("name"))
                        alias = spec.child_by_field_name("alias")
                        if name:
                            bindings.add(name, node_text(alias) if alias is not None else name)

        if style is ImportStyle.NAMED and specifiers > 0 and type_only_specifiers == specifiers:
            is_type_only = True
            # Keep the erased names so the record documents what was imported
            for spec in _specifiers(clause):
                name = _export_name(spec.child_by_field_name("name"))
                if name:
                    bindings.add(name, name)

        if style is ImportStyle.NAMED and not bindings.named and not is_type_only:
            # import {} from 'm' still loads the module
            self._add(node, module, ImportStyle.SIDE_EFFECT, _Bindings(side_effect_only=True))
            return SKIP_CHILDREN

        self._add(node, module, style, bindings, is_type_only=is_type_only)
        return SKIP_CHILDREN

    def visit_export_statement(self, node: Node) -> object:
        """Handle re-exports: export { a as b } from 'm', export * from 'm', export * as ns from 'm'."""
        module = string_value(node.child_by_field_name("source"))
        if not module:
            # Local export; declarations inside may still contain require()/import()
            return None

        is_type_only = any(child.type in _TYPE_KEYWORDS for child in node.children)
        bindings = _Bindings()

        export_clause = _child_of_type(node, "export_clause")
        if export_clause is not None:
            for spec in export_clause.named_children:
                if spec.type != "export_specifier":
                    continue
                name = _export_name(spec.child_by_field_name("name"))
                alias = _export_name(spec.child_by_field_name("alias"))
                if name:
                    bindings.add(name, alias or name)
            style = ImportStyle.NAMED
        else:
            namespace_export = _child_of_type(node, "namespace_export")
            if namespace_export is not None:
                exported = [_export_name(c) for c in namespace_export.named_children]
                bindings.local_name = next((e for e in exported if e), None)
            style = ImportStyle.NAMESPACE

        self._add(node, module, style, bindings, is_type_only=is_type_only, is_reexport=True)
        return SKIP_CHILDREN

    # ------------------------------------------------------------------
    # CommonJS and dynamic loads
    # ------------------------------------------------------------------

    def visit_call_expression(self, node: Node) -> object:
        """Handle: require('m') in all its binding forms, and import('m')."""
        function = node.child_by_field_name("function")
        if function is None:
            return None

        if function.type == "import":
            module = string_value(first_argument(node))
            if module:
                self._add(node, module, ImportStyle.DYNAMIC, _load_bindings(node))
            return None

        if function.type == "identifier" and node_text(function) == "require":
            module = string_value(first_argument(node))
            if module:
                self._add(node, module, ImportStyle.SYNC_LOAD, _load_bindings(node))
        return None

    def _handle_import_require(self, node: Node, clause: Node, is_type_only: bool) -> None:
        """TypeScript: import x = require('m')."""
        module = string_value(clause.child_by_field_name("source"))
        if module is None:
            module = string_value(_child_of_type(clause, "string"))
        if not module:
            return
        bindings = _Bindings()
        name = _child_of_type(clause, "identifier")
        if name is not None:
            bindings.local_name = node_text(name)
        self._add(node, module, ImportStyle.SYNC_LOAD, bindings, is_type_only=is_type_only)

    def _add(
        self,
        node: Node,
        module: str,
        style: ImportStyle,
        bindings: _Bindings,
        *,
        is_type_only: bool = False,
        is_reexport: bool = False,
    ) -> None:
        self.imports.append(
            ImportRecord(
                module=module,
                style=style,
                location=make_location(node, self.path),
                named_bindings=tuple(bindings.named),
                aliases=bindings.aliases,
                local_name=bindings.local_name,
                is_type_only=is_type_only,
                is_side_effect_only=bindings.side_effect_only,
                is_conditional=self.context.in_conditional,
                is_reexport=is_reexport,
                is_inline=bindings.inline,
            )
        )


def _load_bindings(call: Node) -> _Bindings:
    """Determine what a require()/import() result is bound to.

    Forms:
        require('m');                    -> side effect only
        const m = require('m')           -> local_name=m
        const { a, b: c } = require('m') -> named a, b (b aliased to c)
        const x = require('m').a         -> named a aliased to x
        require('m').a(...)              -> named a, inline
        const m = c ? require('m') : n   -> local_name=m (also ||, ??, &&)
        const { a: { b } } = require('m') -> nested, module only
    """
    bindings = _Bindings()
    current, parent = _climb(call, call.parent)

    # require('m').member / require('m')['member']
    member: str | None = None
    if parent is not None and is_field(current, parent, "object"):
        if parent.type == "member_expression":
            member = node_text(parent.child_by_field_name("property")) or None
        elif parent.type == "subscript_expression":
            member = string_value(unwrap_parentheses(parent.child_by_field_name("index")))
        if member in _PROMISE_METHODS and _is_dynamic_import(call):
            return bindings
        if member is not None:
            current, parent = _climb(parent, parent.parent)

    if parent is None:
        return bindings

    target: Node | None = None
    if parent.type == "variable_declarator" and is_field(current, parent, "value"):
        target = parent.child_by_field_name("name")
    elif parent.type == "assignment_expression" and is_field(current, parent, "right"):
        left = parent.child_by_field_name("left")
        if left is not None and left.type == "identifier":
            target = left

    if target is None:
        if member is not None:
            bindings.add(member, member)
            bindings.inline = True
        elif parent.type == "expression_statement":
            bindings.side_effect_only = True
        return bindings

    if target.type == "identifier":
        local = node_text(target)
        if member is not None:
            bindings.add(member, local)
        else:
            bindings.local_name = local
        return bindings

    if member is not None:
        # const { x } = require('m').member - only the member is known
        bindings.add(member, member)
        bindings.inline = True
        return bindings

    if target.type == "object_pattern":
        destructured = _destructure(target)
        if destructured is not None:
            return destructured

    # Array or nested destructuring: record the module only
    return _Bindings()


def _branch_of(node: Node) -> tuple[str | None, str | None]:
    """(field name, parent type) for nodes under a branching construct."""
    parent = node.parent
    if parent is None or parent.type not in CONDITIONAL_BRANCHES:
        return None, None
    for name in CONDITIONAL_BRANCHES[parent.type]:
        if is_field(node, parent, name):
            return name, parent.type
    return None, parent.type


def _climb(current: Node, parent: Node | None) -> tuple[Node, Node | None]:
    """Step out of wrappers that pass the loaded value through unchanged."""
    while parent is not None:
        if parent.type == "ternary_expression":
            if is_field(current, parent, "condition"):
                break
        elif parent.type == "binary_expression":
            if node_text(parent.child_by_field_name("operator")) not in _FALLBACK_OPERATORS:
                break
        elif parent.type not in _TRANSPARENT_PARENTS:
            break
        current, parent = parent, parent.parent
    return current, parent


def _is_dynamic_import(call: Node) -> bool:
    function = call.child_by_field_name("function")
    return function is not None and function.type == "import"


def _destructure(pattern: Node) -> _Bindings | None:
    """Read a flat object pattern; None when nesting makes it unsupported."""
    bindings = _Bindings()
    for child in pattern.named_children:
        match child.type:
            case "shorthand_property_identifier_pattern":
                name = node_text(child)
                bindings.add(name, name)
            case "object_assignment_pattern":
                left = child.child_by_field_name("left")
                if left is None or left.type != "shorthand_property_identifier_pattern":
                    return None
                name = node_text(left)
                bindings.add(name, name)
            case "pair_pattern":
                key = child.child_by_field_name("key")
                value = child.child_by_field_name("value")
                name = _property_key(key)
                if name is None or value is None:
                    return None
                if value.type == "assignment_pattern":
                    value = value.child_by_field_name("left")
                if value is None or value.type != "identifier":
                    return None
                bindings.add(name, node_text(value))
            case "rest_pattern":
                rest = _child_of_type(child, "identifier")
                if rest is None:
                    return None
                bindings.local_name = node_text(rest)
            case "comment":
                continue
            case _:
                return None
    return bindings


def _property_key(key: Node | None) -> str | None:
    if key is None:
        return None
    if key.type in ("property_identifier", "identifier"):
        return node_text(key)
    return string_value(key)


def _export_name(node: Node | None) -> str | None:
    """Identifier or string module export name."""
    if node is None:
        return None
    if node.type == "string":
        return string_value(node)
    return node_text(node) or None


def _child_of_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _specifiers(clause: Node) -> list[Node]:
    named = _child_of_type(clause, "named_imports")
    if named is None:
        return []
    return [spec for spec in named.named_children if spec.type == "import_specifier"]
