"""Stack-based context tracking for syntax tree analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Final

# Parent node type -> fields holding code that runs only on some executions.
# Conditions, switch discriminants and finally blocks always run.
CONDITIONAL_BRANCHES: Final = {
    "if_statement": frozenset({"consequence", "alternative"}),
    "try_statement": frozenset({"body", "handler"}),
    "ternary_expression": frozenset({"consequence", "alternative"}),
}

# Node types that are conditional wherever they appear
CONDITIONAL_CLAUSES: Final = frozenset({"switch_case", "switch_default"})


def opens_conditional(
    node_type: str,
    field_name: str | None = None,
    parent_type: str | None = None,
) -> bool:
    """Check whether a node is a branch body.

    Args:
        node_type: Type of the node being entered
        field_name: Field the node occupies in its parent (None = unnamed)
        parent_type: Type of the parent node (None = root)
    """
    if node_type in CONDITIONAL_CLAUSES:
        return True
    if parent_type is None or field_name is None:
        return False
    return field_name in CONDITIONAL_BRANCHES.get(parent_type, ())


class ContextType(Enum):
    """Syntax context types for scope tracking."""

    MODULE = auto()
    CONDITIONAL = auto()


@dataclass(slots=True)
class ContextFrame:
    """Single context frame on the stack.

    Attributes:
        type: Context type
        node_type: tree-sitter node type that opened the frame
    """

    type: ContextType
    node_type: str


@dataclass(slots=True)
class AnalysisContext:
    """Stack-based context for tree traversal.

    Tracks nested scopes with O(1) queries via cached counters.
    Mutable - push/pop during traversal.

    Attributes:
        _stack: Context stack
        _conditional_depth: Nesting depth in conditionals
    """

    _stack: list[ContextFrame] = field(default_factory=list)
    _conditional_depth: int = 0

    def push(self, ctx_type: ContextType, node_type: str) -> None:
        """Enter new context. O(1).

        Args:
            ctx_type: Type of context to enter
            node_type: Node type opening the context

        Raises:
            TypeError: If ctx_type is not a ContextType (FAIL-FIRST)
            ValueError: If node_type is empty
        """
        if not isinstance(ctx_type, ContextType):
            raise TypeError(f"ctx_type must be ContextType, got {type(ctx_type).__name__}")
        if not node_type:
            raise ValueError("node_type must be non-empty string")

        self._stack.append(ContextFrame(ctx_type, node_type))

        if ctx_type is ContextType.CONDITIONAL:
            self._conditional_depth += 1

    def pop(self) -> ContextFrame:
        """Exit current context. O(1).

        Returns:
            The popped context frame

        Raises:
            IndexError: If stack is empty
        """
        if not self._stack:
            raise IndexError("cannot pop from empty context stack")

        frame = self._stack.pop()

        if frame.type is ContextType.CONDITIONAL:
            self._conditional_depth -= 1

        return frame

    def enter(
        self,
        node_type: str,
        field_name: str | None = None,
        parent_type: str | None = None,
    ) -> None:
        """Push the context a node opens, if any.

        Args:
            node_type: Type of the node being entered
            field_name: Field the node occupies in its parent
            parent_type: Type of the parent node
        """
        if opens_conditional(node_type, field_name, parent_type):
            self.push(ContextType.CONDITIONAL, node_type)
        elif node_type == "program":
            self.push(ContextType.MODULE, node_type)

    def leave(
        self,
        node_type: str,
        field_name: str | None = None,
        parent_type: str | None = None,
    ) -> None:
        """Pop the frame opened by enter() for the same arguments."""
        if opens_conditional(node_type, field_name, parent_type) or node_type == "program":
            frame = self.pop()
            if frame.node_type != node_type:
                raise RuntimeError(f"context mismatch: left {node_type}, top was {frame.node_type}")

    @property
    def in_conditional(self) -> bool:
        """Check if inside a branch body (if/else, try/catch, switch case, ternary arm). O(1)."""
        return self._conditional_depth > 0

    @property
    def depth(self) -> int:
        """Current nesting depth (stack size)."""
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        """Check if context stack is empty."""
        return len(self._stack) == 0
