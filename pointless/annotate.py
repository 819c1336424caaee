"""Annotating syntax trees with lexical scope information."""

from __future__ import annotations

from typing import Any, Iterator, Optional, TextIO, Union

from .ast import Node, NodeType
from .errors import Location
from .lex_scope import LexScope, describe_node_annotation

_LEAVES = {NodeType.BOOL, NodeType.NUMBER, NodeType.STRING, NodeType.LABEL}
_ITERABLES = {
    NodeType.ARRAY,
    NodeType.LIST,
    NodeType.MAP,
    NodeType.SET,
    NodeType.TUPLE,
}


def _nodes(value: Any) -> Iterator[Node]:
    if value is None:
        return
    if isinstance(value, list):
        yield from value
    else:
        yield value


class _Annotator:
    def __init__(self, out: Optional[TextIO]) -> None:
        self.out = out
        self.last_location: Optional[Location] = None

    def _show_location(self, loc: Optional[Location]) -> None:
        if loc is None:
            return
        last = self.last_location
        if last is None or last.line_num != loc.line_num or last.path != loc.path:
            self.out.write("\n" + loc.line_text() + "\n")
        self.last_location = loc

    def _log(self, node: Node) -> None:
        if self.out is None:
            return
        if node.node_type is NodeType.NAME:
            self._show_location(node.location)
            self.out.write(describe_node_annotation(node) + "\n")
        elif node.scope is not None:
            for loc, line in node.scope.describe():
                self._show_location(loc)
                self.out.write(line + "\n")

    def _defs_then_rhs(self, scope: LexScope, defs: list[Node]) -> None:
        # every name is defined before any right-hand side is resolved
        for definition in defs:
            self.node(scope, definition)
        for definition in defs:
            self.node(scope, definition.child(1))

    def node(self, scope: LexScope, node: Node) -> None:
        kind = node.node_type
        if kind in _LEAVES:
            pass
        elif kind is NodeType.DEF:
            scope.add_def(node.child(0))
        elif kind is NodeType.IMPORT:
            # the imported file is annotated on its own; only its name is bound
            scope.add_def(node.child(1))
        elif kind is NodeType.NAME:
            scope.resolve(node)
        elif kind in _ITERABLES:
            for elem in node.child_list(0):
                self.node(scope, elem)
        elif kind is NodeType.BINARY_OP:
            self.node(scope, node.child(1))
            self.node(scope, node.child(2))
        elif kind is NodeType.CALL:
            self.node(scope, node.child(0))
            for arg in node.child_list(1):
                self.node(scope, arg)
        elif kind is NodeType.CONDITIONAL:
            for index in range(3):
                self.node(scope, node.child(index))
        elif kind is NodeType.FIELD_REF:
            self.node(scope, node.child(0))
        elif kind is NodeType.FUNC:
            inner = LexScope(scope, node)
            for param in node.child_list(0):
                inner.add_def(param)
            self.node(inner, node.child(1))
        elif kind in (NodeType.INDEX, NodeType.REQUIRES):
            self.node(scope, node.child(0))
            self.node(scope, node.child(1))
        elif kind is NodeType.OBJECT:
            inner = LexScope(scope, node)
            self._defs_then_rhs(inner, node.child_list(0))
        elif kind is NodeType.PAIR:
            for child in _nodes(node.child(0)):
                self.node(scope, child)
            for child in _nodes(node.child(1)):
                self.node(scope, child)
        elif kind is NodeType.PROGRAM:
            for imported in node.child_list(0):
                self.node(scope, imported)
            self._defs_then_rhs(scope, node.child_list(1))
        elif kind is NodeType.UNARY_OP:
            self.node(scope, node.child(1))
        elif kind is NodeType.WHERE:
            inner = LexScope(scope, node)
            self._defs_then_rhs(inner, node.child(1).child_list(0))
            self.node(inner, node.child(0))
        elif kind is NodeType.WITH:
            self.node(scope, node.child(0))
            inner = LexScope(scope, node)
            inner.add("$", True, node)
            for update in node.child_list(1):
                self.node(inner, update.child(0))
                self.node(inner, update.child(1))
        else:
            raise ValueError(f"cannot annotate a {kind.name} node")

        self._log(node)


def annotate(
    program: Node,
    prelude: Union[Node, LexScope, None] = None,
    out: Optional[TextIO] = None,
) -> LexScope:
    """Annotate a program tree with scopes and return its top-level scope.

    ``prelude`` is the prelude's program node or its annotated scope; with
    none, ``program`` is itself annotated as the prelude. A program already
    annotated returns its existing scope. When ``out`` is given, the
    annotations are written to it as they are made.
    """
    if isinstance(program.scope, LexScope):
        return program.scope
    if isinstance(prelude, Node):
        prelude = annotate(prelude)

    scope = LexScope(prelude, program, prelude=prelude)
    try:
        _Annotator(out).node(scope, program)
    except BaseException:
        program.scope = None
        raise
    return scope