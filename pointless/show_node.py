"""Readable, indented rendering of syntax trees."""

from __future__ import annotations

from typing import Any, Iterator

from .ast import Node, NodeType, Operator

_TEXT_NODES = {
    NodeType.LABEL: "Label",
    NodeType.NAME: "Name",
    NodeType.STRING: "String",
}

_ITERABLES = {
    NodeType.ARRAY: "Array",
    NodeType.LIST: "List",
    NodeType.MAP: "Map",
    NodeType.SET: "Set",
    NodeType.TUPLE: "Tuple",
}

# node types rendered as a name followed by single children at these indices
_FIXED_CHILDREN = {
    NodeType.CONDITIONAL: ("Conditional", (0, 1, 2)),
    NodeType.DEF: ("Def", (0, 1)),
    NodeType.FIELD_REF: ("FieldRef", (0, 1)),
    NodeType.IMPORT: ("Import", (0, 1)),
    NodeType.INDEX: ("Index", (0, 1)),
    NodeType.REQUIRES: ("Requires", (0, 1)),
    NodeType.WHERE: ("Where", (0, 1)),
}


def _indent(level: int) -> str:
    return ("\n" if level else "") + " " * level


def _nodes(value: Any) -> Iterator[Node]:
    if value is None:
        return
    if isinstance(value, list):
        yield from value
    else:
        yield value


def _operator_text(value: Any) -> str:
    if isinstance(value, Operator):
        return value.value
    return str(value)


def _render(node: Node, level: int) -> str:
    kind = node.node_type
    head = _indent(level)
    inner = level + 1

    def child(index: int) -> str:
        return _render(node.child(index), inner)

    def children(index: int) -> str:
        return "".join(_render(c, inner) for c in _nodes(node.child(index)))

    if kind is NodeType.BLANK:
        return head + "(Blank)"
    if kind is NodeType.BOOL:
        return head + f"(Bool {'true' if node.child(0) else 'false'})"
    if kind is NodeType.NUMBER:
        return head + "(Number %.16g)" % float(node.child(0))
    if kind in _TEXT_NODES:
        return head + f'({_TEXT_NODES[kind]} "{node.child(0)}")'
    if kind in _ITERABLES:
        return head + f"({_ITERABLES[kind]}" + children(0) + ")"
    if kind in _FIXED_CHILDREN:
        name, indices = _FIXED_CHILDREN[kind]
        return head + f"({name}" + "".join(child(i) for i in indices) + ")"
    if kind is NodeType.BINARY_OP:
        return (
            head
            + "(BinaryOp"
            + _indent(inner)
            + _operator_text(node.child(0))
            + child(1)
            + child(2)
            + ")"
        )
    if kind is NodeType.UNARY_OP:
        return (
            head
            + "(UnaryOp"
            + _indent(inner)
            + _operator_text(node.child(0))
            + child(1)
            + ")"
        )
    if kind is NodeType.CALL:
        return head + "(Call" + child(0) + children(1) + ")"
    if kind is NodeType.FUNC:
        return head + "(Func" + children(0) + child(1) + ")"
    if kind is NodeType.OBJECT:
        return head + "(Object" + children(0) + ")"
    if kind is NodeType.PAIR:
        return head + "(Pair" + children(0) + children(1) + ")"
    if kind is NodeType.PROGRAM:
        return head + "(Program" + children(0) + children(1) + ")"
    if kind is NodeType.WITH:
        return head + "(With" + child(0) + children(1) + ")"
    raise ValueError(f"cannot show a {kind.name} node")


def show_node(node: Node) -> str:
    """Render a node and its children, one node per line, ending in a newline."""
    return _render(node, 0) + "\n"