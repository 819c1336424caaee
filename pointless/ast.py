"""Syntax tree nodes and numeric bit conversions."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from .errors import Location

MAX_CHILDREN = 3


class NodeType(Enum):
    ARRAY = auto()
    BINARY_OP = auto()
    BLANK = auto()
    BOOL = auto()
    CALL = auto()
    CONDITIONAL = auto()
    DEF = auto()
    FIELD_REF = auto()
    FUNC = auto()
    IMPORT = auto()
    INDEX = auto()
    LABEL = auto()
    LIST = auto()
    MAP = auto()
    NAME = auto()
    NUMBER = auto()
    OBJECT = auto()
    PAIR = auto()
    PROGRAM = auto()
    REQUIRES = auto()
    SET = auto()
    STRING = auto()
    TUPLE = auto()
    UNARY_OP = auto()
    WHERE = auto()
    WITH = auto()


class Access(Enum):
    """Where a name's definition lives."""

    PRELUDE = auto()
    GLOBAL = auto()
    LOCAL = auto()


class Operator(Enum):
    """Operators of binary and unary operator nodes."""

    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    MOD = "Mod"
    POW = "Pow"
    CONCAT = "Concat"
    AND = "And"
    OR = "Or"
    EQUALS = "Equals"
    NOT_EQ = "NotEq"
    LESS_THAN = "LessThan"
    LESS_EQ = "LessEq"
    GREATER_THAN = "GreaterThan"
    GREATER_EQ = "GreaterEq"
    IN = "In"
    IS = "Is"
    NEG = "Neg"
    NOT = "Not"


@dataclass(eq=False)
class Node:
    """A syntax tree node with up to three children.

    A child is another node, a list of nodes, text, a number, a bool or an
    operator, depending on the node type.
    """

    node_type: NodeType
    location: Location
    children: list[Any] = field(default_factory=list)
    access: Access = Access.GLOBAL
    index: int = 0
    scope: Optional[Any] = None

    def __post_init__(self) -> None:
        self.children = list(self.children)
        if len(self.children) > MAX_CHILDREN:
            raise ValueError(
                f"node has {len(self.children)} children, "
                f"at most {MAX_CHILDREN} allowed"
            )
        self.children.extend([None] * (MAX_CHILDREN - len(self.children)))

    def child(self, index: int) -> Any:
        """Return the child at ``index``, or None if it is unset."""
        return self.children[index]

    def child_list(self, index: int) -> list[Any]:
        """Return the list of children at ``index`` (empty if unset)."""
        value = self.children[index]
        return [] if value is None else value


def double_to_bits(value: float) -> int:
    """Reinterpret a double's bits as a signed 64-bit integer."""
    return struct.unpack("<q", struct.pack("<d", value))[0]


def bits_to_double(bits: int) -> float:
    """Reinterpret a signed 64-bit integer's bits as a double."""
    return struct.unpack("<d", struct.pack("<q", bits))[0]