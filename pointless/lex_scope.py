"""Lexical scopes: name definitions, lookups and captured up-values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .ast import Access, Node, NodeType
from .errors import Location, PtlsNameError

_ACCESS_TEXT = {
    Access.PRELUDE: "prelude",
    Access.GLOBAL: "global",
    Access.LOCAL: "local",
}


@dataclass
class LexEntry:
    """A name defined in a scope.

    ``up_index`` is the slot in the parent scope for captured (non-local)
    entries.
    """

    index: int
    name: str
    location: Optional[Location] = None
    up_index: int = 0


class LexScope:
    """A lexical scope; local entries always precede non-local ones.

    ``prelude`` is the installed prelude scope, inherited from the parent
    when not given. Scopes whose parent is the prelude scope, and scopes with
    no parent at all, are their own global scope.
    """

    def __init__(
        self,
        parent: Optional["LexScope"] = None,
        node: Optional[Node] = None,
        prelude: Optional["LexScope"] = None,
    ) -> None:
        if prelude is None and parent is not None:
            prelude = parent.prelude
        self.parent = parent
        self.prelude = prelude
        if parent is not None and parent is not prelude:
            self.global_scope: LexScope = parent.global_scope
        else:
            self.global_scope = self
        self.num_locals = 0
        self.num_non_locals = 0
        self.entries: list[LexEntry] = []
        if node is not None:
            node.scope = self

    def lookup(self, name: str) -> Optional[LexEntry]:
        """Return the entry defined here for ``name``, or None."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def _access(self) -> Access:
        if self.parent is None:
            return Access.PRELUDE
        if self.parent is self.prelude:
            return Access.GLOBAL
        return Access.LOCAL

    def _lookup_node(self, node: Node) -> Optional[LexEntry]:
        if node.node_type is not NodeType.NAME:
            raise ValueError(f"expected a name node, got {node.node_type.name}")
        entry = self.lookup(node.child(0))
        if entry is not None:
            node.index = entry.index
            node.access = self._access()
        return entry

    def add(self, name: str, is_local: bool, node: Node) -> LexEntry:
        """Define ``name`` here and annotate ``node`` with its slot index."""
        index = self.num_locals
        if is_local:
            if self.num_non_locals:
                raise ValueError("cannot add a local after non-local entries")
            self.num_locals += 1
        else:
            index += self.num_non_locals
            self.num_non_locals += 1
        node.index = index
        entry = LexEntry(index, name, node.location)
        self.entries.append(entry)
        return entry

    def _add_name(self, node: Node, is_local: bool) -> LexEntry:
        name = node.child(0)
        if self._lookup_node(node) is not None:
            raise PtlsNameError(
                f"Duplicate definition for name '{name}'", node.location
            )
        return self.add(name, is_local, node)

    def add_def(self, node: Node) -> None:
        """Define the names on a definition's left side (name, tuple or blank)."""
        if node.node_type is NodeType.NAME:
            self._add_name(node, True)
        elif node.node_type is NodeType.TUPLE:
            for member in node.child_list(0):
                if member.node_type is not NodeType.BLANK:
                    self._add_name(member, True)
        elif node.node_type is not NodeType.BLANK:
            raise ValueError(f"cannot define a {node.node_type.name} node")

    def non_locals(self) -> list[LexEntry]:
        """Return the captured entries, in definition order."""
        return self.entries[self.num_locals:]

    def resolve(self, node: Node) -> int:
        """Annotate a name node with its slot and access; return the slot.

        Names found in an enclosing local scope are captured here as
        non-local entries.
        """
        entry = self._lookup_node(node)
        if entry is not None:
            return entry.index
        if self.parent is None:
            raise PtlsNameError(
                f"No definition for name '{node.child(0)}'", node.location
            )
        index = self.parent.resolve(node)
        if node.access is Access.LOCAL:
            entry = self._add_name(node, False)
            entry.up_index = index
            self._lookup_node(node)
            return entry.index
        return index

    def describe(self) -> list[tuple[Optional[Location], str]]:
        """Return each entry's location with a line describing its slot."""
        lines = []
        for entry in self.entries:
            text = f"entry: {entry.name} index: {entry.index}"
            if entry.index >= self.num_locals:
                text += f" upIndex: {entry.up_index}"
            lines.append((entry.location, text))
        return lines


def describe_node_annotation(node: Node) -> str:
    """Describe the access and slot index recorded on a name node."""
    if node.node_type is not NodeType.NAME:
        raise ValueError(f"expected a name node, got {node.node_type.name}")
    return f"access: {node.child(0)} {_ACCESS_TEXT[node.access]}: {node.index}"