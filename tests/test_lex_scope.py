import pytest

from pointless.ast import Access, Node, NodeType
from pointless.errors import Location, PtlsNameError
from pointless.lex_scope import LexScope, describe_node_annotation

LOC = Location("main.ptls", 1, 1, "x = 1\n")


def name(text):
    return Node(NodeType.NAME, LOC, [text])


def test_locals_get_sequential_indices():
    scope = LexScope()
    a, b = name("a"), name("b")
    scope.add_def(a)
    scope.add_def(b)
    assert [e.index for e in scope.entries] == [0, 1]
    assert (a.index, b.index) == (0, 1)
    assert scope.num_locals == 2
    assert scope.lookup("b") is scope.entries[1]
    assert scope.lookup("c") is None


def test_duplicate_definition_raises():
    scope = LexScope()
    scope.add_def(name("x"))
    with pytest.raises(PtlsNameError) as info:
        scope.add_def(name("x"))
    assert "Duplicate definition for name 'x'" in info.value.message


def test_local_after_non_local_rejected():
    scope = LexScope()
    scope.add("up", False, name("up"))
    with pytest.raises(ValueError):
        scope.add("late", True, name("late"))


def test_non_local_index_offset_by_locals():
    scope = LexScope()
    scope.add("a", True, name("a"))
    entry = scope.add("b", False, name("b"))
    assert entry.index == 1
    assert scope.non_locals() == [entry]


def test_top_scope_without_parent_gives_prelude_access():
    scope = LexScope()
    scope.add_def(name("x"))
    ref = name("x")
    assert scope.resolve(ref) == 0
    assert ref.access is Access.PRELUDE
    assert scope.global_scope is scope


def test_scope_under_prelude_is_global():
    prelude = LexScope()
    glob = LexScope(prelude, prelude=prelude)
    inner = LexScope(glob)
    assert glob.global_scope is glob
    assert inner.global_scope is glob
    glob.add_def(name("x"))
    ref = name("x")
    glob.resolve(ref)
    assert ref.access is Access.GLOBAL


def test_prelude_name_resolved_from_user_scope():
    prelude = LexScope()
    prelude.add_def(name("id"))
    glob = LexScope(prelude, prelude=prelude)
    ref = name("id")
    assert glob.resolve(ref) == 0
    assert ref.access is Access.PRELUDE
    assert glob.entries == []


def test_global_not_captured_by_inner_scope():
    prelude = LexScope()
    glob = LexScope(prelude, prelude=prelude)
    glob.add_def(name("x"))
    inner = LexScope(glob)
    ref = name("x")
    inner.resolve(ref)
    assert ref.access is Access.GLOBAL
    assert inner.non_locals() == []


def test_local_captured_as_up_value():
    prelude = LexScope()
    glob = LexScope(prelude, prelude=prelude)
    outer = LexScope(glob)
    outer.add_def(name("x"))
    inner = LexScope(outer)
    inner.add_def(name("y"))
    ref = name("x")
    index = inner.resolve(ref)
    captured = inner.non_locals()
    assert [e.name for e in captured] == ["x"]
    assert captured[0].index == index == inner.num_locals
    assert captured[0].up_index == outer.lookup("x").index
    assert ref.access is Access.LOCAL
    assert ref.index == index


def test_capture_through_two_levels():
    prelude = LexScope()
    glob = LexScope(prelude, prelude=prelude)
    outer = LexScope(glob)
    outer.add_def(name("x"))
    middle = LexScope(outer)
    inner = LexScope(middle)
    inner.resolve(name("x"))
    assert [e.name for e in middle.non_locals()] == ["x"]
    assert inner.non_locals()[0].up_index == middle.non_locals()[0].index


def test_missing_definition_raises():
    scope = LexScope(LexScope())
    with pytest.raises(PtlsNameError) as info:
        scope.resolve(name("nowhere"))
    assert "No definition for name 'nowhere'" in info.value.message
    assert info.value.locations == [LOC]


def test_tuple_def_skips_blanks():
    scope = LexScope()
    tup = Node(
        NodeType.TUPLE,
        LOC,
        [[name("a"), Node(NodeType.BLANK, LOC), name("c")]],
    )
    scope.add_def(tup)
    assert [e.name for e in scope.entries] == ["a", "c"]


def test_blank_def_adds_nothing_and_other_nodes_rejected():
    scope = LexScope()
    scope.add_def(Node(NodeType.BLANK, LOC))
    assert scope.entries == []
    with pytest.raises(ValueError):
        scope.add_def(Node(NodeType.NUMBER, LOC, [1.0]))


def test_describe_marks_up_values():
    scope = LexScope()
    scope.add("a", True, name("a"))
    entry = scope.add("b", False, name("b"))
    entry.up_index = 3
    lines = [text for _, text in scope.describe()]
    assert lines == ["entry: a index: 0", "entry: b index: 1 upIndex: 3"]
    assert all(loc == LOC for loc, _ in scope.describe())


def test_describe_node_annotation():
    scope = LexScope()
    scope.add_def(name("x"))
    ref = name("x")
    scope.resolve(ref)
    assert describe_node_annotation(ref) == "access: x prelude: 0"
    with pytest.raises(ValueError):
        describe_node_annotation(Node(NodeType.BLANK, LOC))