# pointless

Front-of-the-back-end pieces for Pointless, a small lazy functional
language. The package covers syntax tree nodes, the resolution of names into
lexical scopes, string interning, and readable dumps of trees, along with
error reports that point at the source.

## Modules

- `pointless.ast` provides `Node`, `NodeType`, `Operator` and `Access`.
  A `Node` holds up to three children. A child can be another node, a list
  of nodes, text, a number, a bool or an `Operator`. `Node.child(i)` returns
  a single child. `Node.child_list(i)` returns a list child, or `[]` if that
  child is unset. `double_to_bits` and `bits_to_double` reinterpret a float
  as a signed 64-bit integer and back.
- `pointless.lex_scope` provides `LexScope` and `LexEntry`. A scope holds
  local entries followed by captured (non-local) entries. Its methods are:
  - `lookup(name)` finds an entry.
  - `add(name, is_local, node)` adds an entry.
  - `add_def(node)` defines a name, a tuple of names, or a blank.
  - `non_locals()` returns the captured entries.
  - `resolve(node)` annotates a name node with its slot and its `Access`.
    If the name comes from an enclosing local scope, `resolve` captures it
    as an upvalue.
  - `describe()` returns a line for each entry.

  A duplicate definition or a missing definition raises `PtlsNameError`.
  `describe_node_annotation(node)` renders the annotation on a name node.
- `pointless.annotate` provides `annotate(program, prelude=None, out=None)`.
  It walks a `PROGRAM` tree, creates scopes for functions, objects, `where`
  and `with` nodes, and annotates every name. It returns the top-level
  scope. `prelude` can be the prelude's program node or its annotated scope.
  With no prelude, the program is itself treated as the prelude. If the
  program is already annotated, its existing scope is returned. When `out`
  is given, each annotation is written to it as it is made.
- `pointless.text` provides `TextTable` and `unescape`. A `TextTable`
  interns strings at offsets in one flat, null-separated buffer. Offset 0
  holds `"Empty"`. Each new string is stored with its backslash escapes
  resolved, and a full table raises `OverflowError`.
- `pointless.show_node` provides `show_node(node)`. It renders a tree as
  nested, indented S-expressions, for example `(Number 1)` and
  `(Name "x")`.
- `pointless.errors` provides `Location`, `PtlsError` and `PtlsNameError`.
  An error carries a trace of at most 19 locations. `format()` prints the
  trace, most recent location first, with each location's source line and
  a caret under its column.

## Example

```python
from pointless.annotate import annotate
from pointless.ast import Access, Node, NodeType
from pointless.errors import Location
from pointless.show_node import show_node

loc = Location("main.ptls", 1, 1, "x = 1\ny = x")

def name(text):
    return Node(NodeType.NAME, loc, [text])

use_of_x = name("x")
program = Node(NodeType.PROGRAM, loc, [[], [
    Node(NodeType.DEF, loc, [name("x"), Node(NodeType.NUMBER, loc, [1.0])]),
    Node(NodeType.DEF, loc, [name("y"), use_of_x]),
]])
prelude = Node(NodeType.PROGRAM, loc, [[], []])

scope = annotate(program, prelude)
assert use_of_x.access is Access.GLOBAL and use_of_x.index == 0
print(show_node(program))
```

## What it does not do

- There is no tokenizer or parser. Trees have to be built as `Node` values.
- There is no code generation, no instruction set and no virtual machine,
  so programs cannot be run.
- There is no command-line tool.
- An `IMPORT` node binds only its name. The imported file is not read or
  annotated.

## Tests

```
pip install -e .[test]
pytest
```