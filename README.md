# cminus

Building blocks for a compiler of a small C-like language: syntax tree
nodes, a semantic symbol table, and a translator that turns function bodies
into three-address intermediate code.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What the package does not do

There is no lexer, no parser and no command-line program. Syntax trees are
built by the caller with the functions of `cminus.gramtree`, and the
semantic checks are the table operations of `cminus.semanteme`, called by
whatever drives the analysis.

## Modules

### `cminus.gramtree`

Syntax tree nodes kept as first-child (`child`) / next-sibling (`sibling`)
links.

- `new_token(name, text, line)` makes a leaf from a lexer token. `ID` and
  `TYPE` keep their text (and get kind `INT` or `FLOAT` when the text is
  `int` or `float`); `INT` is read with C-style base prefixes (`0x3f`,
  `0123`) and narrowed to 32 bits; `FLOAT` is read as a single-precision
  value; `RELOP` keeps its operator. Other names make a plain leaf.
- `new_node(name, *args)` makes an interior node whose children are `args`;
  it takes its line, kind and value from the first child and raises
  `ValueError` when given no children.
- `new_empty(name)` makes the node of an empty production (line `-1`); it is
  not shown when the tree is printed.
- `format_tree(root, level=0)` returns the indented listing of `root`, its
  subtree and its following siblings, two spaces per level.
- `Node.children()` gives a node's children in order; `Node.is_empty` tells
  an empty-production node.
- `SymbolKind` names the kind codes: none, int and float variables, arrays,
  int and float constants, functions, structures and identifiers.

```python
from cminus.gramtree import new_node, new_token, format_tree

lhs = new_node("Exp", new_token("ID", "i", 3))
rhs = new_node("Exp", new_token("INT", "0x10", 3))
exp = new_node("Exp", lhs, new_token("ASSIGNOP", "=", 3), rhs)
print(format_tree(exp), end="")
```

prints

```
Exp(3)
  Exp(3)
    ID: i
  ASSIGNOP
  Exp(3)
    INT: 16
```

### `cminus.semanteme`

`SymbolTable(report=print)` records variables, arrays with their
dimensions, structures with their fields, and functions with their
parameters, each list keeping the newest entry first.

- Redefined variables are collected as messages in `errors` and set
  `has_error`; other diagnostics (a variable named like a function, a
  redefined struct field) are passed to `report`.
- `add_var`, `add_sym_type`, `set_sym_type`, `add_recursive_var`,
  `exist_var`, `type_var`, `set_var_type`, `del_var` manage variables.
- `add_arr`, `del_arr`, `exist_arr`, `set_arr_type`, `type_arr` manage
  arrays.
- `add_struct`, `add_struct_var`, `exist_struct`, `exist_struct_field`
  manage structures.
- `add_fun`, `exist_fun`, `isdef_fun`, `exist_fun_para` manage functions;
  `match_fun(exp, fun_name)` checks call arguments against the parameters
  and returns a `MatchResult`: `MATCH`, `INT_ARGUMENT_MISMATCH`,
  `OTHER_ARGUMENT_MISMATCH`, `TOO_MANY_ARGUMENTS` or `TOO_FEW_ARGUMENTS`.

The records themselves are the dataclasses `Variable`, `StructType`,
`ArrayType` and `FunctionType`. The functions `search_name(node, name)` and
`set_node_type(node, name, type)` walk a tree to find the first node of a
name or to set the kind of every node of that name.

### `cminus.intermediate_code`

`IRTranslator(path)` writes intermediate code for each function handed to
`translate_fun(fun, compst)`: `FUNCTION`, `PARAM`, `ARG`, `CALL`, `READ`,
`WRITE`, `IF ... GOTO`, `GOTO`, `LABEL` and `RETURN` instructions with fresh
temporaries (`t1`, `t2`, ...) and labels (`label1`, `label2`, ...). Given a
file path, the first function truncates the file and later ones append to
it; given an open text stream, it writes to the stream.

```python
import io
from cminus.gramtree import new_empty, new_node, new_token
from cminus.intermediate_code import IRTranslator

fun = new_node("FunDec", new_token("ID", "main", 1),
               new_token("LP", "(", 1), new_token("RP", ")", 1))
ret = new_node("Stmt", new_token("RETURN", "return", 2),
               new_node("Exp", new_token("INT", "0", 2)),
               new_token("SEMI", ";", 2))
stmts = new_node("StmtList", ret, new_empty("StmtList"))
body = new_node("CompSt", new_token("LC", "{", 1), new_empty("DefList"),
                stmts, new_token("RC", "}", 3))

out = io.StringIO()
IRTranslator(out).translate_fun(fun, body)
print(out.getvalue(), end="")
```

prints

```
FUNCTION main :
t1 := #0
RETURN t1

```