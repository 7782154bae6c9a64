# whenlang

The middle stages of a compiler for a small typed language with `byte`,
`short`, `long`, `float` and `double` declarations, arrays, functions, and
the commands `when ... then ... else`, `while`, `for`, `read`, `print` and
`return`.

You hand the package a syntax tree built from `Node` objects. It can print
that tree, decompile it back to source text, record its declarations,
check it against the language's typing rules, and lower it to three-address
code.

## Modules

- `whenlang.tokens`: the `Token` enum of named token codes (all above 255)
  and `token_name(code)`. `token_name` returns the enum name for a named
  token and the character for a code from 1 to 255. It raises `ValueError`
  for any other code.
- `whenlang.symbols`: a chained hash table of 997 buckets.
  - `SymbolTable.insert(text, kind, data_type=0, nature=0)` returns the
    existing symbol with that text and kind, or adds a new one.
  - `SymbolTable.find(text, kind)` returns the matching symbol, or `None`.
  - `SymbolTable.entries()` yields `(address, symbol)` pairs.
  - `SymbolTable.dump()` renders one `Table[address] = text` line per entry.
  - `SymbolTable.new_label()` and `SymbolTable.new_temporary()` make fresh
    `__label_N` and `__temporary_N` symbols. These symbols are not stored in
    the table.
  - `SymbolTable.true_symbol` and `SymbolTable.false_symbol` are the boolean
    constants `1` and `0`.
  - The module also has `hash_address(text)`, the `Symbol` dataclass, and the
    enums `SymbolKind`, `DataType`, `Nature` and `ExpressionType`.
- `whenlang.astree`: `NodeType` and `Node`. A node has a type, an optional
  symbol and four child slots, read with `Node.child(index)`.
  `format_tree(node, level=0)` renders an indented dump, and
  `print_tree(node, level=0, file=None)` writes that dump to standard error
  by default.
- `whenlang.decompiler`: `decompile(node)` returns the source text of a
  tree. It raises `ValueError` when a node that needs a symbol has none.
- `whenlang.declarations`:
  - `set_declarations(node)` records declared variables, arrays, functions
    and parameters on their symbols.
  - `expression_type(node)` gives the type of an expression.
  - `count_arguments(node)` and `count_parameters(node)` count a call's
    arguments and a function's parameters.
  - `SemanticError` is defined here. Declaring a name twice raises it.
- `whenlang.semantic`: `check(node)` visits the tree children first and
  raises `SemanticError` at the first broken rule.
- `whenlang.tac`: `generate(root, table)` returns a list of `Tac`
  instructions. Each instruction has a `TacType`, a result and up to two
  operands. `Tac.format()` and `format_code(code)` render them as
  `TAC(type, res, op1, op2)` lines. `generate` raises `ValueError` when a
  function is called but never defined, or when it has no `return`.

## Installation

```
pip install .
```

## Example

```python
from whenlang.symbols import SymbolTable, SymbolKind
from whenlang.astree import Node, NodeType, print_tree
from whenlang.decompiler import decompile
from whenlang.declarations import set_declarations
from whenlang.semantic import check
from whenlang.tac import generate, format_code

table = SymbolTable()
x = table.insert("x", SymbolKind.IDENTIFIER)
five = table.insert("5", SymbolKind.LIT_INTEGER)

# x : long 5;
tree = Node(NodeType.VAR_DEC, x, (
    Node(NodeType.INT, five, (Node(NodeType.KW_LONG),)),
))

print_tree(tree)               # indented dump on standard error
print(decompile(tree), end="") # x : long 5;
set_declarations(tree)
check(tree)                    # raises SemanticError on invalid programs
print(format_code(generate(tree, table)), end="")  # TAC(TAC_VAR, x, 5, )
```

## What it does not do

The package has no lexer, no parser and no command-line program. You must
build the tree yourself or with your own parser. It stops at three-address
code and does not produce assembly or run programs.

## Tests

```
pip install .[test]
pytest
```