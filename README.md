# cminus_front

The middle stages of a compiler for a small C-minus language. It starts from a
syntax tree that is already built and can:

- dump the tree as indented text (`cminus_front.ast`),
- build a scoped symbol table from the declarations (`cminus_front.symbols`),
- run semantic checks that report undeclared functions, multiple
  declarations, `void` variables, assignments of a `void` function's result,
  assignments to undeclared variables and a missing `main`
  (`cminus_front.semantic`),
- turn the tree into three-address code made of quadruples
  (`cminus_front.tac`, `cminus_front.codegen`).

## Installation

```
pip install .
```

## Usage

```python
import sys

from cminus_front.ast import (
    DeclarationKind, ExpressionKind, Node, NodeKind, StatementKind, write_tree,
)
from cminus_front.symbols import build_symbol_table
from cminus_front.semantic import SemanticAnalyzer
from cminus_front.codegen import CodeGenerator

# int main(void) { return 0; }
root = Node(1, "int", NodeKind.DECLARATION, DeclarationKind.FUN)
name = Node(1, "main", NodeKind.EXPRESSION, ExpressionKind.ID)
root.add_child(name)
name.add_child(Node(1, "void", NodeKind.DECLARATION, DeclarationKind.PARAM))
ret = Node(2, "return", NodeKind.STATEMENT, StatementKind.RETURN)
ret.add_child(Node(2, "0", NodeKind.EXPRESSION, ExpressionKind.CONSTANT))
name.add_child(ret)

write_tree(sys.stdout, root)

table = build_symbol_table(root)
table.write(sys.stdout)

analyzer = SemanticAnalyzer(table)
for message in analyzer.analyze(root):
    print(message, file=sys.stderr)
analyzer.check_main_function()

generator = CodeGenerator(table)
program = generator.generate(root)
program.write(sys.stdout)
```

For this tree the program holds `(FUN, main, int, )`, `(RET, 0, , )`,
`(END, main, , )` and a closing `(HALT, , , )`.

### Trees

A `Node` has a line number, a lexeme (cut to 24 characters), a `NodeKind` and
a subkind (`StatementKind`, `ExpressionKind` or `DeclarationKind`). It holds
up to three children. `add_child` attaches one and raises `ValueError` once
the node is full. `add_sibling` appends a node to the end of the sibling chain
and returns it. `siblings()` yields the node and every later sibling.
`describe()` gives the one-line description of a node. `format_tree` and
`write_tree` render a whole tree: children are indented by two spaces and
later siblings are marked with a dash.

### Symbol table

`build_symbol_table` walks the tree. It records every node whose lexeme is
`int` or `void` as a `Symbol`, named after the node's first child. Nodes
without a usable name are skipped. A symbol's scope, computed by `scope_of`,
is `GLOBAL` or the name of the enclosing function. `SymbolTable.find` returns
the most recently added symbol for a name and scope. `SymbolTable.count`
counts such symbols. Iterating over the table yields symbols in bucket order,
and `format()`/`write()` list them one per line with their hash
(`symbol_hash`).

### Semantic checks

`SemanticAnalyzer.analyze` collects messages in `errors` and returns the ones
found during that call. It does not raise, and it does not print.
`input` and `output` count as built-in functions. `check_main_function` adds
an error when no `main` function was seen and returns whether one was.

### Intermediate code

A `TacProgram` is an ordered list of `Instruction` quadruples. Each holds an
`Operation` and three string operands. `emit` appends an instruction. `format()`
numbers the lines and puts a header comment before them and a trailer comment
after them. An empty program renders as a single comment line.

`CodeGenerator.generate` (or `generate_intermediate_code(root, table)`) emits:

- `FUN`/`FORMAL_PARAM`/`END` for functions,
- `DECL_VAR` and `DECL_ARR` for declarations,
- `LOAD`/`ASSIGN`/`STORE` for names, arrays and assignments,
- the arithmetic and comparison operations for binary operators,
- `IFF`/`GOTO`/`LAB` for `if` and `while`,
- `ARG`/`CALL` for calls, and `RET` for returns.

Temporaries are named `_t0`, `_t1`, … and start again at `_t0` in each
function. Labels are named `_L0`, `_L1`, …. The generator appends `HALT`
unless the program already ends in `HALT`, `RET` or `GOTO`.

Parts of the tree that the generator cannot handle are skipped. Their messages
are collected in `CodeGenerator.errors`. `CodeGenError` is raised only when
the root is `None`.

## What it does not do

The package has no lexer or parser. Trees are built with `Node`, by hand or
by a parser of your own. It has no command-line program and writes no output
files of its own. The dump, symbol listing and code listing go to whatever
file object you pass to `write_tree` or `write`.

## Tests

```
pip install .[test]
pytest
```