"""Abstract syntax tree nodes and their textual dump."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import IO, Iterator, Optional, Union

MAX_CHILDREN = 3
MAX_LEXEME = 25


class NodeKind(IntEnum):
    STATEMENT = 0
    EXPRESSION = 1
    DECLARATION = 2


class StatementKind(IntEnum):
    IF = 0
    WHILE = 1
    RETURN = 2
    BREAK = 3
    CONTINUE = 4
    EXPRESSION_STATEMENT = 5


class ExpressionKind(IntEnum):
    OP = 0
    CONSTANT = 1
    ID = 2
    TYPE = 3
    ARR = 4
    ATIV = 5
    ASSIGN = 6


class DeclarationKind(IntEnum):
    VAR = 0
    FUN = 1
    PARAM = 2
    ARRDECL = 3
    UNKNOWN = 4


SubKind = Union[StatementKind, ExpressionKind, DeclarationKind, int]

_FAMILIES = {
    NodeKind.STATEMENT: StatementKind,
    NodeKind.EXPRESSION: ExpressionKind,
    NodeKind.DECLARATION: DeclarationKind,
}

_STATEMENT_NAMES = {
    StatementKind.IF: "if",
    StatementKind.WHILE: "while",
    StatementKind.RETURN: "return",
    StatementKind.BREAK: "break",
    StatementKind.CONTINUE: "continue",
    StatementKind.EXPRESSION_STATEMENT: "expression_statement",
}

_EXPRESSION_NAMES = {
    ExpressionKind.CONSTANT: "constant",
    ExpressionKind.ID: "id",
    ExpressionKind.TYPE: "type",
    ExpressionKind.ARR: "array",
    ExpressionKind.ATIV: "activation",
    ExpressionKind.ASSIGN: "assignment",
}

_DECLARATION_NAMES = {
    DeclarationKind.VAR: "variable",
    DeclarationKind.FUN: "function",
    DeclarationKind.PARAM: "parameter",
    DeclarationKind.ARRDECL: "array",
    DeclarationKind.UNKNOWN: "unknown",
}


def _coerce_subkind(kind: NodeKind, subkind: int) -> SubKind:
    try:
        return _FAMILIES[kind](subkind)
    except ValueError:
        return int(subkind)


@dataclass(eq=False)
class Node:
    """A tree node with up to three children and a chain of siblings.

    Subkinds are integer enums, so kinds of different families compare
    by their numeric value.
    """

    line: int
    lexeme: str
    kind: NodeKind
    subkind: SubKind
    parent: Optional[Node] = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)
    sibling: Optional[Node] = field(default=None, repr=False)
    prev_sibling: Optional[Node] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.kind = NodeKind(self.kind)
        self.lexeme = self.lexeme[: MAX_LEXEME - 1]
        self.subkind = _coerce_subkind(self.kind, self.subkind)

    def add_child(self, child: Node) -> Node:
        """Attach ``child`` in the next free slot and return this node."""
        if len(self.children) >= MAX_CHILDREN:
            raise ValueError("maximum number of children exceeded")
        self.children.append(child)
        child.parent = self
        return self

    def add_sibling(self, node: Node) -> Node:
        """Append ``node`` at the end of this sibling chain and return it."""
        last = self
        while last.sibling is not None:
            last = last.sibling
        last.sibling = node
        node.prev_sibling = last
        return node

    def siblings(self) -> Iterator[Node]:
        """Yield this node followed by every later sibling."""
        node: Optional[Node] = self
        while node is not None:
            yield node
            node = node.sibling

    def _subkind_name(self) -> tuple[str, str]:
        if self.kind == NodeKind.STATEMENT:
            return "statement", _STATEMENT_NAMES.get(self.subkind, "unknown")
        if self.kind == NodeKind.EXPRESSION:
            if self.subkind == ExpressionKind.OP and isinstance(
                self.subkind, ExpressionKind
            ):
                return "expression", self.lexeme
            return "expression", _EXPRESSION_NAMES.get(self.subkind, "unknown")
        return "declaration", _DECLARATION_NAMES.get(self.subkind, "deu_default")

    def describe(self) -> str:
        """One-line description of the node, as used in the tree dump."""
        kind_name, subkind_name = self._subkind_name()
        text = (
            f"Linha: {self.line}, Lexema: {self.lexeme}, "
            f"Tipo: {kind_name}, Tipo_Union: {subkind_name}"
        )
        if self.parent is not None:
            text += f", Pai: {self.parent.lexeme}"
        if self.prev_sibling is not None:
            text += f", Irmao Anterior: {self.prev_sibling.lexeme}"
        return text


def _tree_lines(node: Node, depth: int, is_sibling: bool) -> Iterator[str]:
    for position, current in enumerate(node.siblings()):
        marker = "-" if is_sibling or position > 0 else ""
        yield "  " * depth + marker + current.describe()
        for child in current.children:
            yield from _tree_lines(child, depth + 1, False)


def format_tree(tree: Optional[Node]) -> str:
    """Render a tree, children indented and siblings marked with a dash."""
    if tree is None:
        return ""
    return "".join(line + "\n" for line in _tree_lines(tree, 0, False))


def write_tree(file: IO[str], tree: Optional[Node]) -> None:
    """Write the rendering of ``tree`` to ``file``."""
    file.write(format_tree(tree))