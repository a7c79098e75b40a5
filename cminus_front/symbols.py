"""Symbol table built from declarations in the syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Iterator, Optional

from cminus_front.ast import MAX_LEXEME, DeclarationKind, Node

TABLE_SIZE = 512
GLOBAL_SCOPE = "GLOBAL"
_KEY_LIMIT = 199
_TYPE_NAMES = ("int", "void")


def symbol_hash(scope: str, name: str) -> int:
    """Hash of the key ``scope+name`` as an unsigned 32-bit value."""
    key = f"{scope}+{name}".encode("utf-8")[:_KEY_LIMIT]
    value = 0
    for byte in key:
        signed = byte - 256 if byte >= 128 else byte
        value = (value * 31 + signed) % (1 << 32)
    return value


@dataclass
class Symbol:
    """A declared name together with its type and scope."""

    name: str
    line: int
    kind: int
    type: str
    scope: str
    hash_key: int = field(init=False)

    def __post_init__(self) -> None:
        self.hash_key = symbol_hash(self.scope, self.name)


class SymbolTable:
    """Chained hash table of symbols keyed by scope and name."""

    def __init__(self) -> None:
        self._buckets: list[list[Symbol]] = [[] for _ in range(TABLE_SIZE)]

    def add(self, symbol: Symbol) -> None:
        """Insert ``symbol`` at the head of its bucket."""
        self._buckets[symbol.hash_key % TABLE_SIZE].insert(0, symbol)

    def _matches(self, name: str, scope: str) -> Iterator[Symbol]:
        key = symbol_hash(scope, name)
        for symbol in self._buckets[key % TABLE_SIZE]:
            if symbol.hash_key == key and symbol.name == name and symbol.scope == scope:
                yield symbol

    def find(self, name: str, scope: str) -> Optional[Symbol]:
        """Most recently added symbol with this name in this scope, if any."""
        return next(self._matches(name, scope), None)

    def count(self, name: str, scope: str) -> int:
        """Number of symbols with this name in this scope."""
        return sum(1 for _ in self._matches(name, scope))

    def __iter__(self) -> Iterator[Symbol]:
        for bucket in self._buckets:
            yield from bucket

    def format(self) -> str:
        """One line per symbol, in bucket order."""
        return "".join(
            f"Hash: {s.hash_key} Linha: {s.line}, Name: {s.name}, "
            f"ID Type: {int(s.kind)}, Type: {s.type}, Scope: {s.scope}\n"
            for s in self
        )

    def write(self, file: IO[str]) -> None:
        """Write the table listing to ``file``."""
        file.write(self.format())


def scope_of(node: Node) -> str:
    """Name of the scope that ``node`` belongs to."""
    while True:
        first = node
        while first.prev_sibling is not None:
            first = first.prev_sibling
        if first.parent is None:
            return GLOBAL_SCOPE
        if first.subkind != DeclarationKind.FUN:
            node = first.parent
            continue
        return node.lexeme[:MAX_LEXEME]


def _walk(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.sibling is not None:
            stack.append(node.sibling)
        stack.extend(reversed(node.children))


def build_symbol_table(root: Optional[Node]) -> SymbolTable:
    """Collect every ``int``/``void`` declaration of the tree into a table."""
    table = SymbolTable()
    if root is None:
        return table
    for node in _walk(root):
        if node.lexeme not in _TYPE_NAMES:
            continue
        name = node.children[0].lexeme if node.children else node.lexeme
        if name in _TYPE_NAMES:
            continue
        table.add(Symbol(name, node.line, node.subkind, node.lexeme, scope_of(node)))
    return table