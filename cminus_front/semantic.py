"""Semantic checks over the syntax tree, using a built symbol table."""

from __future__ import annotations

from typing import Optional

from cminus_front.ast import DeclarationKind, ExpressionKind, Node
from cminus_front.symbols import GLOBAL_SCOPE, SymbolTable, scope_of

_BUILTIN_FUNCTIONS = frozenset({"input", "output"})


class SemanticAnalyzer:
    """Walks a tree and collects semantic error messages.

    Errors do not stop the walk; every message found is kept in
    :attr:`errors`, in the order the tree is visited.
    """

    def __init__(self, table: SymbolTable) -> None:
        self.table = table
        self.errors: list[str] = []
        self.main_declared = False

    def analyze(self, root: Optional[Node]) -> list[str]:
        """Check ``root`` and everything below and after it.

        Returns the messages found during this call.
        """
        start = len(self.errors)
        if root is not None:
            self._visit(root)
        return self.errors[start:]

    def check_main_function(self) -> bool:
        """Report an error unless a ``main`` function was seen; return whether it was."""
        if not self.main_declared:
            self.errors.append("Semantic Error: No declaration of 'main' function.")
        return self.main_declared

    def _visit(self, root: Node) -> None:
        for node in root.siblings():
            self._check(node)
            for child in node.children:
                self._visit(child)

    def _check(self, node: Node) -> None:
        first = node.children[0] if node.children else None
        second = node.children[1] if len(node.children) > 1 else None

        if node.lexeme == "void" and first is not None and node.subkind == DeclarationKind.VAR:
            self.errors.append(
                f"Semantic Error: Variable '{first.lexeme}' declared with invalid "
                f"type 'void' at line {node.line}."
            )

        scope = scope_of(node)
        if first is not None and self.table.count(first.lexeme, scope) > 1:
            self.errors.append(
                f"Semantic Error: Multiple declarations of '{first.lexeme}' "
                f"at line {node.line}."
            )

        if node.subkind == ExpressionKind.ATIV:
            declared = self.table.find(node.lexeme, GLOBAL_SCOPE)
            if declared is None and node.lexeme not in _BUILTIN_FUNCTIONS:
                self.errors.append(
                    f"Semantic Error: Function '{node.lexeme}' called without "
                    f"declaration at line {node.line}."
                )

        if node.subkind == ExpressionKind.ASSIGN and first is not None:
            if (
                self.table.find(first.lexeme, scope) is None
                and self.table.find(first.lexeme, GLOBAL_SCOPE) is None
            ):
                self.errors.append(
                    f"Error: Variable '{first.lexeme}' assigned before declaration "
                    f"at line {node.line}."
                )

        if node.lexeme == "=" and second is not None and second.subkind == ExpressionKind.ATIV:
            function = self.table.find(second.lexeme, GLOBAL_SCOPE)
            if function is not None and function.type == "void":
                self.errors.append(
                    f"Semantic Error: Cannot assign return value of void function "
                    f"'{second.lexeme}' at line {node.line}."
                )

        if node.lexeme == "main" and node.subkind == DeclarationKind.FUN:
            self.main_declared = True