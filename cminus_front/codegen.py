"""Generation of three-address code from the syntax tree."""

from __future__ import annotations

from itertools import islice
from typing import Optional

from cminus_front.ast import (
    DeclarationKind,
    ExpressionKind,
    Node,
    NodeKind,
    StatementKind,
)
from cminus_front.symbols import SymbolTable
from cminus_front.tac import Operation, TacProgram

MAX_ARGS = 255

# The "%%" spelling is deliberate: a lone "%" is reported as unknown.
_BINARY_OPERATIONS = {
    "+": Operation.ADD,
    "-": Operation.SUB,
    "*": Operation.MUL,
    "/": Operation.DIV,
    "%%": Operation.MOD,
    "<": Operation.LT,
    "<=": Operation.LE,
    ">": Operation.GT,
    ">=": Operation.GE,
    "==": Operation.EQ,
    "!=": Operation.NE,
}

_TERMINAL_OPERATIONS = frozenset({Operation.HALT, Operation.RET, Operation.GOTO})


class CodeGenError(Exception):
    """Raised when code generation cannot start at all."""


class _Abort(Exception):
    """Abandons the current node and the rest of its sibling chain."""


def _child(node: Node, index: int) -> Optional[Node]:
    return node.children[index] if len(node.children) > index else None


def _is_id(node: Node) -> bool:
    return node.kind == NodeKind.EXPRESSION and node.subkind == ExpressionKind.ID


class CodeGenerator:
    """Turns a syntax tree into a :class:`TacProgram`.

    Problems found in the tree do not stop generation; their messages are
    collected in :attr:`errors` and the offending part is skipped.
    """

    def __init__(self, table: SymbolTable) -> None:
        self.table = table
        self.errors: list[str] = []
        self._temps = 0
        self._labels = 0
        self._program = TacProgram()

    def generate(self, root: Optional[Node]) -> TacProgram:
        """Generate code for ``root`` and its siblings, ending with HALT if needed."""
        if root is None:
            raise CodeGenError("Erro GCI: Árvore sintática raiz é nula!")
        self._program = TacProgram()
        self._temps = 0
        self._labels = 0
        self._generate(root)
        last = self._program.last
        if last is None or last.operation not in _TERMINAL_OPERATIONS:
            self._program.emit(Operation.HALT)
        return self._program

    # -- helpers ---------------------------------------------------------

    def _new_temp(self) -> str:
        name = f"_t{self._temps}"
        self._temps += 1
        return name

    def _new_label(self) -> str:
        name = f"_L{self._labels}"
        self._labels += 1
        return name

    def _emit(self, operation: Operation, op1=None, op2=None, result=None) -> None:
        self._program.emit(operation, op1, op2, result)

    def _fail(self, message: str) -> None:
        self.errors.append(message)
        raise _Abort

    def _generate(self, node: Node) -> Optional[str]:
        """Generate ``node`` and the siblings after it; return the node's value."""
        try:
            result = self._node(node)
        except _Abort:
            return None
        for sibling in islice(node.siblings(), 1, None):
            try:
                self._node(sibling)
            except _Abort:
                break
        return result

    def _value(self, node: Node) -> str:
        value = self._generate(node)
        if value is None:
            raise _Abort
        return value

    def _loaded(self, node: Node) -> str:
        """Value of ``node``, loaded into a fresh temporary when it is a name."""
        value = self._value(node)
        if _is_id(node):
            temp = self._new_temp()
            self._emit(Operation.LOAD, value, None, temp)
            return temp
        return value

    # -- dispatch --------------------------------------------------------

    def _node(self, node: Node) -> Optional[str]:
        if node.kind == NodeKind.DECLARATION:
            self._declaration(node)
            return None
        if node.kind == NodeKind.STATEMENT:
            self._statement(node)
            return None
        return self._expression(node)

    def _declaration(self, node: Node) -> None:
        subkind = int(node.subkind)
        ident = _child(node, 0)
        if subkind == DeclarationKind.FUN:
            if ident is None:
                self._fail("Erro GCI: Declaração de função sem nome ou ID.")
            self._temps = 0
            self._emit(Operation.FUN, ident.lexeme, node.lexeme)
            params = _child(ident, 0)
            if params is not None:
                for param in params.siblings():
                    if param.lexeme == "void":
                        continue
                    name = _child(param, 0)
                    if name is not None:
                        self._emit(Operation.FORMAL_PARAM, name.lexeme)
                    else:
                        self.errors.append(
                            "Erro GCI: Parâmetro formal sem nome de ID para tipo "
                            f"{param.lexeme}."
                        )
            body = _child(ident, 1)
            if body is not None:
                self._generate(body)
            self._emit(Operation.END, ident.lexeme)
        elif subkind == DeclarationKind.VAR:
            if ident is not None:
                self._emit(Operation.DECL_VAR, ident.lexeme)
            else:
                self.errors.append("Erro GCI: Declaração de variável local sem ID.")
        elif subkind == ExpressionKind.ARR:
            # Array declarations carry the numeric value of ExpressionKind.ARR.
            if ident is None:
                self.errors.append("Erro GCI: Declaração de array local sem ID.")
                return
            size = _child(ident, 0)
            if size is not None:
                self._emit(Operation.DECL_ARR, ident.lexeme, size.lexeme)
            else:
                self.errors.append(
                    f"Erro GCI: Array local '{ident.lexeme}' AST não esperada para tamanho."
                )
        else:
            self.errors.append(f"Erro GCI: Kind de declaração desconhecido: {subkind}")

    def _statement(self, node: Node) -> None:
        subkind = int(node.subkind)
        if subkind == StatementKind.IF:
            self._if(node)
        elif subkind == StatementKind.WHILE:
            self._while(node)
        elif subkind == StatementKind.RETURN:
            value_node = _child(node, 0)
            if value_node is None:
                self._emit(Operation.RET)
            else:
                self._emit(Operation.RET, self._loaded(value_node))
        else:
            self.errors.append(f"Erro GCI: Kind de statement desconhecido: {subkind}")

    def _if(self, node: Node) -> None:
        condition = _child(node, 0)
        if condition is None:
            self._fail("Erro GCI: Condição do IF ausente.")
        value = self._value(condition)
        else_label = self._new_label()
        self._emit(Operation.IFF, value, None, else_label)
        then_branch = _child(node, 1)
        if then_branch is not None:
            self._generate(then_branch)
        else_branch = _child(node, 2)
        if else_branch is not None:
            end_label = self._new_label()
            self._emit(Operation.GOTO, None, None, end_label)
            self._emit(Operation.LAB, None, None, else_label)
            self._generate(else_branch)
            self._emit(Operation.LAB, None, None, end_label)
        else:
            self._emit(Operation.LAB, None, None, else_label)

    def _while(self, node: Node) -> None:
        condition, body = _child(node, 0), _child(node, 1)
        if condition is None or body is None:
            self._fail("Erro GCI: Nó WHILE incompleto.")
        start_label = self._new_label()
        end_label = self._new_label()
        self._emit(Operation.LAB, None, None, start_label)
        value = self._value(condition)
        self._emit(Operation.IFF, value, None, end_label)
        self._generate(body)
        self._emit(Operation.GOTO, None, None, start_label)
        self._emit(Operation.LAB, None, None, end_label)

    def _expression(self, node: Node) -> Optional[str]:
        subkind = int(node.subkind)
        if subkind == ExpressionKind.OP:
            return self._binary(node)
        if subkind in (ExpressionKind.CONSTANT, ExpressionKind.ID):
            return node.lexeme
        if subkind == ExpressionKind.ASSIGN:
            return self._assign(node)
        if subkind == ExpressionKind.ARR:
            index = _child(node, 0)
            if index is None:
                self._fail("Erro GCI: Acesso a array com ID ou índice ausente.")
            offset = self._loaded(index)
            result = self._new_temp()
            self._emit(Operation.LOAD, node.lexeme, offset, result)
            return result
        if subkind == ExpressionKind.ATIV:
            return self._call(node)
        if subkind == ExpressionKind.TYPE:
            return None
        self.errors.append(
            f"Erro GCI: Kind de expressão desconhecido: {subkind} (lexema: {node.lexeme})"
        )
        return None

    def _binary(self, node: Node) -> str:
        left, right = _child(node, 0), _child(node, 1)
        if left is None or right is None:
            self._fail(
                f"Erro GCI: Nó de operação binária incompleto (lexema: {node.lexeme})."
            )
        first = self._loaded(left)
        second = self._loaded(right)
        result = self._new_temp()
        operation = _BINARY_OPERATIONS.get(node.lexeme)
        if operation is None:
            self._fail(f"Erro GCI: Operador binário desconhecido: {node.lexeme}")
        self._emit(operation, first, second, result)
        return result

    def _assign(self, node: Node) -> str:
        target, source = _child(node, 0), _child(node, 1)
        if target is None or source is None:
            self._fail("Erro GCI: Atribuição incompleta.")
        value = self._loaded(source)
        assigned = self._new_temp()
        self._emit(Operation.ASSIGN, value, None, assigned)
        if target.kind == NodeKind.EXPRESSION and target.subkind == ExpressionKind.ID:
            self._emit(Operation.STORE, assigned, None, target.lexeme)
            return assigned
        if target.kind == NodeKind.EXPRESSION and target.subkind == ExpressionKind.ARR:
            index = _child(target, 0)
            if index is None:
                self._fail("Erro GCI: Atribuição a array com ID ou índice ausente.")
            offset = self._loaded(index)
            self._emit(Operation.STORE, assigned, offset, target.lexeme)
            return assigned
        self._fail("Erro GCI: LValue inválido para atribuição.")
        raise AssertionError("unreachable")

    def _call(self, node: Node) -> str:
        values: list[str] = []
        argument = _child(node, 0)
        while argument is not None and len(values) < MAX_ARGS:
            value = self._generate(argument)
            if value is None:
                self._fail(
                    f"Erro GCI: Erro ao gerar argumento {len(values) + 1} para {node.lexeme}."
                )
            if _is_id(argument):
                temp = self._new_temp()
                self._emit(Operation.LOAD, value, None, temp)
                value = temp
            values.append(value)
            argument = argument.sibling
        if argument is not None:
            self.errors.append(
                f"Aviso GCI: Número de argumentos para {node.lexeme} excedeu o limite "
                f"de {MAX_ARGS}."
            )
        for value in values:
            self._emit(Operation.ARG, value)
        result = self._new_temp()
        self._emit(Operation.CALL, node.lexeme, str(len(values)), result)
        return result


def generate_intermediate_code(root: Optional[Node], table: SymbolTable) -> TacProgram:
    """Generate the three-address program for a whole tree."""
    return CodeGenerator(table).generate(root)