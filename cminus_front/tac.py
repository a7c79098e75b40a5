"""Three-address code instructions and programs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import IO, Iterator, Optional

from cminus_front.ast import MAX_LEXEME


class Operation(IntEnum):
    ADD = 0
    SUB = 1
    MUL = 2
    DIV = 3
    MOD = 4
    UMINUS = 5
    LT = 6
    LE = 7
    GT = 8
    GE = 9
    EQ = 10
    NE = 11
    ASSIGN = 12
    LOAD = 13
    STORE = 14
    DECL_VAR = 15
    DECL_ARR = 16
    FORMAL_PARAM = 17
    GOTO = 18
    IFF = 19
    FUN = 20
    END = 21
    PARAM = 22
    CALL = 23
    RET = 24
    LAB = 25
    ARG = 26
    HALT = 27

    @property
    def label(self) -> str:
        """Name shown in listings; operations without one show ``UNKNOWN_OP``."""
        if self in (Operation.UMINUS, Operation.PARAM):
            return "UNKNOWN_OP"
        return self.name


def _operand(value: Optional[str]) -> str:
    return (value or "")[: MAX_LEXEME - 1]


@dataclass(frozen=True)
class Instruction:
    """A quadruple: operation, two operands and a result."""

    operation: Operation
    op1: str = ""
    op2: str = ""
    result: str = ""

    def __str__(self) -> str:
        return f"({self.operation.label}, {self.op1}, {self.op2}, {self.result})"


class TacProgram:
    """An ordered list of three-address instructions."""

    def __init__(self) -> None:
        self._instructions: list[Instruction] = []

    def emit(
        self,
        operation: Operation,
        op1: Optional[str] = None,
        op2: Optional[str] = None,
        result: Optional[str] = None,
    ) -> Instruction:
        """Append an instruction; missing operands become empty strings."""
        instruction = Instruction(
            Operation(operation), _operand(op1), _operand(op2), _operand(result)
        )
        self._instructions.append(instruction)
        return instruction

    @property
    def last(self) -> Optional[Instruction]:
        """The most recently emitted instruction, if any."""
        return self._instructions[-1] if self._instructions else None

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def format(self) -> str:
        """Numbered listing of the program."""
        if not self._instructions:
            return ";; Estrutura TAC vazia.\n"
        lines = [
            f";; Código Intermediário Gerado ({len(self._instructions)} instruções)\n"
        ]
        for index, instruction in enumerate(self._instructions):
            tabs = "\t\t" if index < 10 else "\t"
            lines.append(f"({index}){tabs}{instruction}\n")
        lines.append(";; Fim do Código Intermediário\n")
        return "".join(lines)

    def write(self, file: IO[str]) -> None:
        """Write the listing to ``file``."""
        file.write(self.format())