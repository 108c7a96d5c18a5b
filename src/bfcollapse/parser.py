from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .errors import make_structural_error
from .lexer import Lexer, is_code_char


class Instruction(Enum):
    ADD = '+'
    SUB = '-'
    LOOP_OPEN = '['
    LOOP_CLOSE = ']'
    MOVE_LEFT = '<'
    MOVE_RIGHT = '>'
    OUTPUT = '.'
    INPUT = ','
    # Only produced by the optimizer
    CLEAR_CELL = '[-]'


LOOP_INSTRUCTIONS = (Instruction.LOOP_OPEN, Instruction.LOOP_CLOSE)


@dataclass
class CollapsedInstruction:
    """
    One entry of a collapsed program.

    For loop brackets `amount` is the index of the matching bracket;
    for everything else it is the run length.
    """

    instruction: Instruction
    amount: int = 1

    def __str__(self) -> str:
        return f"{self.instruction.name}({self.amount})"


Program = List[CollapsedInstruction]


def parse(symbols: Iterable[str], *, source: Optional[str] = None) -> Program:
    """
    Resolve loop brackets and merge runs of identical instructions.

    `symbols` is normally a Lexer; when it is, structural errors point at
    the offending bracket in its source.
    Anything that is not an instruction symbol is skipped.
    """
    lexer = symbols if isinstance(symbols, Lexer) else None
    if lexer is not None and source is None:
        source = lexer.source

    program: Program = []
    loop_stack: List[int] = []
    open_offsets: List[int] = []

    for symbol in symbols:
        if not is_code_char(symbol):
            continue
        command = Instruction(symbol)

        if command is Instruction.LOOP_OPEN:
            loop_stack.append(len(program))
            open_offsets.append(lexer.offset if lexer is not None else -1)
            program.append(CollapsedInstruction(command, 1))
        elif command is Instruction.LOOP_CLOSE:
            if not loop_stack:
                raise make_structural_error(
                    message="unmatched closing bracket",
                    source=source,
                    offset=lexer.offset if lexer is not None else None,
                )
            open_index = loop_stack.pop()
            open_offsets.pop()
            program[open_index].amount = len(program)
            program.append(CollapsedInstruction(command, open_index))
        else:
            last = program[-1] if program else None
            if last is not None and last.instruction is command:
                last.amount += 1
            else:
                program.append(CollapsedInstruction(command, 1))

    if loop_stack:
        raise make_structural_error(
            message="unmatched opening bracket",
            source=source,
            offset=open_offsets[-1],
        )
    return program


def check_links(program: Program) -> None:
    """Raise StructuralError unless every bracket points at its partner."""
    for index, entry in enumerate(program):
        if entry.instruction is Instruction.LOOP_OPEN:
            partner = Instruction.LOOP_CLOSE
            in_range = index < entry.amount < len(program)
        elif entry.instruction is Instruction.LOOP_CLOSE:
            partner = Instruction.LOOP_OPEN
            in_range = 0 <= entry.amount < index
        else:
            continue
        target = entry.amount
        if not in_range:
            raise make_structural_error(
                message=f"loop target {target} of {entry.instruction.value} at {index} is out of range"
            )
        other = program[target]
        if other.instruction is not partner or other.amount != index:
            raise make_structural_error(
                message=f"loop target {target} of {entry.instruction.value} at {index} does not point back"
            )


def emit(program: Iterable[CollapsedInstruction]) -> str:
    out: List[str] = []
    for entry in program:
        if entry.instruction in LOOP_INSTRUCTIONS or entry.instruction is Instruction.CLEAR_CELL:
            out.append(entry.instruction.value)
        else:
            out.append(entry.instruction.value * entry.amount)
    return ''.join(out)


def listing(program: Iterable[CollapsedInstruction]) -> str:
    return '\n'.join(f"{i:5d}  {entry}" for i, entry in enumerate(program))
