from __future__ import annotations

from typing import List

from .parser import CollapsedInstruction, Instruction, Program


def is_clear_loop(program: Program, i: int) -> bool:
    """True when program[i:i + 3] is `[-]`: open, one decrement, close."""
    if i + 2 >= len(program):
        return False
    head, body, tail = program[i], program[i + 1], program[i + 2]
    return (
        head.instruction is Instruction.LOOP_OPEN
        and body.instruction is Instruction.SUB
        and body.amount == 1
        and tail.instruction is Instruction.LOOP_CLOSE
    )


def relink(program: Program) -> Program:
    """Recompute every bracket's jump target in place."""
    loop_stack: List[int] = []
    for index, entry in enumerate(program):
        if entry.instruction is Instruction.LOOP_OPEN:
            loop_stack.append(index)
        elif entry.instruction is Instruction.LOOP_CLOSE:
            open_index = loop_stack.pop()
            program[open_index].amount = index
            entry.amount = open_index
    return program


def optimize(program: Program) -> Program:
    """
    Fuse every `[-]` into a single CLEAR_CELL.

    Single left-to-right pass, non-overlapping. The input is left untouched;
    the result gets fresh entries and its loop targets are recomputed, since
    each fusion shifts everything after it down by two.
    """
    out: Program = []
    i = 0
    while i < len(program):
        if is_clear_loop(program, i):
            out.append(CollapsedInstruction(Instruction.CLEAR_CELL, 1))
            i += 3
            continue
        cur = program[i]
        out.append(CollapsedInstruction(cur.instruction, cur.amount))
        i += 1
    return relink(out)


def count_clears(program: Program) -> int:
    return sum(1 for entry in program if entry.instruction is Instruction.CLEAR_CELL)
