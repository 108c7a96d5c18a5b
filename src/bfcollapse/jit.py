from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numba import njit

from .executor import ByteReader, Executor
from .parser import Instruction, Program

OP_ADD = 0
OP_SUB = 1
OP_LOOP_OPEN = 2
OP_LOOP_CLOSE = 3
OP_MOVE_LEFT = 4
OP_MOVE_RIGHT = 5
OP_OUTPUT = 6
OP_INPUT = 7
OP_CLEAR_CELL = 8

OPCODES = {
    Instruction.ADD: OP_ADD,
    Instruction.SUB: OP_SUB,
    Instruction.LOOP_OPEN: OP_LOOP_OPEN,
    Instruction.LOOP_CLOSE: OP_LOOP_CLOSE,
    Instruction.MOVE_LEFT: OP_MOVE_LEFT,
    Instruction.MOVE_RIGHT: OP_MOVE_RIGHT,
    Instruction.OUTPUT: OP_OUTPUT,
    Instruction.INPUT: OP_INPUT,
    Instruction.CLEAR_CELL: OP_CLEAR_CELL,
}

STOP_HALT = 0
STOP_OUTPUT = 1
STOP_INPUT = 2
STOP_BUDGET = 3


@njit(cache=True)
def run_batch(ops, args, memory, pc, pointer, max_steps):
    """
    Run until I/O, the end of the program, or max_steps instructions.

    Output and input stop the loop with pc left on the I/O instruction so
    the caller can service it from Python.
    """
    stop_reason = STOP_BUDGET
    mem_len = memory.shape[0]
    prog_len = ops.shape[0]
    steps = 0

    while steps < max_steps:
        if pc >= prog_len:
            stop_reason = STOP_HALT
            break
        op = ops[pc]
        arg = args[pc]

        if op == OP_ADD:
            memory[pointer] = (memory[pointer] + arg) & 255
        elif op == OP_SUB:
            memory[pointer] = (memory[pointer] - arg) & 255
        elif op == OP_MOVE_RIGHT:
            pointer = (pointer + arg) % mem_len
        elif op == OP_MOVE_LEFT:
            pointer = (pointer - arg) % mem_len
        elif op == OP_LOOP_OPEN:
            if memory[pointer] == 0:
                pc = arg
        elif op == OP_LOOP_CLOSE:
            if memory[pointer] != 0:
                pc = arg
        elif op == OP_CLEAR_CELL:
            memory[pointer] = 0
        elif op == OP_OUTPUT:
            stop_reason = STOP_OUTPUT
            break
        elif op == OP_INPUT:
            stop_reason = STOP_INPUT
            break

        pc += 1
        steps += 1

    return pc, pointer, stop_reason, steps


def to_arrays(program: Program) -> Tuple[np.ndarray, np.ndarray]:
    ops = np.array([OPCODES[entry.instruction] for entry in program], dtype=np.int64)
    args = np.array([entry.amount for entry in program], dtype=np.int64)
    return ops, args


class JitExecutor(Executor):
    """Executor that runs the stretches between I/O through numba."""

    def __init__(
        self,
        program: Program,
        read_byte: Optional[ByteReader] = None,
        trace: bool = False,
        batch_steps: int = 1_000_000,
    ):
        super().__init__(program, read_byte=read_byte, trace=trace)
        self.batch_steps = batch_steps
        self.ops, self.args = to_arrays(program)

    def execute(self) -> bytes:
        state = self.state
        tape = state.tape
        memory = tape.cells
        output = state.output
        length = len(self.ops)

        pc = state.pc
        pointer = tape.cursor
        while pc < length:
            pc, pointer, stop_reason, steps = run_batch(
                self.ops, self.args, memory, pc, pointer, self.batch_steps
            )
            state.steps += steps
            state.add_trace(f"batch stop={stop_reason} pc={pc} ptr={pointer} steps={steps}")

            if stop_reason == STOP_OUTPUT:
                output.extend(bytes((int(memory[pointer]),)) * int(self.args[pc]))
            elif stop_reason == STOP_INPUT:
                memory[pointer] = self._read_input(pc)
            else:
                continue
            pc += 1
            state.steps += 1

        tape.cursor = int(pointer)
        state.pc = int(pc)
        return bytes(output)
