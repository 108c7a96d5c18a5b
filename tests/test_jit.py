"""
Numba batch executor: must agree with the pure executor.
"""

import numpy as np
import pytest

from bfcollapse.errors import InputExhaustedError
from bfcollapse.executor import Executor
from bfcollapse.jit import OP_ADD, OP_CLEAR_CELL, OP_LOOP_CLOSE, OP_LOOP_OPEN, JitExecutor, to_arrays
from bfcollapse.lexer import Lexer
from bfcollapse.optimizer import optimize
from bfcollapse.parser import CollapsedInstruction, Instruction, parse
from bfcollapse.state import TAPE_SIZE, TAPE_START

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def _program(source):
    return optimize(parse(Lexer(source)))


def _reader(data):
    it = iter(data)
    return lambda: next(it, None)


def test_to_arrays():
    ops, args = to_arrays(_program("++[[-]]"))
    assert ops.dtype == np.int64
    assert list(ops) == [OP_ADD, OP_LOOP_OPEN, OP_CLEAR_CELL, OP_LOOP_CLOSE]
    assert list(args) == [2, 3, 1, 1]


def test_hello_world_matches_pure_executor():
    program = _program(HELLO_WORLD)
    jit = JitExecutor(program)
    pure = Executor(program)
    assert jit.run() == pure.run() == "Hello World!\n"
    assert jit.steps == pure.steps


def test_small_batches_resume():
    program = _program(HELLO_WORLD)
    assert JitExecutor(program, batch_steps=3).run() == "Hello World!\n"


def test_wrapping():
    executor = JitExecutor(_program("-<"))
    executor.execute()
    assert executor.state.tape.cursor == TAPE_SIZE // 2 - 1
    assert int(executor.state.tape.cells[TAPE_SIZE // 2]) == 255


def test_clear_cell():
    assert JitExecutor(_program("+" * 200 + "[-].")).run() == "\x00"


def test_input_echo():
    executor = JitExecutor(_program(",[.,]"), read_byte=_reader(b"ok\x00"))
    assert executor.run() == "ok"


def test_input_exhausted():
    with pytest.raises(InputExhaustedError):
        JitExecutor(_program(",,>,"), read_byte=_reader(b"a")).run()


def test_cursor_wraps_left_across_tape_start():
    executor = JitExecutor([
        CollapsedInstruction(Instruction.MOVE_LEFT, TAPE_START + 1),
        CollapsedInstruction(Instruction.SUB, 1),
    ])
    executor.execute()
    assert executor.state.tape.cursor == TAPE_SIZE - 1
    assert executor.state.tape.read() == 255


def test_cursor_wraps_right_across_tape_end():
    executor = JitExecutor([
        CollapsedInstruction(Instruction.MOVE_RIGHT, TAPE_SIZE - TAPE_START),
        CollapsedInstruction(Instruction.ADD, 300),
    ])
    executor.execute()
    assert executor.state.tape.cursor == 0
    assert executor.state.tape.read() == 44
