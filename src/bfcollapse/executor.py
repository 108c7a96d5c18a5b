from __future__ import annotations

import sys
from typing import Callable, Optional

from .errors import InputExhaustedError, make_encoding_error
from .parser import Instruction, Program
from .state import MachineState, Tape

ByteReader = Callable[[], Optional[int]]


def stdin_byte_reader() -> Optional[int]:
    data = sys.stdin.buffer.read(1)
    return data[0] if data else None


class Executor:
    """
    Tape machine for collapsed (and optionally optimized) programs.

    One executor runs one program once: the tape and output buffer are
    created fresh in __init__ and belong to this instance only.

    Jumps use the targets recorded on the loop instructions, so the program
    must have consistent links (what `parse` and `optimize` produce).
    """

    def __init__(self, program: Program, read_byte: Optional[ByteReader] = None, trace: bool = False):
        self.program = program
        self.read_byte = read_byte if read_byte is not None else stdin_byte_reader
        self.state = MachineState(tape=Tape(), is_tracing=trace)

    @property
    def steps(self) -> int:
        return self.state.steps

    @property
    def trace(self):
        return self.state.trace

    def _read_input(self, pc: int) -> int:
        try:
            value = self.read_byte()
        except (OSError, ValueError) as e:
            raise InputExhaustedError(message=f"InputExhaustedError: could not read input at instruction {pc}: {e}", pc=pc) from e
        if value is None:
            raise InputExhaustedError(message=f"InputExhaustedError: input ended at instruction {pc}", pc=pc)
        return value & 0xFF

    def execute(self) -> bytes:
        """Run to completion and return the raw output bytes."""
        state = self.state
        tape = state.tape
        program = self.program
        length = len(program)
        output = state.output
        tracing = state.is_tracing

        pc = state.pc
        steps = 0

        while pc < length:
            entry = program[pc]
            cmd = entry.instruction
            amount = entry.amount

            if tracing:
                state.add_trace(f"pc={pc} {entry} ptr={tape.cursor} cell={tape.read()}")

            if cmd is Instruction.ADD:
                tape.add(amount)
            elif cmd is Instruction.SUB:
                tape.sub(amount)
            elif cmd is Instruction.MOVE_RIGHT:
                tape.move_right(amount)
            elif cmd is Instruction.MOVE_LEFT:
                tape.move_left(amount)
            elif cmd is Instruction.LOOP_OPEN:
                if tape.read() == 0:
                    pc = amount
            elif cmd is Instruction.LOOP_CLOSE:
                if tape.read() != 0:
                    pc = amount
            elif cmd is Instruction.CLEAR_CELL:
                tape.clear()
            elif cmd is Instruction.OUTPUT:
                output.extend(bytes((tape.read(),)) * amount)
            elif cmd is Instruction.INPUT:
                # One byte per entry, whatever the run length
                tape.write(self._read_input(pc))
            else:
                raise ValueError(f"Unknown instruction: {cmd!r}")

            pc += 1
            steps += 1

        state.pc = pc
        state.steps += steps
        return bytes(output)

    def run(self) -> str:
        """Run to completion and return the output decoded as UTF-8."""
        data = self.execute()
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise make_encoding_error(data, e) from e
