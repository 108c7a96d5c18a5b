from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

TAPE_SIZE = 30_000
TAPE_START = TAPE_SIZE // 2


@dataclass
class Tape:
    """Circular byte tape. Cells wrap mod 256, the cursor wraps mod TAPE_SIZE."""

    cells: np.ndarray = field(default_factory=lambda: np.zeros(TAPE_SIZE, dtype=np.uint8))
    cursor: int = TAPE_START

    def __len__(self) -> int:
        return len(self.cells)

    def read(self) -> int:
        return int(self.cells[self.cursor])

    def write(self, value: int) -> None:
        self.cells[self.cursor] = value & 0xFF

    def add(self, amount: int) -> None:
        self.cells[self.cursor] = (int(self.cells[self.cursor]) + amount) & 0xFF

    def sub(self, amount: int) -> None:
        self.cells[self.cursor] = (int(self.cells[self.cursor]) - amount) & 0xFF

    def move_right(self, amount: int) -> None:
        self.cursor = (self.cursor + amount) % len(self.cells)

    def move_left(self, amount: int) -> None:
        self.cursor = (self.cursor - amount) % len(self.cells)

    def clear(self) -> None:
        self.cells[self.cursor] = 0


@dataclass
class MachineState:
    tape: Tape = field(default_factory=Tape)
    pc: int = 0
    steps: int = 0
    output: bytearray = field(default_factory=bytearray)
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
