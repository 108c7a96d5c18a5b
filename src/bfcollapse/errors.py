from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _line_and_column(source: str, offset: int) -> Tuple[int, int]:
    line = source.count('\n', 0, offset) + 1
    column = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if 'unmatched closing bracket' in msg:
        return 'Every "]" needs an earlier "[" at the same nesting level.'
    if 'unmatched opening bracket' in msg:
        return 'Check for a missing "]" before the end of the program.'
    if 'loop target' in msg:
        return 'Loop targets must point at the matching bracket; re-run the parser on the source.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class StructuralError(BFError):
    line: int = 0
    column: int = 0
    context: str = ''


@dataclass
class InputExhaustedError(BFError):
    pc: int = -1


@dataclass
class EncodingError(BFError):
    data: bytes = b''
    position: int = -1


def make_structural_error(*, message: str, source: Optional[str] = None, offset: Optional[int] = None) -> StructuralError:
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    if source is None or offset is None or offset < 0:
        return StructuralError(message=f"StructuralError: {message}{hint_block}")

    line, column = _line_and_column(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    return StructuralError(
        message=f"StructuralError: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        line=line,
        column=column,
        context=ctx,
    )


def make_encoding_error(data: bytes, exc: UnicodeDecodeError) -> EncodingError:
    bad = data[exc.start:exc.end]
    return EncodingError(
        message=f"EncodingError: output is not valid UTF-8 at byte {exc.start} ({bad.hex()})",
        data=bytes(data),
        position=exc.start,
    )
