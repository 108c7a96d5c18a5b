from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .executor import ByteReader, Executor
from .lexer import lex
from .optimizer import count_clears, optimize
from .parser import Program, parse


@dataclass(frozen=True)
class RunOptions:
    optimize: bool = True
    jit: bool = False
    trace: bool = False


@dataclass(frozen=True)
class RunResult:
    output: str
    program: Program
    steps: int
    trace: List[str] = field(default_factory=list)


def compile_string(source: str, *, optimize_program: bool = True) -> Program:
    program = parse(lex(source))
    if optimize_program:
        program = optimize(program)
    return program


def make_executor(program: Program, *, options: Optional[RunOptions] = None, read_byte: Optional[ByteReader] = None) -> Executor:
    opts = options or RunOptions()
    if opts.jit:
        from .jit import JitExecutor

        return JitExecutor(program, read_byte=read_byte, trace=opts.trace)
    return Executor(program, read_byte=read_byte, trace=opts.trace)


def run_program(program: Program, *, options: Optional[RunOptions] = None, read_byte: Optional[ByteReader] = None) -> RunResult:
    executor = make_executor(program, options=options, read_byte=read_byte)
    output = executor.run()
    return RunResult(output=output, program=program, steps=executor.steps, trace=list(executor.trace))


def run_string(source: str, *, options: Optional[RunOptions] = None, read_byte: Optional[ByteReader] = None) -> RunResult:
    opts = options or RunOptions()
    program = compile_string(source, optimize_program=opts.optimize)
    result = run_program(program, options=opts, read_byte=read_byte)
    if opts.trace:
        header = [f"compiled {len(program)} instructions ({count_clears(program)} clears fused)"]
        return RunResult(output=result.output, program=program, steps=result.steps, trace=header + result.trace)
    return result


def run_file(
    path: str | Path,
    *,
    options: Optional[RunOptions] = None,
    read_byte: Optional[ByteReader] = None,
    encoding: str = "utf-8",
) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), options=options, read_byte=read_byte)
