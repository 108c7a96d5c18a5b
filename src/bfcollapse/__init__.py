from .api import RunOptions, RunResult, compile_string, run_file, run_program, run_string
from .errors import BFError, EncodingError, InputExhaustedError, StructuralError
from .executor import Executor
from .lexer import Lexer, lex
from .optimizer import optimize
from .parser import CollapsedInstruction, Instruction, emit, parse
from .state import TAPE_SIZE, TAPE_START, Tape

__all__ = [
    'RunOptions',
    'RunResult',
    'compile_string',
    'run_file',
    'run_program',
    'run_string',
    'BFError',
    'EncodingError',
    'InputExhaustedError',
    'StructuralError',
    'Executor',
    'Lexer',
    'lex',
    'optimize',
    'CollapsedInstruction',
    'Instruction',
    'emit',
    'parse',
    'TAPE_SIZE',
    'TAPE_START',
    'Tape',
]
