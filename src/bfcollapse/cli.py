import argparse
import sys
import time
from typing import List, Optional

from .api import RunOptions, make_executor
from .errors import BFError
from .lexer import lex
from .optimizer import count_clears, optimize
from .parser import emit, listing, parse


def read_source(path: str) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _stage(timings, name, start):
    timings.append((name, (time.time() - start) * 1000))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfcollapse",
        description="Run a Brainfuck program through the collapsing interpreter.",
    )
    parser.add_argument("file", help="Program source file")
    parser.add_argument("--no-optimize", action="store_true", help="Skip clear-loop fusion")
    parser.add_argument("--jit", action="store_true", help="Execute with the numba batch loop")
    parser.add_argument("--emit", action="store_true", help="Print the optimized program as source and exit")
    parser.add_argument("--ir", action="store_true", help="Print the instruction listing and exit")
    parser.add_argument("--trace", action="store_true", help="Print an execution trace to stderr")
    parser.add_argument("--timing", action="store_true", help="Print per-stage timings to stderr")
    args = parser.parse_args(argv)

    options = RunOptions(optimize=not args.no_optimize, jit=args.jit, trace=args.trace)
    timings = []

    start = time.time()
    try:
        source = read_source(args.file)
    except FileNotFoundError:
        print(f"Couldn't find file: {args.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Couldn't read {args.file}: {e}", file=sys.stderr)
        return 1
    _stage(timings, "read", start)

    try:
        start = time.time()
        program = parse(lex(source))
        _stage(timings, "parse", start)

        if options.optimize:
            start = time.time()
            program = optimize(program)
            _stage(timings, "optimize", start)

        if args.emit or args.ir:
            print(emit(program) if args.emit else listing(program))
            return 0

        executor = make_executor(program, options=options)
        start = time.time()
        output = executor.run()
        _stage(timings, "execute", start)
    except BFError as e:
        print(str(e), file=sys.stderr)
        return 1

    print(output)

    if args.trace:
        for line in executor.trace:
            print(line, file=sys.stderr)
    if args.timing:
        print(f"{len(program)} instructions, {count_clears(program)} clears, {executor.steps} steps", file=sys.stderr)
        for name, ms in timings:
            print(f"{name} took {ms:.2f} ms", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
