from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .emitter import DEFAULT_TAPE_SIZE
from .errors import ExecutionError, StructureError
from .interpreter import TreeInterpreter
from .transpiler import BrainfuckToCTranspiler

logger = logging.getLogger(__name__)


def _read_source(path: Optional[str]) -> bytes:
    if path is None or path == "-":
        logger.debug("reading source from standard input")
        return sys.stdin.buffer.read()
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_bytes()


def _write_output(path: str, data: str) -> None:
    output_path = Path(path)
    output_path.write_text(data, encoding="utf-8")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Brainfuck to C transpiler")
    parser.add_argument(
        "source",
        nargs="?",
        help="Path to Brainfuck source file (default: read standard input)",
    )
    parser.add_argument(
        "-o",
        "--emit",
        help="Destination file for emitted C (default: print to stdout)",
    )
    parser.add_argument(
        "--tape-size",
        type=_positive_int,
        default=DEFAULT_TAPE_SIZE,
        help=f"Number of cells on the emitted tape (default: {DEFAULT_TAPE_SIZE})",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Interpret the program instead of emitting C",
    )
    parser.add_argument(
        "--input",
        help="Optional input string supplied to the program when running",
        default="",
    )
    parser.add_argument(
        "--max-steps",
        type=_positive_int,
        default=None,
        help="Step budget for --run (default: unlimited)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline phases to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    try:
        source = _read_source(args.source)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    transpiler = BrainfuckToCTranspiler(tape_size=args.tape_size)

    if args.run:
        try:
            program = transpiler.parse(source)
            interpreter = TreeInterpreter(tape_size=args.tape_size)
            output = interpreter.run(
                program,
                input_data=args.input.encode("utf-8"),
                max_steps=args.max_steps,
            )
        except StructureError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        except ExecutionError as exc:
            print(f"Error: execution failed: {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(output.decode("latin-1"))
        return 0

    try:
        c_code = transpiler.transpile(source)
    except StructureError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.emit:
        try:
            _write_output(args.emit, c_code)
        except OSError as exc:
            print(f"Error: cannot write output: {exc}", file=sys.stderr)
            return 1
        logger.debug("wrote C source to %s", args.emit)
    else:
        sys.stdout.write(c_code)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
