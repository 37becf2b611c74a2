#!/usr/bin/env python3
"""
icvm — Intcode virtual machine runner

Usage:
    python icvm.py <program.txt> [-i N ...] [--trace] [--dump START:END]
                                 [--disassemble] [--verbose]
    python icvm.py --expr "3,0,4,0,99" -i 42

The program file holds comma-separated integers. Output values are
printed comma-separated on stdout; diagnostics go to stderr.

Examples:
    python icvm.py day09.txt -i 1
    python icvm.py day05.txt -i 5 --trace
    python icvm.py --expr "1,0,0,0,99" --dump 0:5
    python icvm.py day02.txt --disassemble
"""

import argparse
import logging
import sys
from pathlib import Path

from intcode import __version__
from intcode.computer import Computer
from intcode.decoder import disassemble
from intcode.errors import (
    InputExhaustedError, IntcodeError, InvalidAddressError,
    InvalidInstructionError, ProgramFormatError,
)
from intcode.loader import load_program, parse_program

logger = logging.getLogger("icvm")


def parse_input_arg(value: str) -> list:
    """Parse an --input argument: one integer or a comma-separated list."""
    try:
        return [int(v) for v in value.split(',') if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer list: {value!r}")


def parse_range_arg(value: str) -> tuple:
    """Parse a START:END memory range (half-open)."""
    start, sep, end = value.partition(':')
    try:
        if not sep:
            raise ValueError(value)
        start_i, end_i = int(start), int(end)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected START:END, got {value!r}")
    if start_i < 0 or end_i < start_i:
        raise argparse.ArgumentTypeError(f"bad range {value!r}")
    return start_i, end_i


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icvm",
        description="Run an Intcode program",
    )
    parser.add_argument("program",
                        help="Program file (comma-separated integers), or program text with --expr")
    parser.add_argument("-e", "--expr", action="store_true",
                        help="Treat PROGRAM as program text instead of a file path")
    parser.add_argument("-i", "--input", action="append", type=parse_input_arg, default=[],
                        metavar="N[,N...]",
                        help="Input value(s), consumed in order (repeatable)")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction to stderr")
    parser.add_argument("--dump", type=parse_range_arg, default=None, metavar="START:END",
                        help="Print memory cells [START, END) after the run")
    parser.add_argument("--disassemble", action="store_true",
                        help="Print a static listing of the program and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print run details to stderr")
    parser.add_argument("--version", action="version",
                        version=f"icvm {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.trace else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s - %(message)s')

    inputs = [value for group in args.input for value in group]

    try:
        if args.expr:
            program = parse_program(args.program)
        else:
            program = load_program(Path(args.program))
        logger.info(f"Loaded {len(program)} words, {len(inputs)} inputs")

        if args.disassemble:
            for line in disassemble(program):
                print(line)
            return 0

        computer = Computer(program, inputs)
        steps = computer.run()
        logger.info(f"Executed {steps} instructions")

        print(','.join(str(v) for v in computer.output))

        if args.dump:
            start, end = args.dump
            print(computer.memory.dump(start, end - start))

    except FileNotFoundError:
        print(f"Error: File not found: {args.program}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading {args.program}: {e}", file=sys.stderr)
        return 1
    except ProgramFormatError as e:
        print(f"Program format error: {e}", file=sys.stderr)
        return 1
    except InvalidInstructionError as e:
        print(f"Invalid instruction: {e}", file=sys.stderr)
        return 1
    except InvalidAddressError as e:
        print(f"Invalid address: {e}", file=sys.stderr)
        return 1
    except InputExhaustedError as e:
        print(f"Input exhausted: {e}", file=sys.stderr)
        return 1
    except IntcodeError as e:
        print(f"Intcode error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
