#!/usr/bin/env python3
import os
import sys
import stat
import logging
import argparse

from bf_interpreter import Interpreter, InterpreterError, TAPE_SIZE
from debugger import Tracer, TRACE_DELAY

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAULT = 2


class ProgramLoadError(Exception):
    pass


class ProgramNotFoundError(ProgramLoadError):
    pass


class UsageParser(argparse.ArgumentParser):
    # Bad arguments exit 1, runtime faults keep 2
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def load_program(path):
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise ProgramNotFoundError(f"file '{path}' does not exist!") from e

    with f:
        st = os.fstat(f.fileno())
        code = f.read()

    # Pipes and /proc files report no meaningful size
    if stat.S_ISREG(st.st_mode) and len(code) < st.st_size:
        raise ProgramLoadError(f"short read on '{path}': got {len(code)} of {st.st_size} bytes")
    logger.debug("read %d bytes from %s", len(code), path)
    return code


def run_file(path, tape_size=TAPE_SIZE, stdin=None, stdout=None, observer=None):
    code = load_program(path)
    with Interpreter(code, tape_size=tape_size, stdin=stdin, stdout=stdout, observer=observer) as interp:
        interp.run()
        return interp.step_count


def positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def build_parser():
    parser = UsageParser(description="Run a tape-language program")
    parser.add_argument('file', help="program source file")
    parser.add_argument('--tape-size', type=positive_int, default=TAPE_SIZE,
                        help=f"number of tape cells (default: {TAPE_SIZE})")
    parser.add_argument('--debug', action='store_true',
                        help="print interpreter state after every step")
    parser.add_argument('--delay', type=float, default=TRACE_DELAY,
                        help=f"seconds to pause after each traced step (default: {TRACE_DELAY})")
    parser.add_argument('--color', action='store_true', help="colorize trace output")
    parser.add_argument('-v', '--verbose', action='store_true', help="debug logging on stderr")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    observer = Tracer(delay=args.delay, color=args.color) if args.debug else None

    try:
        steps = run_file(args.file, tape_size=args.tape_size, observer=observer)
    except ProgramLoadError as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE
    except InterpreterError as e:
        print(e, file=sys.stderr)
        return EXIT_FAULT

    logger.debug("finished in %d steps", steps)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
