import sys
import logging

logger = logging.getLogger(__name__)

TAPE_SIZE = 30000

# Cells are signed 8-bit integers with two's-complement wraparound
CELL_BITS = 8
CELL_MIN = -(1 << (CELL_BITS - 1))
CELL_MAX = (1 << (CELL_BITS - 1)) - 1

# Value stored by ',' once input is exhausted
EOF_VALUE = -1

COMMANDS = frozenset('+-><.,[]')


def wrap_cell(value):
    span = 1 << CELL_BITS
    return (value - CELL_MIN) % span + CELL_MIN


class InterpreterError(Exception):
    pass


class OutOfBoundsError(InterpreterError):
    def __init__(self, direction):
        self.direction = direction
        super().__init__(f"out-of-bounds memory read ({direction})!")


class UnmatchedBracketError(InterpreterError):
    def __init__(self, bracket, position):
        self.bracket = bracket
        self.position = position
        super().__init__(f"unmatched '{bracket}'!")


class Interpreter:
    def __init__(self, program, tape_size=TAPE_SIZE, stdin=None, stdout=None, observer=None):
        if tape_size < 1:
            raise ValueError(f"tape size must be at least 1, got {tape_size}")
        self.program = bytes(program)
        self.tape = [0] * tape_size
        self.tape_size = tape_size
        self.ip = 0
        self.mp = 0
        self.step_count = 0
        # None means the process streams, looked up when first used
        self.stdin = stdin
        self.stdout = stdout
        self.observer = observer
        logger.debug("loaded %d bytes of program, tape of %d cells", len(self.program), tape_size)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self):
        self.tape = []
        self.program = b''

    @property
    def cell(self):
        return self.tape[self.mp]

    @property
    def finished(self):
        return self.ip >= len(self.program)

    def find_match(self, position):
        """
        Scan from the bracket at `position` to its partner and return the
        partner's index. '[' scans forward, ']' scans backward; only
        bracket bytes move the depth counter.
        """
        bracket = chr(self.program[position])
        if bracket == '[':
            step, opener = 1, '['
        elif bracket == ']':
            step, opener = -1, ']'
        else:
            raise ValueError(f"no bracket at position {position}: {bracket!r}")

        depth = 0
        pos = position
        while 0 <= pos < len(self.program):
            c = chr(self.program[pos])
            if c == opener:
                depth += 1
            elif c in '[]':
                depth -= 1
            if depth == 0:
                return pos
            pos += step

        raise UnmatchedBracketError(bracket, position)

    def step(self):
        if self.finished:
            return False

        op = chr(self.program[self.ip])

        if op == '+':
            self.tape[self.mp] = wrap_cell(self.tape[self.mp] + 1)
        elif op == '-':
            self.tape[self.mp] = wrap_cell(self.tape[self.mp] - 1)
        elif op == '>':
            if self.mp + 1 >= self.tape_size:
                raise OutOfBoundsError('right')
            self.mp += 1
        elif op == '<':
            if self.mp == 0:
                raise OutOfBoundsError('left')
            self.mp -= 1
        elif op == '.':
            out = self.stdout if self.stdout is not None else sys.stdout.buffer
            out.write(bytes([self.tape[self.mp] & 0xFF]))
            out.flush()
        elif op == ',':
            src = self.stdin if self.stdin is not None else sys.stdin.buffer
            data = src.read(1)
            if data:
                self.tape[self.mp] = wrap_cell(data[0])
            else:
                self.tape[self.mp] = EOF_VALUE
        elif op == '[':
            if self.tape[self.mp] == 0:
                self.ip = self.find_match(self.ip)
        elif op == ']':
            if self.tape[self.mp] != 0:
                self.ip = self.find_match(self.ip)
        # Anything else is a comment

        self.ip += 1
        self.step_count += 1
        if self.observer is not None:
            self.observer(self)
        return True

    def run(self):
        while self.step():
            pass
        logger.debug("halted after %d steps at ip=%d", self.step_count, self.ip)
