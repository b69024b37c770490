#!/usr/bin/env python3
import sys
import time

from bf_interpreter import COMMANDS

TRACE_WIDTH = 30
TRACE_DELAY = 1.0

class Colors:
    GREEN = '\033[92m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

def render_window(program, ip, width=TRACE_WIDTH):
    """
    Instruction stream around ip, one character per position.
    Positions outside the program show ':', non-command bytes show ' '.
    """
    half = width // 2
    chars = []
    for c in range(width):
        pos = ip + (c - half)
        if pos < 0 or pos >= len(program):
            chars.append(':')
            continue
        instr = chr(program[pos])
        chars.append(instr if instr in COMMANDS else ' ')
    return ''.join(chars)

class Tracer:
    def __init__(self, stream=None, delay=TRACE_DELAY, color=False, width=TRACE_WIDTH):
        self.stream = stream if stream is not None else sys.stderr
        self.delay = delay
        self.color = color
        self.width = width

    def format_state(self, interp):
        header = f"mem: [{interp.mp}, {interp.cell}], exec: [{interp.ip}]"
        window = render_window(interp.program, interp.ip, self.width)
        caret = ' ' * (self.width // 2) + '^'
        if self.color:
            header = f"{Colors.BOLD}{header}{Colors.ENDC}"
            caret = ' ' * (self.width // 2) + f"{Colors.GREEN}^{Colors.ENDC}"
        return f"{header}\n{{{window}}}\n {caret}\n"

    def __call__(self, interp):
        self.stream.write(self.format_state(interp))
        self.stream.flush()
        if self.delay > 0:
            time.sleep(self.delay)
