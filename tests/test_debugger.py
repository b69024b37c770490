"""Step tracer tests."""

import io
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bf_interpreter import Interpreter
from debugger import Tracer, Colors, render_window, TRACE_WIDTH


class TestRenderWindow:
    def test_fixed_width(self):
        assert len(render_window(b'+' * 100, 50)) == TRACE_WIDTH
        assert len(render_window(b'', 0)) == TRACE_WIDTH

    def test_empty_program_is_all_edges(self):
        assert render_window(b'', 0) == ':' * 30

    def test_centered_on_ip(self):
        window = render_window(b'+-><', 1)
        assert window == ':' * 14 + '+-><' + ':' * 12
        assert window[15] == '-'

    def test_comments_render_as_spaces(self):
        window = render_window(b'a+b', 1)
        assert window[14:17] == ' + '

    def test_all_commands_shown(self):
        code = b'+-<>[],.'
        window = render_window(code, 0)
        assert window[15:23] == '+-<>[],.'

    def test_custom_width(self):
        assert render_window(b'[]', 0, width=4) == '::[]'


class TestTracer:
    def _interp(self, code, tracer):
        return Interpreter(code, stdin=io.BytesIO(), stdout=io.BytesIO(), observer=tracer)

    def test_format(self):
        stream = io.StringIO()
        tracer = Tracer(stream=stream, delay=0)
        interp = self._interp(b'++>', tracer)
        interp.step()
        lines = stream.getvalue().split('\n')
        assert lines[0] == "mem: [0, 1], exec: [1]"
        assert lines[1] == '{' + ':' * 14 + '++>' + ':' * 13 + '}'
        assert lines[2] == ' ' + ' ' * 15 + '^'

    def test_one_entry_per_step(self):
        stream = io.StringIO()
        interp = self._interp(b'+[-]', Tracer(stream=stream, delay=0))
        interp.run()
        assert stream.getvalue().count('mem: ') == 4

    def test_does_not_change_state(self):
        plain = Interpreter(b'+++[>+<-]', stdin=io.BytesIO(), stdout=io.BytesIO())
        plain.run()
        traced = self._interp(b'+++[>+<-]', Tracer(stream=io.StringIO(), delay=0))
        traced.run()
        assert traced.tape[:2] == plain.tape[:2]
        assert (traced.ip, traced.mp) == (plain.ip, plain.mp)

    def test_color(self):
        stream = io.StringIO()
        interp = self._interp(b'+', Tracer(stream=stream, delay=0, color=True))
        interp.step()
        assert Colors.BOLD in stream.getvalue()
        assert Colors.GREEN + '^' in stream.getvalue()

    def test_delay(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr('debugger.time.sleep', sleeps.append)
        interp = self._interp(b'++', Tracer(stream=io.StringIO(), delay=0.5))
        interp.run()
        assert sleeps == [0.5, 0.5]
