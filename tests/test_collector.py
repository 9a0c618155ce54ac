"""Tests for the interactive line collector."""

import io
import os
import signal
import threading

from todo_agent.collector import HINT, PROMPT, LineCollector


def _collector(stream, out):
    return LineCollector(stream=stream, out=out, poll_interval=0.01)


def _cancel_when_idle(stream, collector):
    """Deliver an interrupt once the reader is waiting for more input."""
    def _wait_and_cancel():
        stream.exhausted.wait(timeout=5)
        collector.cancel()

    thread = threading.Thread(target=_wait_and_cancel, daemon=True)
    thread.start()
    return thread


def test_blank_first_line_completes_with_no_lines(terminal_out):
    collector = _collector(io.StringIO("\n"), terminal_out)

    lines, completed = collector.collect()

    assert completed is True
    assert lines == []


def test_lines_are_collected_in_order(terminal_out):
    stream = io.StringIO("buy oat milk\nand bread\r\nbefore 6pm\n\nignored\n")
    collector = _collector(stream, terminal_out)

    lines, completed = collector.collect()

    assert completed is True
    assert lines == ["buy oat milk", "and bread", "before 6pm"]


def test_prints_hint_and_prompt_per_line(terminal_out):
    collector = _collector(io.StringIO("one\n\n"), terminal_out)

    collector.collect()

    output = terminal_out.getvalue()
    assert output.startswith(HINT + "\n")
    assert output.count(PROMPT) == 2


def test_end_of_input_cancels(terminal_out):
    collector = _collector(io.StringIO("half a thought\n"), terminal_out)

    lines, completed = collector.collect()

    assert completed is False
    assert lines == []
    assert collector.cancelled


def test_interrupt_before_any_line_cancels(make_stream, terminal_out):
    stream = make_stream()
    collector = _collector(stream, terminal_out)
    _cancel_when_idle(stream, collector)

    lines, completed = collector.collect()

    assert completed is False
    assert lines == []


def test_interrupt_after_some_lines_discards_them(make_stream, terminal_out):
    stream = make_stream("first\n", "second\n")
    collector = _collector(stream, terminal_out)
    _cancel_when_idle(stream, collector)

    lines, completed = collector.collect()

    assert completed is False
    assert lines == []


def test_sigint_cancels_while_read_is_pending(make_stream, terminal_out):
    stream = make_stream("first\n")
    collector = _collector(stream, terminal_out)

    def _interrupt_when_idle():
        stream.exhausted.wait(timeout=5)
        os.kill(os.getpid(), signal.SIGINT)

    threading.Thread(target=_interrupt_when_idle, daemon=True).start()

    lines, completed = collector.collect()

    assert completed is False
    assert lines == []
    assert collector.cancelled
    # The reader is still blocked in readline; collection returned without it.
    assert not stream.release.is_set()


def test_restores_previous_sigint_handler(terminal_out):
    def handler(signum, frame):
        pass

    previous = signal.signal(signal.SIGINT, handler)
    try:
        _collector(io.StringIO("\n"), terminal_out).collect()
        assert signal.getsignal(signal.SIGINT) is handler
    finally:
        signal.signal(signal.SIGINT, previous)
