"""Interactive collection of TODO details from the terminal."""

import logging
import queue
import signal
import sys
import threading
from typing import List, Optional, TextIO, Tuple

logger = logging.getLogger(__name__)

HINT = "(Enter an empty line to complete; Ctrl+C/Ctrl+D to cancel)"
PROMPT = "> "

# Reader hands this over on end of input.
_EOF = None


class LineCollector:
    """
    Reads detail lines until a blank line, end of input or an interrupt.

    A daemon thread performs the blocking reads and hands each line over
    through a single-slot queue, so an interrupt cancels collection even
    while a line is only half typed. On cancellation the reader thread is
    left blocked on its read; it dies with the process.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
        poll_interval: float = 0.1,
    ):
        self.stream = stream if stream is not None else sys.stdin
        self.out = out if out is not None else sys.stdout
        self.poll_interval = poll_interval
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Cancel collection; safe to call from any thread or a signal handler."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def collect(self) -> Tuple[List[str], bool]:
        """
        Collect lines until a blank line.

        Returns:
            (lines, completed). ``completed`` is False on interrupt or end of
            input, in which case ``lines`` is empty.
        """
        print(HINT, file=self.out, flush=True)

        handoff: "queue.Queue[Optional[str]]" = queue.Queue(maxsize=1)
        reader = threading.Thread(
            target=self._read_lines, args=(handoff,), name="todo-reader", daemon=True
        )
        previous_handler = self._install_interrupt_handler()
        try:
            reader.start()
            lines: List[str] = []
            while not self._cancelled.is_set():
                try:
                    line = handoff.get(timeout=self.poll_interval)
                except queue.Empty:
                    continue
                if line is _EOF:
                    self.cancel()
                    break
                if not line:
                    return lines, True
                lines.append(line)
        except KeyboardInterrupt:
            self.cancel()
        finally:
            self._restore_interrupt_handler(previous_handler)

        logger.debug("Collection cancelled")
        return [], False

    def _read_lines(self, handoff: "queue.Queue[Optional[str]]") -> None:
        while not self._cancelled.is_set():
            self.out.write(PROMPT)
            self.out.flush()
            raw = self.stream.readline()
            if not raw:
                handoff.put(_EOF)
                return
            line = raw.rstrip("\r\n")
            handoff.put(line)
            if not line:
                return

    def _install_interrupt_handler(self):
        # signal.signal only works on the main thread.
        if threading.current_thread() is not threading.main_thread():
            return None
        return signal.signal(signal.SIGINT, lambda signum, frame: self.cancel())

    def _restore_interrupt_handler(self, previous_handler) -> None:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)
