"""Input events and the background thread that produces them.

The pump thread waits on the terminal with a bounded timeout and pushes
one KeyPress per key, or a Tick when the timeout passes with no key. The
main loop blocks on the queue, so it redraws at least once per tick even
when nobody is typing.
"""

import curses
import logging
import queue
import select
import sys
import threading
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

CTRL = "ctrl"

# Special keys curses reports as integer codes
_NAMED_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_RESIZE: "resize",
    9: "tab",
    10: "enter",
    13: "enter",
    27: "esc",
    127: "backspace",
}


@dataclass(frozen=True)
class KeyPress:
    """A single key, e.g. KeyPress("q", frozenset({CTRL})) for Ctrl+Q."""
    code: str
    modifiers: frozenset[str] = field(default_factory=frozenset)

    @property
    def ctrl(self) -> bool:
        return CTRL in self.modifiers


@dataclass(frozen=True)
class Tick:
    """Emitted when a poll window passes without input."""


InputEvent = KeyPress | Tick


def decode_key(ch: int) -> KeyPress | None:
    """Turn a curses getch() code into a KeyPress. None for codes we can't name."""
    if ch in _NAMED_KEYS:
        return KeyPress(_NAMED_KEYS[ch])
    if 1 <= ch <= 26:
        # Ctrl+letter arrives as the letter's position in the alphabet
        return KeyPress(chr(ch + 96), frozenset({CTRL}))
    if 32 <= ch <= 126:
        return KeyPress(chr(ch))
    return None


class KeySource(Protocol):
    def poll(self, timeout: float) -> list[KeyPress]:
        """Wait up to ``timeout`` seconds; return the keys read (maybe none)."""
        ...


class CursesKeySource:
    """Reads keys from a curses window.

    Waits on stdin with select() so the terminal lock is only held while
    keys are actually drained, never for the whole poll window.
    """

    def __init__(self, win, terminal_lock: threading.Lock, stream=None):
        self.win = win
        self.terminal_lock = terminal_lock
        self.stream = stream if stream is not None else sys.stdin

    def poll(self, timeout: float) -> list[KeyPress]:
        readable, _, _ = select.select([self.stream], [], [], timeout)
        if not readable:
            return []
        keys = []
        with self.terminal_lock:
            self.win.nodelay(True)
            while True:
                ch = self.win.getch()
                if ch == -1:
                    break
                key = decode_key(ch)
                if key is not None:
                    keys.append(key)
        return keys


class InputPump:
    """Daemon thread feeding a queue with KeyPress and Tick events."""

    def __init__(
        self,
        source: KeySource,
        events: "queue.Queue[InputEvent]",
        poll_interval: float,
    ):
        self.source = source
        self.events = events
        self.poll_interval = poll_interval
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="input-pump", daemon=True)

    def start(self) -> None:
        logger.debug("input pump starting (poll %.3fs)", self.poll_interval)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Ask the thread to finish and wait for it (at most one poll window by default)."""
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(self.poll_interval * 2 if timeout is None else timeout)
        logger.debug("input pump stopped")

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.is_set():
            keys = self.source.poll(self.poll_interval)
            if self._stop.is_set():
                break
            if not keys:
                self.events.put(Tick())
                continue
            for key in keys:
                self.events.put(key)
