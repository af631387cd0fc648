"""Dashboard state, key routing and the main event loop."""

import curses
import logging
import queue
import threading
from datetime import datetime

from .config import DashboardConfig
from .events import CursesKeySource, InputEvent, InputPump, KeyPress, Tick
from .focus import FOCUS_KEYS, FocusController, Panel
from .radial import layout_points, ring_outline
from .render import Frame, init_colors, render
from .select_list import SelectListState

logger = logging.getLogger(__name__)

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")


class Dashboard:
    """Owns the focus and menu state and turns input events into redraws.

    Only the main thread touches the state. The input pump runs in the
    background and talks to the main thread through ``events`` alone.
    """

    def __init__(
        self,
        config: DashboardConfig,
        focus: FocusController | None = None,
        menu: SelectListState | None = None,
    ):
        self.config = config
        self.focus = focus if focus is not None else FocusController()
        self.menu = menu if menu is not None else SelectListState()
        self.menu.set_items(config.items, config.infos)
        self.running = True
        self.ticks = 0
        self.events: "queue.Queue[InputEvent]" = queue.Queue()

    # -- input ---------------------------------------------------------------

    def handle_event(self, event: InputEvent) -> bool:
        """Apply one event. Returns False to quit."""
        match event:
            case Tick():
                self.ticks += 1
                return True
            case KeyPress():
                return self.handle_key(event)
        raise AssertionError(f"unhandled event: {event!r}")

    def handle_key(self, key: KeyPress) -> bool:
        """Route a key press. Unknown keys are ignored. Returns False to quit."""
        if key.ctrl:
            if key.code == "c":
                # raw mode delivers Ctrl+C as a key instead of SIGINT
                raise KeyboardInterrupt
            return key.code != "q"
        if key.modifiers:
            return True

        panel = FOCUS_KEYS.get(key.code)
        if panel is not None:
            self.focus.select(panel)
        elif key.code in UP_KEYS:
            self._navigate(-1)
        elif key.code in DOWN_KEYS:
            self._navigate(1)
        return True

    def _navigate(self, direction: int):
        """Send an up (-1) or down (+1) step to the focused panel."""
        match self.focus.current():
            case Panel.SELECT:
                if direction > 0:
                    self.menu.select_next()
                else:
                    self.menu.select_previous()
                logger.debug("selected %s", self.menu.selected_item())
            case Panel.INFO:
                index = self.menu.selected
                if index is None:
                    return
                if direction > 0:
                    self.menu.scroll_down(index)
                else:
                    self.menu.scroll_up(index)
            case Panel.DIAGRAM:
                pass  # static diagram, nothing to move
            case unhandled:
                raise AssertionError(f"unhandled panel: {unhandled!r}")

    # -- output --------------------------------------------------------------

    def build_frame(self, clock: str = "") -> Frame:
        """Snapshot the current state and a freshly computed diagram layout."""
        placed = layout_points(self.config.points, self.config.rings)
        labels = tuple(
            (point.ring, label) for point, label in zip(self.config.points, placed)
        )
        outlines = tuple(
            tuple(ring_outline(ring.radius)) for ring in self.config.rings.values()
        )
        return Frame(
            active=self.focus.current(),
            items=tuple(self.menu.items),
            selected=self.menu.selected,
            info=self.menu.selected_info() or "",
            info_offset=self.menu.selected_offset(),
            labels=labels,
            outlines=outlines,
            space=self.config.layout_space,
            clock=clock,
        )

    # -- main loop -----------------------------------------------------------

    def run(self, stdscr):
        """Pump events until quit: one event, then one full redraw."""
        terminal_lock = threading.Lock()
        # cbreak leaves IXON on, and the tty would swallow Ctrl+Q as XON
        curses.raw()
        curses.curs_set(0)
        stdscr.keypad(True)
        init_colors()

        pump = InputPump(
            CursesKeySource(stdscr, terminal_lock),
            self.events,
            self.config.poll_interval,
        )
        pump.start()
        try:
            self._draw(stdscr, terminal_lock)
            while self.running:
                event = self.events.get()
                self.running = self.handle_event(event)
                if self.running:
                    self._draw(stdscr, terminal_lock)
        except KeyboardInterrupt:
            pass
        finally:
            self.running = False
            pump.stop()

    def _draw(self, stdscr, terminal_lock: threading.Lock):
        frame = self.build_frame(datetime.now().strftime("%H:%M:%S"))
        with terminal_lock:
            render(stdscr, frame)
