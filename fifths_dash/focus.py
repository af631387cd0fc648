"""Panel focus tracking for the dashboard."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Panel(Enum):
    """On-screen regions that can hold input focus."""
    DIAGRAM = "diagram"
    INFO = "info"
    SELECT = "select"


# Focus commands: key -> panel. Digits mirror the on-screen order.
FOCUS_KEYS: dict[str, Panel] = {
    "d": Panel.DIAGRAM,
    "1": Panel.DIAGRAM,
    "i": Panel.INFO,
    "2": Panel.INFO,
    "s": Panel.SELECT,
    "3": Panel.SELECT,
}

PANEL_TITLES: dict[Panel, str] = {
    Panel.DIAGRAM: "Main Board",
    Panel.INFO: "Menu Info",
    Panel.SELECT: "Menu Select",
}


class FocusController:
    """Holds the active panel.

    Starts on the select list so a selection exists on the first frame.
    Any panel can be reached from any other in one step; there is no
    terminal state.
    """

    def __init__(self, initial: Panel = Panel.SELECT):
        self._active = initial

    def select(self, panel: Panel) -> None:
        if panel is not self._active:
            logger.debug("focus %s -> %s", self._active.value, panel.value)
        self._active = panel

    def current(self) -> Panel:
        return self._active
