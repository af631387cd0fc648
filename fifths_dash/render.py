"""Curses rendering of a dashboard frame.

The renderer gets a complete, immutable Frame every time and redraws the
whole screen from it. It keeps no state between frames.
"""

import curses
import textwrap
from dataclasses import dataclass

from .focus import PANEL_TITLES, Panel
from .radial import LayoutSpace, PlacedLabel, to_cell

MIN_ROWS = 10
MIN_COLS = 40

HINT = "[d/i/s] focus  [j/k] navigate  [Ctrl+Q] quit"


# ---------------------------------------------------------------------------
# Color pairs
# ---------------------------------------------------------------------------

class Colors:
    DEFAULT = 0
    BORDER = 1
    FOCUS = 2
    HIGHLIGHT = 3
    DIM = 4
    RING = 5
    MAJOR = 6
    MINOR = 7
    SIGNATURE = 8
    STATUS = 9


RING_COLORS = {
    "major": Colors.MAJOR,
    "minor": Colors.MINOR,
    "signature": Colors.SIGNATURE,
}


def init_colors():
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(Colors.BORDER, curses.COLOR_BLUE, -1)
    curses.init_pair(Colors.FOCUS, curses.COLOR_CYAN, -1)
    curses.init_pair(Colors.HIGHLIGHT, curses.COLOR_YELLOW, -1)
    curses.init_pair(Colors.DIM, curses.COLOR_WHITE, -1)
    curses.init_pair(Colors.RING, curses.COLOR_BLUE, -1)
    curses.init_pair(Colors.MAJOR, curses.COLOR_GREEN, -1)
    curses.init_pair(Colors.MINOR, curses.COLOR_MAGENTA, -1)
    curses.init_pair(Colors.SIGNATURE, curses.COLOR_YELLOW, -1)
    curses.init_pair(Colors.STATUS, curses.COLOR_BLACK, curses.COLOR_CYAN)


# ---------------------------------------------------------------------------
# Frame snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Frame:
    """Everything one redraw needs."""
    active: Panel
    items: tuple[str, ...]
    selected: int | None
    info: str
    info_offset: int
    labels: tuple[tuple[str, PlacedLabel], ...]  # (ring name, placed label)
    outlines: tuple[tuple[tuple[float, float], ...], ...]
    space: LayoutSpace
    clock: str = ""


@dataclass(frozen=True)
class Region:
    y: int
    x: int
    height: int
    width: int


# ---------------------------------------------------------------------------
# Safe drawing helpers
# ---------------------------------------------------------------------------

def safe_addstr(win, y: int, x: int, text: str, attr: int = 0, max_x: int = 0):
    """Write text to window, clipping to max_x if provided."""
    try:
        max_y_win, max_x_win = win.getmaxyx()
        if y < 0 or y >= max_y_win or x < 0 or x >= max_x_win:
            return
        limit = (max_x if max_x > 0 else max_x_win) - x
        if limit <= 0:
            return
        win.addnstr(y, x, text, limit, attr)
    except curses.error:
        pass


def draw_box(win, region: Region, title: str, focused: bool):
    """Draw a bordered box with a title; focused boxes get a bright bold border."""
    if region.height < 2 or region.width < 2:
        return
    attr = (curses.color_pair(Colors.FOCUS) | curses.A_BOLD if focused
            else curses.color_pair(Colors.BORDER))
    top, left = region.y, region.x
    bottom = region.y + region.height - 1
    right = region.x + region.width - 1
    try:
        win.attron(attr)
        win.hline(top, left + 1, curses.ACS_HLINE, region.width - 2)
        win.hline(bottom, left + 1, curses.ACS_HLINE, region.width - 2)
        win.vline(top + 1, left, curses.ACS_VLINE, region.height - 2)
        win.vline(top + 1, right, curses.ACS_VLINE, region.height - 2)
        win.addch(top, left, curses.ACS_ULCORNER)
        win.addch(top, right, curses.ACS_URCORNER)
        win.addch(bottom, left, curses.ACS_LLCORNER)
        win.addch(bottom, right, curses.ACS_LRCORNER)
    except curses.error:
        pass
    finally:
        win.attroff(attr)
    safe_addstr(win, top, left + 2, f" {title} ", attr, right)


def inner(region: Region) -> Region:
    """The drawable area inside a region's border."""
    return Region(region.y + 1, region.x + 1,
                  max(0, region.height - 2), max(0, region.width - 2))


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def split_regions(max_y: int, max_x: int) -> dict[Panel, Region]:
    """Split the screen: diagram on the left 60%, info over select on the right.

    A one-cell margin surrounds everything and the last row is kept free
    for the status line.
    """
    top, left = 1, 1
    height = max(0, max_y - 3)
    width = max(0, max_x - 2)
    left_width = width * 60 // 100
    right_width = width - left_width
    info_height = height * 30 // 100
    return {
        Panel.DIAGRAM: Region(top, left, height, left_width),
        Panel.INFO: Region(top, left + left_width, info_height, right_width),
        Panel.SELECT: Region(top + info_height, left + left_width,
                             height - info_height, right_width),
    }


def wrap_info(text: str, width: int) -> list[str]:
    """Word-wrap info text, keeping its own line breaks."""
    if width <= 0:
        return []
    lines: list[str] = []
    for paragraph in text.splitlines():
        lines.extend(textwrap.wrap(paragraph, width) or [""])
    return lines


# ---------------------------------------------------------------------------
# Panels
# ---------------------------------------------------------------------------

def render_diagram(win, region: Region, frame: Frame):
    area = inner(region)
    if area.height < 1 or area.width < 1:
        return
    right = area.x + area.width

    ring_attr = curses.color_pair(Colors.RING)
    for outline in frame.outlines:
        for x, y in outline:
            cell = to_cell(x, y, frame.space, area.width, area.height)
            if cell is not None:
                safe_addstr(win, area.y + cell[0], area.x + cell[1], "·",
                            ring_attr, right)

    for ring, placed in frame.labels:
        cell = to_cell(placed.x, placed.y, frame.space, area.width, area.height)
        if cell is None:
            continue
        attr = curses.color_pair(RING_COLORS.get(ring, Colors.DEFAULT))
        if ring == "major":
            attr |= curses.A_BOLD
        safe_addstr(win, area.y + cell[0], area.x + cell[1], placed.label, attr, right)


def render_info(win, region: Region, frame: Frame):
    area = inner(region)
    if area.height < 1 or area.width < 1:
        return
    right = area.x + area.width
    lines = wrap_info(frame.info, area.width)
    if not lines:
        safe_addstr(win, area.y, area.x, "(no info)",
                    curses.color_pair(Colors.DIM), right)
        return

    offset = frame.info_offset
    visible = lines[offset: offset + area.height]
    if not visible:
        safe_addstr(win, area.y, area.x, "(end of text)",
                    curses.color_pair(Colors.DIM), right)
    for i, line in enumerate(visible):
        safe_addstr(win, area.y + i, area.x, line, 0, right)

    # Scroll position on the bottom border when the text doesn't fit
    if len(lines) > area.height:
        shown = min(offset + 1, len(lines))
        indicator = f" {shown}/{len(lines)} "
        safe_addstr(win, region.y + region.height - 1,
                    right - len(indicator), indicator,
                    curses.color_pair(Colors.DIM), right)


def render_select(win, region: Region, frame: Frame):
    area = inner(region)
    if area.height < 1 or area.width < 1:
        return
    right = area.x + area.width
    if not frame.items:
        safe_addstr(win, area.y, area.x, "(no items)",
                    curses.color_pair(Colors.DIM), right)
        return

    # Keep the selected row on screen
    start = 0
    if frame.selected is not None and frame.selected >= area.height:
        start = frame.selected - area.height + 1

    for row, i in enumerate(range(start, min(len(frame.items), start + area.height))):
        if i == frame.selected:
            text = f"> {frame.items[i]}"
            attr = curses.color_pair(Colors.HIGHLIGHT) | curses.A_BOLD
        else:
            text = f"  {frame.items[i]}"
            attr = 0
        safe_addstr(win, area.y + row, area.x, text, attr, right)


def render_status(win, max_y: int, max_x: int, frame: Frame):
    status_y = max_y - 1
    attr = curses.color_pair(Colors.STATUS)
    safe_addstr(win, status_y, 0, " " * max_x, attr)
    focus = f"Focus: {PANEL_TITLES[frame.active]}"
    safe_addstr(win, status_y, 1, f"{focus}  ·  {HINT}", attr)
    if frame.clock:
        safe_addstr(win, status_y, max_x - len(frame.clock) - 2, frame.clock, attr)


def render(stdscr, frame: Frame):
    """Redraw the whole screen from ``frame``."""
    stdscr.erase()
    max_y, max_x = stdscr.getmaxyx()

    if max_y < MIN_ROWS or max_x < MIN_COLS:
        safe_addstr(stdscr, 0, 0,
                    f"Terminal too small! Need {MIN_COLS}x{MIN_ROWS} minimum.")
        stdscr.refresh()
        return

    regions = split_regions(max_y, max_x)
    for panel, region in regions.items():
        draw_box(stdscr, region, PANEL_TITLES[panel], panel is frame.active)

    render_diagram(stdscr, regions[Panel.DIAGRAM], frame)
    render_info(stdscr, regions[Panel.INFO], frame)
    render_select(stdscr, regions[Panel.SELECT], frame)
    render_status(stdscr, max_y, max_x, frame)

    stdscr.refresh()
