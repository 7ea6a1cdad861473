"""
Curses renderer.

Draws one frame from the read-only view model in breadboard.graph_view:

    row 0        status bar (board / prompt / picker query)
    rows 1..h-3  main panel (title line, then a scrolling list)
    row h-2      horizontal rule
    row h-1      mode line and the last status message

The renderer never mutates AppState; the only state it keeps is the scroll
offset of the main list.
"""

import curses
from typing import List

from breadboard.graph_view import (
    ROW_AFFORDANCE,
    ROW_EMPTY,
    ROW_PLACE,
    ROW_SENTINEL,
    ViewRow,
    main_panel,
    mode_text,
    selected_row_index,
    status_text,
)
from breadboard.state import AppState


def clip(text: str, width: int) -> str:
    """Cut text to width, marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def scroll_offset(current: int, selected: int, visible: int, total: int) -> int:
    """Smallest change to the scroll offset that keeps the selected row visible."""
    if visible <= 0 or total <= visible:
        return 0
    offset = min(max(current, 0), total - visible)
    if selected < offset:
        return selected
    if selected >= offset + visible:
        return selected - visible + 1
    return offset


class Renderer:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.scroll = 0
        self._init_colors()

    def _init_colors(self) -> None:
        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
                background = -1
            except curses.error:
                background = curses.COLOR_BLACK
            # 1: places (cyan), 2: affordances (white), 3: sentinel (red), 4: bars (black on white)
            curses.init_pair(1, curses.COLOR_CYAN, background)
            curses.init_pair(2, curses.COLOR_WHITE, background)
            curses.init_pair(3, curses.COLOR_RED, background)
            curses.init_pair(4, curses.COLOR_BLACK, curses.COLOR_WHITE)
            self.COL_PLACE = curses.color_pair(1) | curses.A_BOLD
            self.COL_AFFORDANCE = curses.color_pair(2)
            self.COL_SENTINEL = curses.color_pair(3)
            self.COL_BAR = curses.color_pair(4)
        else:
            self.COL_PLACE = curses.A_BOLD
            self.COL_AFFORDANCE = curses.A_NORMAL
            self.COL_SENTINEL = curses.A_UNDERLINE
            self.COL_BAR = curses.A_REVERSE

    def _row_attrs(self, row: ViewRow) -> int:
        if row.kind == ROW_PLACE:
            attrs = self.COL_PLACE
        elif row.kind == ROW_AFFORDANCE:
            attrs = self.COL_AFFORDANCE
        elif row.kind == ROW_SENTINEL:
            attrs = self.COL_SENTINEL
        elif row.kind == ROW_EMPTY:
            attrs = curses.A_DIM
        else:
            attrs = curses.A_NORMAL
        if row.selected:
            attrs |= curses.A_REVERSE
        return attrs

    def _put(self, y: int, text: str, width: int, attrs: int = curses.A_NORMAL) -> None:
        try:
            self.stdscr.addnstr(y, 0, clip(text, width), width, attrs)
        except curses.error:
            # Writing the bottom-right cell raises after the text is drawn
            pass

    def _draw_list(self, rows: List[ViewRow], top: int, height: int, width: int) -> None:
        selected = selected_row_index(rows)
        if selected is not None:
            self.scroll = scroll_offset(self.scroll, selected, height, len(rows))
        else:
            self.scroll = min(self.scroll, max(len(rows) - height, 0))

        for i, row in enumerate(rows[self.scroll:self.scroll + height]):
            self._put(top + i, row.text, width, self._row_attrs(row))

    def draw(self, state: AppState) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        if height < 4 or width < 2:
            self.stdscr.refresh()
            return
        usable = width - 1

        self._put(0, status_text(state).ljust(usable), usable, self.COL_BAR)

        title, rows = main_panel(state)
        self._put(1, f"─ {title} ".ljust(usable, "─"), usable, curses.A_BOLD)
        self._draw_list(rows, top=2, height=height - 4, width=usable)

        self.stdscr.hline(height - 2, 0, curses.ACS_HLINE, width)
        footer = mode_text(state)
        if state.status_message:
            footer += f" | {state.status_message}"
        self._put(height - 1, footer, usable, curses.A_DIM)

        self.stdscr.refresh()
