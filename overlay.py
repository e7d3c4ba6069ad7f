import curses
from typing import List


class OverlayView:
    def __init__(self, layout):
        self.layout = layout
        self.visible = False
        self.title = ""
        self.lines: List[str] = []
        self.scroll = 0
        self.win = None

    def open(self, lines: List[str], title: str = ""):
        if not isinstance(lines, list):
            lines = list(lines or [])

        self.title = title
        self.lines = lines
        self.scroll = 0

        max_h = max(3, self.layout.table_h)
        content_h = len(lines) + 2  # box padding
        overlay_h = max(3, min(content_h, max_h))
        overlay_y = max(0, (self.layout.table_h - overlay_h) // 2)

        self.win = curses.newwin(overlay_h, self.layout.W, overlay_y, 0)
        self.win.leaveok(True)

        self.visible = True

    def close(self):
        self.visible = False
        self.title = ""
        self.lines = []
        self.scroll = 0
        self.win = None

    def _content_rows(self):
        if self.win is None:
            return 0
        h, _ = self.win.getmaxyx()
        return max(0, h - 2)

    def handle_key(self, ch):
        if not self.visible or self.win is None:
            return
        if ch == -1:
            return

        content_rows = self._content_rows()
        max_scroll = max(0, len(self.lines) - content_rows)
        half_page = max(1, content_rows // 2)

        if ch in (27, ord("q"), 10, 13, curses.KEY_ENTER, ord("?")):
            self.close()
            return

        if ch in (curses.KEY_NPAGE, 4):  # PgDn / Ctrl+D
            self.scroll = min(max_scroll, self.scroll + half_page)
        elif ch in (curses.KEY_PPAGE, 21):  # PgUp / Ctrl+U
            self.scroll = max(0, self.scroll - half_page)
        elif ch in (curses.KEY_HOME, ord("g")):
            self.scroll = 0
        elif ch in (curses.KEY_END, ord("G")):
            self.scroll = max_scroll
        elif ch in (ord("j"), curses.KEY_DOWN):
            self.scroll = min(max_scroll, self.scroll + 1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.scroll = max(0, self.scroll - 1)

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()
        if self.title:
            try:
                win.addnstr(0, 2, f" {self.title} ", max(1, w - 4))
            except curses.error:
                pass

        max_visible = max(0, h - 2)
        start = self.scroll
        end = start + max_visible
        for i, line in enumerate(self.lines[start:end]):
            try:
                win.addnstr(1 + i, 1, line, w - 2)
            except curses.error:
                pass

        win.refresh()
