import curses
from typing import Callable


class SearchPrompt:
    """Live search editor; every keystroke pushes the buffer to the view."""

    PROMPT = "Search: "

    def __init__(self, view, set_status_cb: Callable[[str, int], None]):
        self.view = view
        self._set_status = set_status_cb

        self.active = False
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
        self._previous = ""

    def start(self):
        self.active = True
        self._previous = self.view.search_text
        self.buffer = self._previous
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def _finish(self):
        self.active = False
        self.cursor = 0
        self.hscroll = 0

    def _push(self):
        self.view.set_search(self.buffer)

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13, curses.KEY_ENTER):
            self._finish()
            if self.buffer:
                self._set_status(f"{len(self.view.visible_rows())} matching rows", 3)
            return

        if ch == 27:  # Esc
            self.buffer = self._previous
            self._push()
            self._finish()
            self._set_status("Search canceled", 3)
            return

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
                self._push()
            return

        if ch == 21:  # Ctrl+U
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
            self._push()
            return

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return

        if ch == curses.KEY_HOME:
            self.cursor = 0
            return

        if ch == curses.KEY_END:
            self.cursor = len(self.buffer)
            return

        if 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
            self._push()
            return

    def draw(self, win):
        prompt = self.PROMPT
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        # adjust hscroll
        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        start = self.hscroll
        end = start + text_w
        visible = self.buffer[start:end]

        try:
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()
