import curses
import threading
import time


class LoadState:
    def __init__(self):
        self.loaded = False
        self.aborted = False
        self.rows = None
        self.error = None


class LoadingScreen:
    SPINNER = "|/-\\"
    FRAME_SECONDS = 0.08

    def __init__(self, stdscr, loader_fn, load_state: LoadState, label: str = ""):
        self.stdscr = stdscr
        self.loader_fn = loader_fn
        self.state = load_state
        self.label = label
        self.frame = 0
        self._thread = None

    def start_loader(self):
        self._thread = threading.Thread(target=self._load, daemon=True)
        self._thread.start()
        return self._thread

    def _load(self):
        if self.state.aborted:
            return
        try:
            rows = self.loader_fn()
        except Exception as exc:
            self.state.error = str(exc) or exc.__class__.__name__
            self.state.aborted = True
            return
        if not self.state.aborted:
            self.state.rows = rows
            self.state.loaded = True

    def run(self):
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.nodelay(True)
        self.start_loader()
        while not self.state.aborted and not self.state.loaded:
            self.draw()
            ch = self.stdscr.getch()
            if ch == 24:  # Ctrl+X
                self.state.aborted = True
                break
            time.sleep(self.FRAME_SECONDS)
        self.stdscr.nodelay(False)

    def draw(self):
        self.stdscr.erase()
        h, w = self.stdscr.getmaxyx()
        glyph = self.SPINNER[self.frame % len(self.SPINNER)]
        self.frame += 1
        text = f"{glyph} Loading {self.label}".rstrip()
        hint = "Ctrl+X to abort"
        try:
            self.stdscr.addnstr(h // 2, max(0, (w - len(text)) // 2), text, w - 1)
            self.stdscr.addnstr(
                h // 2 + 1, max(0, (w - len(hint)) // 2), hint, w - 1, curses.A_DIM
            )
        except curses.error:
            pass
        self.stdscr.refresh()
