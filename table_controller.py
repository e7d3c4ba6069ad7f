import curses
import logging

logger = logging.getLogger(__name__)

HELP_LINES = [
    "j / k, Down / Up    move between rows",
    "h / l, Left / Right move between columns",
    "s                   sort by column (asc, desc, off)",
    "/                   search",
    "Esc                 clear search",
    "n / p, PgDn / PgUp  next / previous page",
    "g / G               first / last page",
    "r                   refresh rows",
    "Enter               open row",
    "?                   this help",
    "q, Ctrl+X           quit",
]


class TableController:
    """Routes table-focus keys to the view, pager and grid."""

    def __init__(self, view, grid, paginator, set_status, search_prompt=None, open_overlay=None):
        self.view = view
        self.grid = grid
        self.paginator = paginator
        self._set_status = set_status
        self.search_prompt = search_prompt
        self.open_overlay = open_overlay

        self._last_query = (view.search_text, view.sort_state)
        self.view.subscribe(self._on_view_change)
        self.paginator.update_total_rows(len(self.view.visible_rows()))

    # ---------- view sync ----------
    def _on_view_change(self, view):
        query = (view.search_text, view.sort_state)
        self.paginator.update_total_rows(len(view.visible_rows()))
        if query != self._last_query:
            self._last_query = query
            self.paginator.first_page()
            self.grid.curr_row = 0
            self.grid.row_offset = 0
        self._clamp_cursor()

    def _clamp_cursor(self):
        on_page = max(0, self.paginator.page_end - self.paginator.page_start)
        self.grid.clamp(on_page, len(self.view.columns))

    def page_rows(self):
        return self.paginator.page_slice(self.view.visible_rows())

    def current_row(self):
        rows = self.page_rows()
        if not rows:
            return None
        idx = max(0, min(self.grid.curr_row, len(rows) - 1))
        return rows[idx]

    def current_column(self):
        if not self.view.columns:
            return None
        idx = max(0, min(self.grid.curr_col, len(self.view.columns) - 1))
        return self.view.columns[idx]

    # ---------- commands ----------
    def sort_current_column(self):
        col = self.current_column()
        if col is None:
            return
        if not col.sortable:
            self._set_status(f"{col.label} is not sortable", 3)
            return
        state = self.view.press_header(col.id)
        if state is None:
            self._set_status("Sort cleared", 2)
        else:
            self._set_status(f"Sorted by {col.label} {state.direction}", 2)

    def _move_page(self, fn):
        before = self.paginator.page_index
        fn()
        if self.paginator.page_index != before:
            self.grid.curr_row = 0
            self.grid.row_offset = 0

    def run_action(self, action, row):
        try:
            self.view.press_action(action, row)
        except Exception as exc:
            logger.exception("Row action %r failed", action.label)
            self._set_status(f"{action.label} failed: {exc}", 4)

    def press_current_row(self):
        row = self.current_row()
        if row is None:
            return
        try:
            handled = self.view.press_row(row)
        except Exception as exc:
            logger.exception("Row press failed")
            self._set_status(f"Open failed: {exc}", 4)
            return
        if not handled and self.view.actions:
            self.run_action(self.view.actions[0], row)

    def refresh(self):
        if self.view.refreshing:
            self._set_status("Refresh already running", 2)
            return
        try:
            started = self.view.refresh()
        except Exception as exc:
            logger.exception("Refresh failed to start")
            self.view.set_refreshing(False)
            self._set_status(f"Refresh failed: {exc}", 4)
            return
        if not started:
            self._set_status("Nothing to refresh", 2)

    # ---------- keys ----------
    def handle_key(self, ch):
        on_page = max(0, self.paginator.page_end - self.paginator.page_start)

        if ch in (ord("j"), curses.KEY_DOWN):
            self.grid.move_down(on_page)
        elif ch in (ord("k"), curses.KEY_UP):
            self.grid.move_up()
        elif ch in (ord("h"), curses.KEY_LEFT):
            self.grid.move_left()
        elif ch in (ord("l"), curses.KEY_RIGHT):
            self.grid.move_right(len(self.view.columns))
        elif ch == ord("s"):
            self.sort_current_column()
        elif ch == ord("/"):
            if not self.view.searchable:
                self._set_status("No searchable fields", 3)
            elif self.search_prompt is not None:
                self.search_prompt.start()
        elif ch == 27:
            if self.view.search_text:
                self.view.clear_search()
                self._set_status("Search cleared", 2)
        elif ch in (ord("n"), curses.KEY_NPAGE):
            self._move_page(self.paginator.next_page)
        elif ch in (ord("p"), curses.KEY_PPAGE):
            self._move_page(self.paginator.prev_page)
        elif ch == ord("g"):
            self._move_page(self.paginator.first_page)
        elif ch == ord("G"):
            self._move_page(self.paginator.last_page)
        elif ch == ord("r"):
            self.refresh()
        elif ch in (10, 13, curses.KEY_ENTER):
            self.press_current_row()
        elif ch == ord("?"):
            if self.open_overlay is not None:
                self.open_overlay(HELP_LINES + self._action_help(), "Help")
        elif 32 <= ch <= 126:
            action = self.view.action_for_key(chr(ch))
            row = self.current_row()
            if action is not None and row is not None:
                self.run_action(action, row)

    def _action_help(self):
        lines = []
        for action in self.view.actions:
            if action.key:
                lines.append(f"{action.key.ljust(20)}{action.label}")
        return lines
