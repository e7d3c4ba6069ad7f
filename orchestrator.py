import curses
import logging
import threading
import time

from grid_pane import GridPane
from overlay import OverlayView
from pagination import Paginator
from row_actions import (
    ClipboardError,
    build_default_actions,
    copy_to_clipboard,
    details_lines,
    row_to_json,
)
from screen_layout import ScreenLayout
from search_prompt import SearchPrompt
from status_bar import render_status
from table_controller import TableController
from table_view import TableView

logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(self, stdscr, app_state, poller=None):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.layout = ScreenLayout(stdscr)
        self.overlay = OverlayView(self.layout)
        self._init_state(app_state, poller)

    def _init_state(self, app_state, poller):
        self.state = app_state
        self.config = app_state.config
        self.poller = poller
        self.grid = GridPane()

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        # ---- background refresh ----
        self._refresh_lock = threading.Lock()
        self._refresh_result = None
        self._refresh_error = None
        self._refresh_done = False

        actions = build_default_actions(self._show_details, self._copy_row)
        self.view = TableView(
            app_state.rows,
            app_state.columns,
            actions=actions,
            search_fields=app_state.search_fields,
            empty_message=self.config.get("EMPTY_MESSAGE", "No data available"),
            on_row_press=self._show_details,
            on_refresh=self._start_refresh if app_state.can_reload() else None,
        )

        self.paginator = Paginator(
            total_rows=len(app_state.rows),
            page_size=self.config.get("PAGE_SIZE", 50),
        )
        self.search_prompt = SearchPrompt(self.view, self._set_status)
        self.controller = TableController(
            self.view,
            self.grid,
            self.paginator,
            self._set_status,
            search_prompt=self.search_prompt,
            open_overlay=self._open_overlay,
        )
        if poller is not None and not app_state.rows:
            self.view.set_loading(True)
        self.exit_requested = False

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _open_overlay(self, lines, title=""):
        self.overlay.open(lines, title)

    def _show_details(self, row):
        position = self.paginator.page_start + self.grid.curr_row
        key = self.view.row_key(row, position)
        self._open_overlay(details_lines(row), title=f"Row {key}")

    def _copy_row(self, row):
        try:
            copy_to_clipboard(
                row_to_json(row), self.config.get("CLIPBOARD_INTERFACE_COMMAND")
            )
        except ClipboardError as exc:
            logger.warning("Copy failed: %s", exc)
            self._set_status(str(exc), 4)
            return
        self._set_status("Row copied", 2)

    # ---------------- refresh & polling ----------------

    def _start_refresh(self):
        t = threading.Thread(target=self._refresh_worker, daemon=True)
        t.start()
        return t

    def _refresh_worker(self):
        try:
            rows = self.state.reload()
        except Exception as exc:
            logger.warning("Refresh failed: %s", exc)
            with self._refresh_lock:
                self._refresh_error = str(exc) or exc.__class__.__name__
                self._refresh_done = True
            return
        with self._refresh_lock:
            self._refresh_result = rows
            self._refresh_done = True

    def _apply_rows(self, rows):
        self.state.replace_rows(rows)
        self.view.columns = list(self.state.columns)
        if not self.view.search_fields and self.state.search_fields:
            self.view.search_fields = tuple(self.state.search_fields)
            self.view.searchable = True
        self.view.set_rows(self.state.rows)

    def drain_background(self):
        with self._refresh_lock:
            done = self._refresh_done
            rows = self._refresh_result
            error = self._refresh_error
            self._refresh_done = False
            self._refresh_result = None
            self._refresh_error = None
        if done:
            if error is None:
                self._apply_rows(rows)
                self._set_status(f"Refreshed {len(self.view.rows)} rows", 2)
            else:
                self._set_status(f"Refresh failed: {error}", 4)
            self.view.set_refreshing(False)

        if self.poller is not None:
            polled = self.poller.take_latest()
            if polled is not None:
                self._apply_rows(polled)
            if self.view.loading and (polled is not None or self.poller.last_error):
                self.view.set_loading(False)

    # ---------------- UI ----------------

    def _status_context(self):
        sort = self.view.sort_state
        return {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "mode": "SEARCH" if self.search_prompt.active else "TABLE",
            "file_path": self.state.file_path,
            "search_text": self.view.search_text,
            "sort_key": sort.key if sort else None,
            "sort_direction": sort.direction if sort else None,
            "page_index": self.paginator.page_index + 1,
            "page_total": self.paginator.page_count,
            "page_start": self.paginator.page_start,
            "page_end": self.paginator.page_end,
            "visible_rows": self.paginator.total_rows,
            "total_rows": len(self.view.rows),
            "poll_error": self.poller.last_error if self.poller else None,
        }

    def redraw(self):
        try:
            curses.curs_set(1 if self.search_prompt.active else 0)
        except curses.error:
            pass

        if not self.overlay.visible:
            table = self.view.render(self.paginator.page_start, self.paginator.page_end)
            self.grid.draw(self.layout.table_win, table)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        try:
            sw.addnstr(0, 0, render_status(self._status_context(), w), w - 1)
        except curses.error:
            pass
        sw.refresh()

        pw = self.layout.prompt_win
        pw.erase()
        if self.search_prompt.active:
            self.search_prompt.draw(pw)
        else:
            pw.refresh()

        if self.overlay.visible:
            self.overlay.draw()

    # ---------------- main loop ----------------

    def handle_key(self, ch):
        if ch in (3, 24):
            self.exit_requested = True
            return

        if self.overlay.visible:
            self.overlay.handle_key(ch)
            return

        if self.search_prompt.active:
            self.search_prompt.handle_key(ch)
            return

        if ch == -1:
            return

        if ch == ord("q"):
            self.exit_requested = True
            return

        self.controller.handle_key(ch)

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        if self.poller is not None:
            self.poller.start()
        try:
            self.redraw()
            while not self.exit_requested:
                ch = self.stdscr.getch()
                self.drain_background()
                self.handle_key(ch)
                self.redraw()
        finally:
            if self.poller is not None:
                self.poller.stop()
