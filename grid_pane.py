import curses

from table_view import LOADING


class GridPane:
    PAIR_CELL_TEXT = 1
    PAIR_ROW_ACTIVE = 2
    PAIR_HEADER_ACTIVE = 3
    PAIR_ACTION_BASE = 10
    MAX_COL_WIDTH = 40
    SORT_MARKERS = {"asc": "^", "desc": "v"}
    ACTION_COLORS = {
        "red": curses.COLOR_RED,
        "green": curses.COLOR_GREEN,
        "yellow": curses.COLOR_YELLOW,
        "blue": curses.COLOR_BLUE,
        "magenta": curses.COLOR_MAGENTA,
        "cyan": curses.COLOR_CYAN,
        "white": curses.COLOR_WHITE,
    }

    def __init__(self):
        self.has_colors = False
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(
                self.PAIR_ROW_ACTIVE, curses.COLOR_BLACK, curses.COLOR_WHITE
            )
            curses.init_pair(self.PAIR_HEADER_ACTIVE, curses.COLOR_CYAN, -1)
            for offset, color in enumerate(self.ACTION_COLORS.values()):
                curses.init_pair(self.PAIR_ACTION_BASE + offset, color, -1)
            self.has_colors = True
        except curses.error:
            pass

        self.curr_row = 0  # index within the current page
        self.curr_col = 0
        self.col_offset = 0
        self.row_offset = 0
        self.rendered_col_widths = {}

    # ---------- navigation ----------
    def move_up(self):
        self.curr_row = max(0, self.curr_row - 1)

    def move_down(self, total_rows: int):
        self.curr_row = max(0, min(total_rows - 1, self.curr_row + 1))

    def move_left(self):
        self.curr_col = max(0, self.curr_col - 1)

    def move_right(self, total_cols: int):
        self.curr_col = max(0, min(total_cols - 1, self.curr_col + 1))

    def clamp(self, total_rows: int, total_cols: int):
        self.curr_row = max(0, min(self.curr_row, total_rows - 1))
        self.curr_col = max(0, min(self.curr_col, total_cols - 1))

    # ---------- layout ----------
    def compute_widths(self, table, page_rows):
        widths = []
        for idx, head in enumerate(table.header):
            if head.width:
                widths.append(max(1, int(head.width)))
                continue
            max_len = len(head.label) + 1  # room for the sort marker
            for rendered in page_rows:
                max_len = max(max_len, len(rendered.cells[idx]))
            widths.append(min(self.MAX_COL_WIDTH, max_len + 2))
        return widths

    @staticmethod
    def action_tag(action) -> str:
        key = f"[{action.key}]" if action.key else ""
        return f"{key}{action.icon}"

    def actions_width(self, actions) -> int:
        if not actions:
            return 0
        return sum(len(self.action_tag(a)) + 1 for a in actions)

    def _visible_cols(self, widths, avail_w):
        if not widths:
            return ()
        self.col_offset = max(0, min(self.col_offset, len(widths) - 1))
        if self.curr_col < self.col_offset:
            self.col_offset = self.curr_col

        while True:
            used = 0
            cols = []
            for c in range(self.col_offset, len(widths)):
                if used + widths[c] + 1 > avail_w and cols:
                    break
                used += widths[c] + 1
                cols.append(c)
            if self.curr_col <= cols[-1] or self.col_offset >= self.curr_col:
                return tuple(cols)
            self.col_offset += 1

    def _action_attr(self, action):
        if not self.has_colors or not action.color:
            return 0
        names = list(self.ACTION_COLORS)
        if action.color not in names:
            return 0
        return curses.color_pair(self.PAIR_ACTION_BASE + names.index(action.color))

    # ---------- rendering ----------
    def draw(self, win, table):
        """Draw ``table``, already windowed to one page by ``TableView.render``."""
        win.erase()
        h, w = win.getmaxyx()

        page_rows = table.rows
        page_end = table.offset + len(page_rows)
        total_cols = len(table.header)
        self.clamp(len(page_rows), total_cols)

        widths = self.compute_widths(table, page_rows)
        row_w = max(3, len(str(max(page_end, 1))) + 1)
        act_w = self.actions_width(table.actions)
        avail_w = max(1, w - row_w - 1 - act_w)
        visible_cols = self._visible_cols(widths, avail_w)
        self.rendered_col_widths = {c: widths[c] for c in visible_cols}

        # status marks on the top line
        marks = []
        if table.search_text:
            marks.append(f"/{table.search_text}")
        if table.refreshing:
            marks.append("* refreshing")
        if table.placeholder == LOADING and page_rows:
            marks.append("Loading…")
        self._put(win, 0, 0, " ".join(marks), w - 1, curses.A_DIM)

        # header
        x = row_w + 1
        for c in visible_cols:
            head = table.header[c]
            cw = min(widths[c], max(1, w - x - 1))
            marker = self.SORT_MARKERS.get(head.sort, "")
            label = f"{head.label}{marker}"[:cw].ljust(cw)
            attr = curses.A_BOLD
            if c == self.curr_col and self.has_colors:
                attr |= curses.color_pair(self.PAIR_HEADER_ACTIVE)
            self._put(win, 1, x, label, cw, attr)
            x += cw + 1
        if table.actions:
            self._put(win, 1, max(0, w - act_w - 1), "actions", act_w, curses.A_BOLD)

        if not page_rows:
            self._draw_placeholder(win, table.placeholder, h, w)
            win.refresh()
            return

        base_y = 2
        budget = max(1, h - base_y)
        if self.curr_row < self.row_offset:
            self.row_offset = self.curr_row
        elif self.curr_row >= self.row_offset + budget:
            self.row_offset = self.curr_row - budget + 1

        for i in range(self.row_offset, min(len(page_rows), self.row_offset + budget)):
            rendered = page_rows[i]
            y = base_y + i - self.row_offset
            active = i == self.curr_row
            attr = curses.A_REVERSE if active else 0
            self._put(win, y, 0, str(table.offset + i + 1).rjust(row_w), row_w, attr)
            x = row_w + 1
            for c in visible_cols:
                cw = min(widths[c], max(1, w - x - 1))
                text = rendered.cells[c].replace("\n", " ")
                self._put(win, y, x, text[:cw].ljust(cw), cw, attr)
                x += cw + 1
            if table.actions:
                ax = max(0, w - act_w - 1)
                for action in table.actions:
                    tag = self.action_tag(action)
                    self._put(win, y, ax, tag, len(tag), self._action_attr(action) | attr)
                    ax += len(tag) + 1

        win.refresh()

    def _draw_placeholder(self, win, placeholder, h, w):
        if placeholder == LOADING:
            text = "Loading…"
        else:
            text = placeholder or ""
        y = max(2, h // 2)
        x = max(0, (w - len(text)) // 2)
        self._put(win, y, x, text, max(1, w - x - 1), curses.A_DIM)

    @staticmethod
    def _put(win, y, x, text, n, attr=0):
        if n <= 0:
            return
        try:
            win.addnstr(y, x, text, n, attr)
        except curses.error:
            pass
