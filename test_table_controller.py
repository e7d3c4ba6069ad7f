import curses
from types import SimpleNamespace

from grid_pane import GridPane
from pagination import Paginator
from table_columns import Column, RowAction
from table_controller import TableController
from table_view import TableView


ROWS = [{"id": i, "name": f"n{i:02d}", "score": i % 3} for i in range(1, 12)]
COLUMNS = [
    Column("id", "ID"),
    Column("name", "Name", sortable=True),
    Column("score", "Score", sortable=True),
]


def _controller(rows=ROWS, page_size=5, **view_kwargs):
    view_kwargs.setdefault("search_fields", ["name"])
    view = TableView(rows, COLUMNS, **view_kwargs)
    messages = []
    overlays = []
    prompt = SimpleNamespace(started=0)
    prompt.start = lambda: setattr(prompt, "started", prompt.started + 1)
    ctl = TableController(
        view,
        GridPane(),
        Paginator(len(rows), page_size=page_size),
        lambda m, _s: messages.append(m),
        search_prompt=prompt,
        open_overlay=lambda lines, title: overlays.append((title, lines)),
    )
    return ctl, messages, overlays, prompt


def test_row_navigation_stays_on_page():
    ctl, *_ = _controller()
    for _ in range(10):
        ctl.handle_key(ord("j"))
    assert ctl.grid.curr_row == 4
    assert ctl.current_row()["id"] == 5
    ctl.handle_key(curses.KEY_UP)
    assert ctl.current_row()["id"] == 4


def test_paging_resets_cursor():
    ctl, *_ = _controller()
    ctl.handle_key(ord("j"))
    ctl.handle_key(ord("n"))
    assert ctl.paginator.page_index == 1
    assert ctl.grid.curr_row == 0
    assert ctl.current_row()["id"] == 6
    ctl.handle_key(ord("G"))
    assert [r["id"] for r in ctl.page_rows()] == [11]
    ctl.handle_key(ord("g"))
    assert ctl.paginator.page_index == 0


def test_sort_key_cycles_current_column():
    ctl, messages, *_ = _controller()
    ctl.handle_key(ord("l"))  # name
    ctl.handle_key(ord("l"))  # score
    ctl.handle_key(ord("s"))
    assert ctl.view.sort_state.direction == "asc"
    assert [r["score"] for r in ctl.page_rows()] == [0, 0, 0, 1, 1]
    ctl.handle_key(ord("s"))
    assert ctl.view.sort_state.direction == "desc"
    ctl.handle_key(ord("s"))
    assert ctl.view.sort_state is None
    assert messages[-1] == "Sort cleared"


def test_sort_on_unsortable_column_reports():
    ctl, messages, *_ = _controller()
    ctl.handle_key(ord("s"))
    assert ctl.view.sort_state is None
    assert messages[-1] == "ID is not sortable"


def test_search_change_returns_to_first_page():
    ctl, *_ = _controller()
    ctl.handle_key(ord("n"))
    ctl.view.set_search("n1")
    assert ctl.paginator.page_index == 0
    assert ctl.paginator.total_rows == 2
    assert [r["id"] for r in ctl.page_rows()] == [10, 11]


def test_slash_opens_prompt_and_escape_clears():
    ctl, messages, _, prompt = _controller()
    ctl.handle_key(ord("/"))
    assert prompt.started == 1
    ctl.view.set_search("n0")
    ctl.handle_key(27)
    assert ctl.view.search_text == ""
    assert messages[-1] == "Search cleared"


def test_slash_without_search_fields():
    ctl, messages, _, prompt = _controller(search_fields=[])
    ctl.handle_key(ord("/"))
    assert prompt.started == 0
    assert messages[-1] == "No searchable fields"


def test_action_key_runs_on_cursor_row():
    seen = []
    action = RowAction("x", "Archive", on_press=seen.append, key="a")
    ctl, *_ = _controller(actions=[action])
    ctl.handle_key(ord("j"))
    ctl.handle_key(ord("a"))
    assert seen == [ROWS[1]]


def test_failing_action_reports_status():
    def boom(_row):
        raise RuntimeError("offline")

    action = RowAction("x", "Archive", on_press=boom, key="a")
    ctl, messages, *_ = _controller(actions=[action])
    ctl.handle_key(ord("a"))
    assert messages[-1] == "Archive failed: offline"


def test_enter_presses_row_or_first_action():
    pressed = []
    ctl, *_ = _controller(on_row_press=pressed.append)
    ctl.handle_key(10)
    assert pressed == [ROWS[0]]

    seen = []
    action = RowAction("v", "View", on_press=seen.append, key="v")
    ctl, *_ = _controller(actions=[action])
    ctl.handle_key(13)
    assert seen == [ROWS[0]]


def test_refresh_key():
    calls = []
    ctl, messages, *_ = _controller(on_refresh=lambda: calls.append(1))
    ctl.handle_key(ord("r"))
    assert calls == [1]
    assert ctl.view.refreshing
    ctl.handle_key(ord("r"))
    assert calls == [1]
    assert messages[-1] == "Refresh already running"

    ctl, messages, *_ = _controller()
    ctl.handle_key(ord("r"))
    assert messages[-1] == "Nothing to refresh"


def test_help_lists_action_keys():
    action = RowAction("y", "Copy row", on_press=lambda r: None, key="y")
    ctl, _, overlays, _ = _controller(actions=[action])
    ctl.handle_key(ord("?"))
    title, lines = overlays[-1]
    assert title == "Help"
    assert any("Copy row" in line for line in lines)


def test_empty_table_keys_are_safe():
    ctl, *_ = _controller(rows=[])
    for ch in (ord("j"), ord("k"), 10, ord("n"), ord("a")):
        ctl.handle_key(ch)
    assert ctl.current_row() is None
