from types import SimpleNamespace

from app_state import AppState
from orchestrator import Orchestrator


class FakePoller:
    def __init__(self, results=(), last_error=None):
        self.results = list(results)
        self.last_error = last_error

    def take_latest(self):
        return self.results.pop(0) if self.results else None


class FakeSource:
    def __init__(self, rows=None, error=None):
        self.rows = rows
        self.error = error

    def load(self):
        if self.error is not None:
            raise self.error
        return self.rows


def _orchestrator(rows, source=None, poller=None, config=None):
    """Build an Orchestrator without a terminal; overlays are recorded."""
    orch = Orchestrator.__new__(Orchestrator)
    overlays = []
    orch.overlay = SimpleNamespace(
        visible=False,
        open=lambda lines, title="": overlays.append((title, lines)),
    )
    state = AppState(rows, file_path="rows.csv", source=source, config=config or {})
    orch._init_state(state, poller)
    return orch, overlays


def test_polled_rows_replace_table_and_widen_columns():
    poller = FakePoller([[{"id": 2, "name": "b", "status": "open"}]])
    orch, _ = _orchestrator([{"id": 1, "name": "a"}], poller=poller)

    orch.drain_background()

    assert orch.view.rows == [{"id": 2, "name": "b", "status": "open"}]
    assert [c.id for c in orch.view.columns] == ["id", "name", "status"]
    assert orch.paginator.total_rows == 1


def test_poll_into_empty_table_enables_search():
    poller = FakePoller([[{"id": 1, "name": "alpha"}, {"id": 2, "name": "beta"}]])
    orch, _ = _orchestrator([], poller=poller)
    assert orch.view.searchable is False

    orch.drain_background()
    orch.view.set_search("bet")

    assert orch.view.searchable is True
    assert [r["id"] for r in orch.view.visible_rows()] == [2]


def test_poll_result_clears_loading():
    orch, _ = _orchestrator([], poller=FakePoller([[{"id": 1}]]))
    assert orch.view.loading is True

    orch.drain_background()

    assert orch.view.loading is False


def test_poll_error_clears_loading():
    poller = FakePoller()
    orch, _ = _orchestrator([], poller=poller)
    orch.drain_background()
    assert orch.view.loading is True

    poller.last_error = "connection refused"
    orch.drain_background()

    assert orch.view.loading is False
    assert orch.view.rows == []


def test_failed_refresh_reports_and_clears_refreshing():
    source = FakeSource(error=OSError("disk gone"))
    orch, _ = _orchestrator([{"id": 1, "name": "a"}], source=source)
    orch.view.set_refreshing(True)

    orch._refresh_worker()
    orch.drain_background()

    assert orch.status_msg == "Refresh failed: disk gone"
    assert orch.view.refreshing is False
    assert orch.view.rows == [{"id": 1, "name": "a"}]


def test_successful_refresh_swaps_rows():
    source = FakeSource(rows=[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
    orch, _ = _orchestrator([{"id": 1, "name": "a"}], source=source)
    orch.view.set_refreshing(True)

    orch._refresh_worker()
    orch.drain_background()

    assert orch.status_msg == "Refreshed 2 rows"
    assert orch.view.refreshing is False
    assert len(orch.view.rows) == 2


def test_drain_without_pending_work_leaves_status_alone():
    orch, _ = _orchestrator([{"id": 1}])
    orch.drain_background()
    assert orch.status_msg is None


def test_details_title_uses_position_across_pages():
    rows = [{"name": f"n{i}"} for i in range(5)]
    orch, overlays = _orchestrator(rows, config={"PAGE_SIZE": 2})
    orch.controller.handle_key(ord("n"))
    orch.grid.curr_row = 1

    orch.controller.press_current_row()

    title, lines = overlays[-1]
    assert title == "Row 3"
    assert any("n3" in line for line in lines)


def test_help_opens_through_overlay():
    orch, overlays = _orchestrator([{"id": 1}])
    orch.controller.handle_key(ord("?"))
    assert overlays[-1][0] == "Help"
