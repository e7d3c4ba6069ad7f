from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from row_filter import cell_text, field_value, filter_rows
from row_sorter import next_sort_state, sort_rows
from table_columns import Column, RowAction, SortState

LOADING = "loading"


def visible_rows(rows, search: str, search_fields, sort_state: Optional[SortState]) -> list:
    return sort_rows(filter_rows(rows, search, search_fields), sort_state)


@dataclass
class HeaderCell:
    column: Column
    label: str
    width: Optional[int]
    sort: Optional[str]  # asc | desc | None


@dataclass
class RenderedRow:
    key: str
    row: Any
    cells: List[str]


@dataclass
class RenderedTable:
    header: List[HeaderCell]
    rows: List[RenderedRow]
    actions: List[RowAction] = field(default_factory=list)
    placeholder: Optional[str] = None  # LOADING or the empty message
    refreshing: bool = False
    search_text: str = ""
    offset: int = 0  # position of rows[0] among the visible rows
    total_rows: int = 0


class TableView:
    """Search/sort state over a caller-owned list of rows.

    Only ``search_text`` and ``sort_state`` live here; the visible rows are
    derived from them and kept until the rows, search or sort change.
    ``loading`` and ``refreshing`` are flags the caller sets.
    """

    def __init__(
        self,
        rows,
        columns,
        actions=(),
        search_fields=(),
        searchable: Optional[bool] = None,
        empty_message: str = "No data available",
        on_row_press: Optional[Callable[[Any], None]] = None,
        on_refresh: Optional[Callable[[], None]] = None,
        key_extractor: Optional[Callable[[Any], str]] = None,
    ):
        self.rows = list(rows or [])
        self.columns: List[Column] = list(columns)
        self.actions: List[RowAction] = list(actions)
        self.search_fields = tuple(search_fields or ())
        self.searchable = bool(self.search_fields) if searchable is None else searchable
        self.empty_message = empty_message
        self.on_row_press = on_row_press
        self.on_refresh = on_refresh
        self.key_extractor = key_extractor

        self.search_text = ""
        self.sort_state: Optional[SortState] = None
        self.loading = False
        self.refreshing = False

        self._listeners: List[Callable[["TableView"], None]] = []
        self._visible: Optional[list] = None  # filtered + sorted, dropped on change

    # ---------- observers ----------
    def subscribe(self, callback):
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self):
        for callback in list(self._listeners):
            callback(self)

    # ---------- state ----------
    def set_rows(self, rows):
        self.rows = list(rows or [])
        self._visible = None
        self._notify()

    def set_search(self, text: str):
        text = text or ""
        if text == self.search_text:
            return
        self.search_text = text
        self._visible = None
        self._notify()

    def clear_search(self):
        self.set_search("")

    def column(self, column_id: str) -> Optional[Column]:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def press_header(self, column_id: str) -> Optional[SortState]:
        col = self.column(column_id)
        if col is None or not col.sortable:
            return self.sort_state
        self.sort_state = next_sort_state(self.sort_state, column_id)
        self._visible = None
        self._notify()
        return self.sort_state

    def set_loading(self, flag: bool):
        self.loading = bool(flag)
        self._notify()

    def set_refreshing(self, flag: bool):
        self.refreshing = bool(flag)
        self._notify()

    def refresh(self) -> bool:
        if self.on_refresh is None or self.refreshing:
            return False
        self.set_refreshing(True)
        self.on_refresh()
        return True

    # ---------- derived ----------
    def _computed_rows(self) -> list:
        if self._visible is None:
            search = self.search_text if self.searchable else ""
            self._visible = visible_rows(
                self.rows, search, self.search_fields, self.sort_state
            )
        return self._visible

    def visible_rows(self) -> list:
        return list(self._computed_rows())

    def cell_text(self, row, column: Column) -> str:
        if column.render is not None:
            return cell_text(column.render(row))
        return cell_text(field_value(row, column.id)) or "-"

    def row_key(self, row, position: int) -> str:
        if self.key_extractor is not None:
            return str(self.key_extractor(row))
        value = field_value(row, "id")
        if value is not None:
            return cell_text(value)
        return str(position)

    # ---------- interactions ----------
    def press_row(self, row) -> bool:
        if self.on_row_press is None:
            return False
        self.on_row_press(row)
        return True

    def press_action(self, action, row):
        if isinstance(action, int):
            action = self.actions[action]
        action.on_press(row)

    def action_for_key(self, key: str) -> Optional[RowAction]:
        for action in self.actions:
            if action.key and action.key == key:
                return action
        return None

    # ---------- rendering ----------
    def render(self, start: Optional[int] = None, end: Optional[int] = None) -> RenderedTable:
        """Render the visible rows, or only ``[start:end]`` of them.

        Filtering and sorting always cover every row; cell text is built for
        the window alone.
        """
        header = []
        for col in self.columns:
            sort = None
            if self.sort_state is not None and self.sort_state.key == col.id:
                sort = self.sort_state.direction
            header.append(HeaderCell(col, col.label, col.width, sort))

        visible = self._computed_rows()
        total = len(visible)
        start = 0 if start is None else max(0, min(start, total))
        end = total if end is None else max(start, min(end, total))
        rendered = [
            RenderedRow(
                self.row_key(row, pos),
                row,
                [self.cell_text(row, col) for col in self.columns],
            )
            for pos, row in enumerate(visible[start:end], start)
        ]

        placeholder = None
        if self.loading:
            placeholder = LOADING
        elif not total:
            placeholder = self.empty_message

        return RenderedTable(
            header=header,
            rows=rendered,
            actions=list(self.actions),
            placeholder=placeholder,
            refreshing=self.refreshing,
            search_text=self.search_text,
            offset=start,
            total_rows=total,
        )
