from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class Column:
    id: str
    label: str
    render: Optional[Callable[[Any], Any]] = None
    sortable: bool = False
    width: Optional[int] = None


@dataclass(frozen=True)
class RowAction:
    icon: str
    label: str
    on_press: Callable[[Any], None]
    color: Optional[str] = None
    key: Optional[str] = None  # single character bound in the grid


@dataclass(frozen=True)
class SortState:
    key: str
    direction: str = "asc"  # asc | desc

    @property
    def descending(self) -> bool:
        return self.direction == "desc"
