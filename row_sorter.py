import datetime
import logging
import numbers
from functools import cmp_to_key
from typing import Optional

from row_filter import field_value, is_missing
from table_columns import SortState

logger = logging.getLogger(__name__)

KIND_NUMBER = 0
KIND_TEXT = 1
KIND_DATE = 2


def _kind(value) -> Optional[int]:
    if isinstance(value, (bool, numbers.Number)):
        return KIND_NUMBER
    if isinstance(value, str):
        return KIND_TEXT
    if isinstance(value, (datetime.date, datetime.time)):
        return KIND_DATE
    return None


def is_sortable_value(value) -> bool:
    return is_missing(value) or _kind(value) is not None


def _compare_values(a, b) -> int:
    ka, kb = _kind(a), _kind(b)
    if ka != kb:
        return -1 if ka < kb else 1
    try:
        if a == b:
            return 0
        return -1 if a < b else 1
    except TypeError:
        # e.g. naive vs aware timestamps
        sa, sb = str(a), str(b)
        if sa == sb:
            return 0
        return -1 if sa < sb else 1


def next_sort_state(current: Optional[SortState], column_id: str) -> Optional[SortState]:
    """Advance the tri-state toggle: none -> asc -> desc -> none."""
    if current is not None and current.key == column_id:
        if current.direction == "asc":
            return SortState(column_id, "desc")
        return None
    return SortState(column_id, "asc")


def sort_rows(rows, sort_state: Optional[SortState]) -> list:
    """Stable single-key sort.

    Descending flips the comparator instead of reversing the sorted list, so
    rows with equal keys keep their input order in both directions. Missing
    values always go last. Columns holding non-primitive values are left in
    input order.
    """
    rows = list(rows)
    if sort_state is None:
        return rows

    key = sort_state.key
    for row in rows:
        if not is_sortable_value(field_value(row, key)):
            logger.warning("Column %r holds non-primitive values; not sorting", key)
            return rows

    sign = -1 if sort_state.descending else 1

    def compare(a, b):
        av = field_value(a, key)
        bv = field_value(b, key)
        a_missing = is_missing(av)
        b_missing = is_missing(bv)
        if a_missing or b_missing:
            return int(a_missing) - int(b_missing)
        return sign * _compare_values(av, bv)

    return sorted(rows, key=cmp_to_key(compare))
