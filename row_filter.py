import pandas as pd


def is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def cell_text(value) -> str:
    """Stringify a field value for display and matching.

    Missing values become an empty string, whole floats lose their trailing
    ``.0`` and sequences are joined with commas.
    """
    if is_missing(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(cell_text(v) for v in value)
    return str(value)


def field_value(row, name):
    try:
        return row.get(name)
    except AttributeError:
        return None


def row_matches(row, needle: str, fields) -> bool:
    for name in fields:
        value = field_value(row, name)
        if is_missing(value):
            continue
        if needle in cell_text(value).lower():
            return True
    return False


def filter_rows(rows, search: str, fields) -> list:
    if not search:
        return list(rows)
    needle = search.lower()
    fields = tuple(fields or ())
    return [row for row in rows if row_matches(row, needle, fields)]
