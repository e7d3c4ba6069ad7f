from row_source import default_columns, default_search_fields


class AppState:
    def __init__(self, rows, file_path=None, source=None, config=None, search_fields=None):
        self.file_path = file_path
        self.source = source
        self.config = dict(config or {})

        self.rows = list(rows or [])
        self.columns = default_columns(self.rows)
        self.search_fields = list(search_fields or []) or default_search_fields(self.rows)

    def can_reload(self) -> bool:
        return self.source is not None

    def reload(self):
        if self.source is None:
            return list(self.rows)
        return self.source.load()

    def replace_rows(self, rows):
        """Adopt freshly loaded rows, widening columns for any new keys."""
        self.rows = list(rows or [])
        known = {col.id for col in self.columns}
        for col in default_columns(self.rows):
            if col.id not in known:
                self.columns.append(col)
                known.add(col.id)
        if not self.search_fields:
            self.search_fields = default_search_fields(self.rows)
        return self.rows
