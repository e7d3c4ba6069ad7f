class Paginator:
    def __init__(self, total_rows: int, page_size: int = 50):
        self.page_size = max(1, int(page_size))
        self.initial_page_size = self.page_size
        self.page_index = 0
        self.total_rows = max(0, total_rows)
        self._clamp()

    def _clamp(self):
        max_page = self.page_count - 1
        self.page_index = max(0, min(self.page_index, max_page))

    def update_total_rows(self, total_rows: int):
        self.total_rows = max(0, total_rows)
        self._clamp()

    def next_page(self):
        if self.has_next_page:
            self.page_index += 1
            self._clamp()

    def prev_page(self):
        if self.has_previous_page:
            self.page_index -= 1
            self._clamp()

    def first_page(self):
        self.page_index = 0

    def last_page(self):
        self.page_index = self.page_count - 1

    def go_to_page(self, page: int) -> bool:
        """Jump to a 1-based page number; out-of-range requests are ignored."""
        if page < 1 or page > self.page_count:
            return False
        self.page_index = page - 1
        return True

    def change_page_size(self, page_size: int) -> bool:
        if page_size < 1:
            return False
        self.page_size = page_size
        self.page_index = 0
        return True

    def reset(self):
        self.page_size = self.initial_page_size
        self.page_index = 0

    def ensure_row_visible(self, row: int):
        if row < 0:
            row = 0
        if self.total_rows == 0:
            self.page_index = 0
            return
        target_index = row // self.page_size
        if target_index != self.page_index:
            self.page_index = target_index
            self._clamp()

    def page_slice(self, rows):
        return list(rows[self.page_start : self.page_end])

    def page_range(self, span: int = 2) -> list[int]:
        current = self.page_index + 1
        start = max(1, current - span)
        end = min(self.page_count, current + span)
        return list(range(start, end + 1))

    @property
    def page_start(self) -> int:
        return self.page_index * self.page_size

    @property
    def page_end(self) -> int:
        return min(self.total_rows, self.page_start + self.page_size)

    @property
    def page_count(self) -> int:
        if self.total_rows == 0:
            return 1
        return (self.total_rows - 1) // self.page_size + 1

    @property
    def has_next_page(self) -> bool:
        return self.page_end < self.total_rows

    @property
    def has_previous_page(self) -> bool:
        return self.page_index > 0
