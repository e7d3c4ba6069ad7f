import pytest

from pagination import Paginator


def test_empty_list_has_one_page():
    p = Paginator(0, page_size=10)
    assert p.page_count == 1
    assert (p.page_start, p.page_end) == (0, 0)
    assert not p.has_next_page
    assert not p.has_previous_page


def test_next_and_prev_stay_in_bounds():
    p = Paginator(25, page_size=10)
    p.next_page()
    p.next_page()
    p.next_page()
    assert p.page_index == 2
    assert (p.page_start, p.page_end) == (20, 25)
    p.prev_page()
    p.prev_page()
    p.prev_page()
    assert p.page_index == 0


def test_go_to_page_is_one_based_and_ignores_out_of_range():
    p = Paginator(25, page_size=10)
    assert p.go_to_page(3) is True
    assert p.page_index == 2
    assert p.go_to_page(0) is False
    assert p.go_to_page(4) is False
    assert p.page_index == 2


def test_first_and_last_page():
    p = Paginator(95, page_size=10)
    p.last_page()
    assert p.page_index == 9
    p.first_page()
    assert p.page_index == 0


def test_change_page_size_resets_to_first_page():
    p = Paginator(100, page_size=10)
    p.go_to_page(5)
    assert p.change_page_size(0) is False
    assert p.change_page_size(25) is True
    assert p.page_index == 0
    assert p.page_count == 4
    p.reset()
    assert p.page_size == 10


def test_shrinking_total_clamps_page():
    p = Paginator(100, page_size=10)
    p.last_page()
    p.update_total_rows(15)
    assert p.page_index == 1


def test_ensure_row_visible():
    p = Paginator(100, page_size=10)
    p.ensure_row_visible(57)
    assert p.page_index == 5


def test_page_slice():
    p = Paginator(5, page_size=2)
    p.next_page()
    assert p.page_slice(list("abcde")) == ["c", "d"]


@pytest.mark.parametrize(
    "page, expected",
    [(1, [1, 2, 3]), (5, [3, 4, 5, 6, 7]), (10, [8, 9, 10])],
)
def test_page_range(page, expected):
    p = Paginator(100, page_size=10)
    p.go_to_page(page)
    assert p.page_range() == expected
