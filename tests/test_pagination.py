from app.postpanel.pagination import Page, normalize_page


def test_page_numbers_mid_range():
    p = Page(items=list(range(10)), page=2, per_page=10, total=25)
    assert p.offset == 10
    assert p.total_pages == 3
    assert p.has_prev and p.has_next
    assert p.prev_num == 1
    assert p.next_num == 3


def test_last_page():
    p = Page(items=list(range(5)), page=3, per_page=10, total=25)
    assert p.offset == 20
    assert not p.has_next
    assert p.next_num is None
    assert len(p) == 5


def test_empty_result():
    p = Page(items=[], page=1, per_page=10, total=0)
    assert p.total_pages == 0
    assert not p.has_prev
    assert not p.has_next
    assert list(p) == []


def test_normalize_page():
    assert normalize_page(None) == 1
    assert normalize_page("abc") == 1
    assert normalize_page("0") == 1
    assert normalize_page("-4") == 1
    assert normalize_page("3") == 3
    assert normalize_page(2) == 2


def test_normalize_page_keeps_huge_values():
    # Far past the end, not reset to the first page
    assert normalize_page("99999999999999999999") == 99999999999999999999
