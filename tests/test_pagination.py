"""Tests for result pagination."""
from __future__ import annotations

import pytest

from engine.pagination import Page, paginate
from models.regulation import Regulation


def _records(n: int) -> list[Regulation]:
    return [Regulation(meta_id=f"reg/{i:04d}") for i in range(1, n + 1)]


def test_first_page():
    page = paginate(_records(120), page=1, page_size=50)

    assert len(page.items) == 50
    assert page.items[0].meta_id == "reg/0001"
    assert page.total_pages == 3
    assert page.first_index == 1
    assert page.last_index == 50
    assert not page.has_previous
    assert page.has_next


def test_last_partial_page():
    page = paginate(_records(120), page=3, page_size=50)

    assert [r.meta_id for r in page.items][:1] == ["reg/0101"]
    assert len(page.items) == 20
    assert page.first_index == 101
    assert page.last_index == 120
    assert page.has_previous
    assert not page.has_next
    assert page.summary() == "Showing 101 - 120 of 120 regulations"


@pytest.mark.parametrize("requested, expected", [(0, 1), (-4, 1), (99, 3)])
def test_out_of_range_pages_are_clamped(requested, expected):
    assert paginate(_records(120), page=requested, page_size=50).page == expected


def test_empty_results():
    page = paginate([], page=5)

    assert page.page == 1
    assert page.items == []
    assert page.total_pages == 0
    assert page.first_index == 0
    assert page.last_index == 0
    assert not page.has_next
    assert page.summary() == "Showing 0 - 0 of 0 regulations"


def test_singular_summary():
    assert paginate(_records(1)).summary() == "Showing 1 - 1 of 1 regulation"


def test_default_page_size_is_50():
    page = paginate(_records(51))

    assert page.page_size == 50
    assert page.total_pages == 2


def test_invalid_page_size():
    with pytest.raises(ValueError):
        paginate(_records(3), page_size=0)


def test_page_is_a_model():
    assert isinstance(paginate(_records(2)), Page)
