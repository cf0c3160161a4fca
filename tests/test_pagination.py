"""Tests for page arithmetic."""

import pytest

from cvecatalog.catalog.pagination import PAGE_SIZE, PageInfo, normalize_page, page_offset


def test_page_size_is_twenty():
    assert PAGE_SIZE == 20


@pytest.mark.parametrize(
    "total, expected_pages",
    [(0, 0), (1, 1), (19, 1), (20, 1), (21, 2), (39, 2), (40, 2)],
)
def test_total_pages(total, expected_pages):
    info = PageInfo.compute(1, total)
    assert info.total_pages == expected_pages
    assert info.total_count == total
    assert info.has_next_page is (1 < expected_pages)
    assert info.has_prev_page is False


@pytest.mark.parametrize("total", [0, 1, 19, 20, 21, 39, 40])
def test_second_page_flags(total):
    info = PageInfo.compute(2, total)
    assert info.has_prev_page is True
    assert info.has_next_page is (2 < info.total_pages)


def test_forty_five_rows_third_page():
    info = PageInfo.compute(3, 45)
    assert info.total_pages == 3
    assert info.has_next_page is False
    assert info.has_prev_page is True
    assert page_offset(3) == 40


def test_zero_matches_beyond_first_page():
    info = PageInfo.compute(3, 0)
    assert info.total_pages == 0
    assert info.has_next_page is False
    assert info.has_prev_page is True


@pytest.mark.parametrize("raw, expected", [(None, 1), (0, 1), (-5, 1), (1, 1), (7, 7)])
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


def test_offset_floors_page():
    assert page_offset(0) == 0
    assert page_offset(2) == 20
