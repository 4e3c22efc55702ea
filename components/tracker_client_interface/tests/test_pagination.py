"""Unit tests for the Pagination calculator."""

#Run with "python -m pytest components/tracker_client_interface/tests/test_pagination.py -v"

import pytest

from tracker_client_interface.pagination import Pagination


def test_compute_partial_last_page():
    # 95 items in pages of 10 -> 10 pages, offset 20 is the third page
    pagination = Pagination(total=95, start_at=20, max_results=10)

    pagination.compute()

    assert pagination.page_count == 10
    assert pagination.page == 2
    assert pagination.pages == list(range(10))


def test_compute_no_results():
    pagination = Pagination(total=0, start_at=0, max_results=10)

    pagination.compute()

    assert pagination.page_count == 0
    assert pagination.page == 0
    assert pagination.pages == []


def test_compute_exact_multiple():
    pagination = Pagination(total=30, start_at=10, max_results=10)

    pagination.compute()

    assert pagination.page_count == 3
    assert pagination.page == 1
    assert len(pagination.pages) == pagination.page_count


def test_compute_rounds_unaligned_offset_up():
    # offsets that fall mid-page round up, matching ceil(start_at / max_results)
    pagination = Pagination(total=25, start_at=5, max_results=10)

    pagination.compute()

    assert pagination.page == 1


def test_fields_untouched_before_compute():
    pagination = Pagination(total=25, start_at=0, max_results=10)

    assert pagination.page_count == 0
    assert pagination.pages == []


@pytest.mark.parametrize("max_results", [0, -1])
def test_compute_rejects_non_positive_page_size(max_results):
    pagination = Pagination(total=10, start_at=0, max_results=max_results)

    with pytest.raises(ValueError):
        pagination.compute()
