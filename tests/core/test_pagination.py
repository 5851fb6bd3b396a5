# tests/core/test_pagination.py

"""
페이지네이션 메타데이터 계산 (app.core.pagination) 단위 테스트입니다.
"""

import pytest

from app.core.pagination import build_pagination_metadata, calculate_skip


def test_second_page_of_three_single_rows():
    metadata = build_pagination_metadata(total=3, page=2, limit=1)

    assert metadata.model_dump(by_alias=True) == {
        "total": 3,
        "page": 2,
        "limit": 1,
        "nextPage": 3,
        "previousPage": 1,
    }


def test_single_page_has_no_neighbours():
    metadata = build_pagination_metadata(total=5, page=1, limit=10)

    assert metadata.next_page is None
    assert metadata.previous_page is None


def test_last_page_has_only_previous():
    metadata = build_pagination_metadata(total=20, page=2, limit=10)

    assert metadata.next_page is None
    assert metadata.previous_page == 1


def test_empty_result():
    metadata = build_pagination_metadata(total=0, page=1, limit=10)

    assert metadata.total == 0
    assert metadata.next_page is None
    assert metadata.previous_page is None


def test_page_beyond_last_keeps_previous_pointer():
    # 존재하지 않는 페이지를 요청해도 previousPage는 page - 1 입니다.
    metadata = build_pagination_metadata(total=3, page=7, limit=2)

    assert metadata.next_page is None
    assert metadata.previous_page == 6


@pytest.mark.parametrize("total,page,limit", [(0, 1, 1), (9, 1, 3), (10, 3, 3), (11, 3, 5), (100, 4, 25)])
def test_next_page_iff_more_rows_remain(total, page, limit):
    metadata = build_pagination_metadata(total=total, page=page, limit=limit)

    assert (metadata.next_page == page + 1) == (page * limit < total)
    assert (metadata.next_page is None) == (page * limit >= total)


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
def test_rejects_non_positive_arguments(page, limit):
    with pytest.raises(ValueError):
        build_pagination_metadata(total=10, page=page, limit=limit)


def test_calculate_skip():
    assert calculate_skip(1, 10) == 0
    assert calculate_skip(3, 25) == 50
