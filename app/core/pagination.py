# app/core/pagination.py

"""
목록 조회 API에서 공통으로 사용하는 페이지네이션 계산 및 응답 스키마 모듈입니다.
"""

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PaginationMetadata(BaseModel):
    """목록 응답의 `metadata` 부분입니다. (nextPage / previousPage 는 없으면 null)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = Field(..., ge=0, description="조건에 맞는 전체 레코드 수")
    page: int = Field(..., ge=1, description="현재 페이지 (1부터 시작)")
    limit: int = Field(..., ge=1, description="페이지 크기")
    next_page: Optional[int] = Field(None, description="다음 페이지 번호")
    previous_page: Optional[int] = Field(None, description="이전 페이지 번호")


class PaginatedResult(BaseModel, Generic[T]):
    """`{data, metadata}` 형태의 페이지 응답입니다."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: List[T]
    metadata: PaginationMetadata


def calculate_skip(page: int, limit: int) -> int:
    """(page, limit) -> 건너뛸 레코드 수"""
    return (page - 1) * limit


def build_pagination_metadata(total: int, page: int, limit: int) -> PaginationMetadata:
    """
    전체 건수와 현재 페이지 정보로 다음/이전 페이지 번호를 계산합니다.

    - nextPage: page < ceil(total / limit) 이면 page + 1
    - previousPage: page > 1 이면 page - 1
    """
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive integers")

    total_pages = math.ceil(total / limit)
    next_page = page + 1 if page < total_pages else None
    previous_page = page - 1 if page > 1 else None

    return PaginationMetadata(
        total=total,
        page=page,
        limit=limit,
        next_page=next_page,
        previous_page=previous_page,
    )
