# app/domains/loc/schemas.py

"""
'loc' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.

이 모듈은 장소(Location) 데이터에 대한 API 요청(생성, 업데이트) 및
응답(조회)에 사용되는 데이터 유효성 검사 및 직렬화를 위한 Pydantic 모델을 포함합니다.
API 상의 필드 이름은 camelCase(parentId, createdAt ...)이며, snake_case 입력도 허용합니다.
"""

from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class LocationSchema(BaseModel):
    """loc 도메인 스키마 공통 설정 (camelCase 별칭, ORM 객체 변환 허용)"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# 요청 스키마
# =============================================================================
class LocationCreate(LocationSchema):
    """
    새로운 장소를 생성하기 위한 Pydantic 모델입니다.
    `parentId`를 지정하면 해당 장소의 하위로 생성됩니다.
    """
    building: str = Field(..., min_length=1, max_length=100, description="건물")
    name: str = Field(..., min_length=1, max_length=100, description="장소 명칭")
    number: str = Field(..., min_length=1, max_length=50, description="장소 번호")
    area: float = Field(..., ge=0, description="면적 (0 이상)")
    parent_id: Optional[int] = Field(None, description="상위 장소 ID (선택 사항)")


class LocationUpdate(LocationSchema):
    """
    기존 장소 정보를 업데이트하기 위한 Pydantic 모델입니다.
    모든 필드는 선택 사항입니다 (부분 업데이트 가능).

    `parentId`는 세 가지 상태를 가집니다.
    - 생략: 상위 장소 유지
    - null: 상위 장소 해제 (루트로 변경)
    - 정수: 해당 장소로 이동
    """
    building: Optional[str] = Field(None, min_length=1, max_length=100, description="건물")
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="장소 명칭")
    number: Optional[str] = Field(None, min_length=1, max_length=50, description="장소 번호")
    area: Optional[float] = Field(None, ge=0, description="면적 (0 이상)")
    parent_id: Optional[int] = Field(None, description="상위 장소 ID (null이면 루트로 변경)")

    @model_validator(mode="after")
    def _reject_null_scalars(self) -> "LocationUpdate":
        # parentId 외의 필드는 명시적 null을 허용하지 않습니다.
        for field_name in ("building", "name", "number", "area"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    @property
    def parent_id_provided(self) -> bool:
        """요청 본문에 parentId가 (null 포함) 명시되었는지 여부"""
        return "parent_id" in self.model_fields_set

    def scalar_changes(self) -> dict[str, Any]:
        """parentId를 제외한, 요청에 포함된 필드만 반환합니다."""
        return self.model_dump(exclude_unset=True, exclude={"parent_id"})


# =============================================================================
# 응답 스키마
# =============================================================================
class LocationRead(LocationSchema):
    """
    장소 정보를 클라이언트에 응답하기 위한 기본 Pydantic 모델입니다.
    """
    id: int = Field(..., description="장소 고유 ID")
    building: str
    name: str
    number: str
    area: float
    parent_id: Optional[int] = Field(None, description="상위 장소 ID")
    created_at: Optional[datetime] = Field(None, description="레코드 생성 일시")
    updated_at: Optional[datetime] = Field(None, description="레코드 마지막 업데이트 일시")


class LocationListItem(LocationRead):
    """목록 조회용: 직계 상위 장소와 직계 하위 장소 목록을 포함합니다."""
    parent: Optional[LocationRead] = None
    children: List[LocationRead] = Field(default_factory=list)


class LocationDetail(LocationRead):
    """
    단건 조회/생성/수정 응답 모델입니다.

    - `parent`: 로드된 경우에만 채워집니다.
    - `children`: null이면 해당 깊이는 로드되지 않았음을, []이면 하위 장소가 없음을 뜻합니다.
    """
    parent: Optional[LocationRead] = None
    children: Optional[List["LocationDetail"]] = None

    @classmethod
    def from_location(cls, location: Any, *, depth: int = 0, include_parent: bool = False) -> "LocationDetail":
        """
        ORM 객체를 depth 단계까지만 재귀적으로 변환합니다.
        depth를 넘는 관계 속성에는 접근하지 않으므로 추가 지연 로딩이 발생하지 않습니다.
        """
        detail = cls.model_validate(LocationRead.model_validate(location).model_dump())
        if include_parent and location.parent is not None:
            detail.parent = LocationRead.model_validate(location.parent)
        if depth > 0:
            detail.children = [
                cls.from_location(child, depth=depth - 1) for child in location.children
            ]
        return detail


LocationDetail.model_rebuild()
