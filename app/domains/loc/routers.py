# app/domains/loc/routers.py

"""
'loc' 도메인의 API 엔드포인트를 정의하는 모듈입니다.

이 라우터는 장소(Location) 계층에 대한 CRUD 작업을 위한 HTTP 엔드포인트를 제공합니다.
요청 값의 형식 검증은 FastAPI/Pydantic이, 계층 무결성 검증은 loc_crud가 담당합니다.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

# 핵심 의존성 (데이터베이스 세션, 장소 계층 엔진)
from app.core import dependencies as deps
from app.core.config import settings
from app.core.pagination import PaginatedResult

# 'loc' 도메인의 CRUD, 스키마
from app.domains.loc import crud as loc_crud
from app.domains.loc import schemas as loc_schemas

# 라우터 인스턴스 생성
router = APIRouter(
    tags=["Location Management (장소 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# locations 엔드포인트 (장소 계층 관리)
# =============================================================================
@router.post("/locations", response_model=loc_schemas.LocationDetail, status_code=status.HTTP_201_CREATED, summary="새 장소 생성")
async def create_location(
    location_create: loc_schemas.LocationCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    crud: loc_crud.CRUDLocation = Depends(deps.get_location_crud),
):
    """
    새로운 장소를 생성합니다.
    - `building`, `name`, `number`, `area`: 필수
    - `parentId`: 상위 장소 ID (선택 사항, 존재하지 않으면 404)
    """
    db_location = await crud.create(db, obj_in=location_create)
    return loc_schemas.LocationDetail.from_location(db_location, include_parent=True)


@router.get("/locations", response_model=PaginatedResult[loc_schemas.LocationListItem], summary="장소 목록 조회")
async def read_locations(
    type: Optional[str] = Query(None, description="roots: 최상위 장소만, children: 하위 장소만"),
    page: int = Query(1, ge=1, description="페이지 번호 (1부터)"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, description="페이지 크기 (MAX_PAGE_LIMIT 초과 시 MAX_PAGE_LIMIT로 제한)"),
    db: AsyncSession = Depends(deps.get_db_session),
    crud: loc_crud.CRUDLocation = Depends(deps.get_location_crud),
):
    """
    장소 목록을 페이지 단위로 조회합니다.
    각 항목에는 직계 상위 장소와 직계 하위 장소 목록이 포함됩니다.
    """
    limit = min(limit, settings.MAX_PAGE_LIMIT)
    result = await crud.find_all(db, type=type, page=page, limit=limit)
    return PaginatedResult[loc_schemas.LocationListItem](
        data=[loc_schemas.LocationListItem.model_validate(row) for row in result["data"]],
        metadata=result["metadata"],
    )


@router.get("/locations/{location_id}", response_model=loc_schemas.LocationDetail, summary="특정 장소 정보 조회")
async def read_location(
    location_id: int,
    include_children: bool = Query(False, alias="includeChildren", description="하위 장소 포함 여부"),
    db: AsyncSession = Depends(deps.get_db_session),
    crud: loc_crud.CRUDLocation = Depends(deps.get_location_crud),
):
    """
    특정 ID의 장소 정보를 조회합니다.
    - `includeChildren=false`: 직계 상위 장소를 포함합니다.
    - `includeChildren=true`: 설정된 최대 깊이(기본 3단계)까지 하위 장소를 포함합니다.
    """
    db_location = await crud.find_one(db, id=location_id, include_children=include_children)
    if include_children:
        return loc_schemas.LocationDetail.from_location(db_location, depth=crud.max_depth)
    return loc_schemas.LocationDetail.from_location(db_location, include_parent=True)


@router.patch("/locations/{location_id}", response_model=loc_schemas.LocationDetail, summary="장소 정보 업데이트")
async def update_location(
    location_id: int,
    location_update: loc_schemas.LocationUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    crud: loc_crud.CRUDLocation = Depends(deps.get_location_crud),
):
    """
    특정 ID의 장소 정보를 업데이트합니다. (부분 업데이트)
    - `parentId`: 생략 시 유지, null이면 루트로 변경, 정수이면 해당 장소로 이동
    - 자기 자신 또는 자신의 하위 장소를 상위로 지정하면 400을 반환합니다.
    """
    db_location = await crud.update(db, id=location_id, obj_in=location_update)
    return loc_schemas.LocationDetail.from_location(db_location, include_parent=True)


@router.delete("/locations/{location_id}", summary="장소 삭제")
async def delete_location(
    location_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    crud: loc_crud.CRUDLocation = Depends(deps.get_location_crud),
):
    """
    특정 ID의 장소를 삭제합니다.
    하위 장소는 삭제된 장소의 상위 장소로 이동하며, 상위 장소가 없었다면 최상위 장소가 됩니다.
    """
    return await crud.remove(db, id=location_id)
