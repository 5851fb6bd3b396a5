# app/domains/loc/crud.py

"""
'loc' 도메인 (장소 계층)과 관련된 CRUD 로직을 담당하는 모듈입니다.

트리 구조의 무결성은 이 모듈이 전담합니다.
 - 생성 시 상위 장소 존재 여부 검증
 - 상위 장소 변경 시 순환 참조(자기 자신의 하위로 이동) 차단
 - 삭제 시 하위 장소를 삭제 대상의 상위 장소로 승격
 - 하위 장소 조회 깊이 제한
"""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fastapi import HTTPException, status

from app.core.config import settings
from app.core.crud_base import CRUDBase
from app.core.pagination import build_pagination_metadata, calculate_skip
from . import models as loc_models
from . import schemas as loc_schemas


# 로거 인스턴스 생성: 파일의 최상단에 위치하여 모듈 전체에서 사용 가능하도록 합니다.
logger = logging.getLogger(__name__)


# =============================================================================
# 장소 (Location) CRUD
# =============================================================================
class CRUDLocation(
    CRUDBase[
        loc_models.Location,
        loc_schemas.LocationCreate,
        loc_schemas.LocationUpdate
    ]
):
    def __init__(self, *, max_depth: Optional[int] = None, logger: logging.Logger = logger):
        super().__init__(model=loc_models.Location)
        self.max_depth = settings.LOCATION_MAX_DEPTH if max_depth is None else max_depth
        self.logger = logger

    # -------------------------------------------------------------------------
    # 관계 로딩 옵션
    # -------------------------------------------------------------------------
    def children_loader(self, depth: int) -> List[Any]:
        """
        children, children.children, ... 을 depth 단계까지 즉시 로딩하는 옵션을 만듭니다.
        depth가 0이면 하위 장소를 로드하지 않습니다.
        """
        if depth <= 0:
            return []
        loader = selectinload(self.model.children)
        for _ in range(depth - 1):
            loader = loader.selectinload(self.model.children)
        return [loader]

    async def get_with_parent(self, db: AsyncSession, id: int) -> Optional[loc_models.Location]:
        """직계 상위 장소를 함께 로드하여 조회합니다."""
        return await self.get(db, id, options=[selectinload(self.model.parent)])

    def _not_found(self, id: int, *, what: str = "Location") -> HTTPException:
        self.logger.warning(f"{what} with ID {id} not found")
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{what} with ID {id} not found"
        )

    # -------------------------------------------------------------------------
    # 생성
    # -------------------------------------------------------------------------
    async def create(self, db: AsyncSession, *, obj_in: loc_schemas.LocationCreate) -> loc_models.Location:
        """상위 장소가 지정된 경우 존재 여부를 확인하고 생성합니다."""
        location_data = obj_in.model_dump(exclude={"parent_id"})
        db_obj = self.model(**location_data)

        if obj_in.parent_id is not None:
            parent = await self.get(db, obj_in.parent_id)
            if parent is None:
                raise self._not_found(obj_in.parent_id, what="Parent Location")
            db_obj.parent_id = parent.id

        try:
            db_obj = await self.save(db, db_obj=db_obj)
        except SQLAlchemyError:
            await db.rollback()
            self.logger.error("Failed to create location", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Failed to create location"
            )

        self.logger.info(f"Location created with ID {db_obj.id}")
        return await self.get_with_parent(db, db_obj.id)

    # -------------------------------------------------------------------------
    # 목록 조회
    # -------------------------------------------------------------------------
    async def find_all(
        self,
        db: AsyncSession,
        *,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """
        페이지 단위로 장소 목록을 조회합니다.
        - `type="roots"`: 상위 장소가 없는 장소만
        - `type="children"`: 상위 장소가 있는 장소만
        - 그 외: 필터 없음
        """
        conditions = []
        if type == "roots":
            conditions.append(self.model.parent_id.is_(None))
        elif type == "children":
            conditions.append(self.model.parent_id.is_not(None))

        try:
            rows, total = await self.get_multi_and_count(
                db,
                conditions=conditions,
                options=[selectinload(self.model.parent), selectinload(self.model.children)],
                skip=calculate_skip(page, limit),
                limit=limit,
            )
        except SQLAlchemyError:
            await db.rollback()
            self.logger.error("Failed to retrieve locations", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Failed to retrieve locations"
            )

        return {
            "data": rows,
            "metadata": build_pagination_metadata(total, page, limit),
        }

    # -------------------------------------------------------------------------
    # 단건 조회
    # -------------------------------------------------------------------------
    async def find_one(
        self, db: AsyncSession, *, id: int, include_children: bool = False
    ) -> loc_models.Location:
        """
        ID로 장소를 조회합니다.
        include_children이 True이면 max_depth 단계까지의 하위 장소를 함께 로드하고,
        False이면 직계 상위 장소만 로드합니다.
        """
        if include_children:
            options = self.children_loader(self.max_depth)
        else:
            options = [selectinload(self.model.parent)]

        location = await self.get(db, id, options=options)
        if location is None:
            raise self._not_found(id)
        return location

    # -------------------------------------------------------------------------
    # 순환 참조 검사
    # -------------------------------------------------------------------------
    async def assert_not_ancestor(
        self, db: AsyncSession, *, location_id: int, candidate_parent_id: int
    ) -> None:
        """
        candidate_parent_id 에서 루트 방향으로 parent_id를 한 단계씩 조회하며 올라갑니다.
        도중에 location_id를 만나면 location_id를 그 하위로 옮기는 것은 순환이므로 400을 발생시킵니다.

        거쳐 간 조상 행은 모두 FOR UPDATE로 잠기며 커밋까지 유지됩니다.
        동시에 겹치는 계층을 옮기는 트랜잭션은 대기하거나 교착 상태로 중단됩니다.

        이미 저장된 데이터에 순환이 있는 경우를 대비해 방문 집합과 전체 행 수로 탐색을 제한합니다.
        """
        max_steps = await self.count(db)
        visited = set()
        current_id: Optional[int] = candidate_parent_id

        while current_id is not None:
            if current_id == location_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Circular reference detected. Cannot set this parent."
                )
            if current_id in visited or len(visited) >= max_steps:
                self.logger.error(
                    f"Ancestor walk from location {candidate_parent_id} did not reach a root "
                    f"(stopped at {current_id} after {len(visited)} steps)"
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="Location hierarchy is corrupted"
                )
            visited.add(current_id)

            result = await db.execute(
                select(self.model.parent_id).where(self.model.id == current_id).with_for_update()
            )
            current_id = result.scalar_one_or_none()

    # -------------------------------------------------------------------------
    # 수정
    # -------------------------------------------------------------------------
    async def update(
        self, db: AsyncSession, *, id: int, obj_in: loc_schemas.LocationUpdate
    ) -> loc_models.Location:
        """
        장소 정보를 수정합니다.
        대상 행과 새 상위 장소 행을 잠근 상태에서 순환 검사와 저장을 하나의 트랜잭션으로 수행합니다.
        """
        try:
            location = await self.get(db, id, for_update=True)
            if location is None:
                raise self._not_found(id)

            new_parent_id = obj_in.parent_id
            if new_parent_id is not None and new_parent_id != location.parent_id:
                parent = await self.get(db, new_parent_id, for_update=True)
                if parent is None:
                    raise self._not_found(new_parent_id, what="Parent Location")

                await self.assert_not_ancestor(db, location_id=id, candidate_parent_id=parent.id)
                location.parent_id = parent.id
            elif obj_in.parent_id_provided and new_parent_id is None:
                location.parent_id = None

            for field, value in obj_in.scalar_changes().items():
                setattr(location, field, value)

            await self.save(db, db_obj=location)
        except HTTPException:
            await db.rollback()
            raise
        except SQLAlchemyError:
            await db.rollback()
            self.logger.error(f"Failed to update location with ID {id}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Failed to update location with ID {id}"
            )

        self.logger.info(f"Location with ID {id} updated successfully")
        return await self.get_with_parent(db, id)

    # -------------------------------------------------------------------------
    # 삭제
    # -------------------------------------------------------------------------
    async def remove(self, db: AsyncSession, *, id: int) -> Dict[str, str]:
        """
        장소를 삭제합니다.
        하위 장소는 삭제 대상의 상위 장소로 승격되며, 삭제 대상이 루트였다면 하위 장소는 루트가 됩니다.
        승격과 삭제는 하나의 트랜잭션으로 커밋됩니다.
        """
        try:
            location = await self.get(
                db, id,
                options=[selectinload(self.model.parent), selectinload(self.model.children)],
                for_update=True,
            )
            if location is None:
                raise self._not_found(id)

            former_parent_id = location.parent_id
            child_count = len(location.children)

            if child_count:
                await db.execute(
                    update(self.model)
                    .where(self.model.parent_id == id)
                    .values(parent_id=former_parent_id)
                    .execution_options(synchronize_session="fetch")
                )
            await db.execute(
                delete(self.model)
                .where(self.model.id == id)
                .execution_options(synchronize_session="fetch")
            )
            await db.commit()
        except HTTPException:
            await db.rollback()
            raise
        except SQLAlchemyError:
            await db.rollback()
            self.logger.error(f"Failed to delete location with ID {id}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Failed to delete location with ID {id}"
            )

        if child_count:
            self.logger.info(
                f"Promoted {child_count} child location(s) of {id} to "
                f"{'parent ' + str(former_parent_id) if former_parent_id is not None else 'root'}"
            )
        self.logger.info(f"Location with ID {id} deleted successfully")
        return {"message": "Location deleted successfully."}


location = CRUDLocation()
