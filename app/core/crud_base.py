# app/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.

도메인 규칙(불변식)은 알지 못하는 순수 저장소 어댑터 역할만 수행하며,
계층 구조 검증 같은 비즈니스 로직은 각 도메인의 CRUD 클래스가 담당합니다.
모든 메서드는 비동기(async) 환경에서 동작합니다.
"""

from typing import Any, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(
        self,
        db: AsyncSession,
        id: Any,
        *,
        options: Sequence[Any] = (),
        for_update: bool = False,
    ) -> Optional[ModelType]:
        """
        ID를 기준으로 단일 레코드를 조회합니다.

        - `options`: selectinload 등 관계 로딩 옵션
        - `for_update`: True이면 SELECT ... FOR UPDATE로 행 잠금을 겁니다.

        세션에 이미 올라와 있는 객체라도 DB 값으로 다시 채웁니다 (populate_existing).
        """
        statement = select(self.model).where(self.model.id == id)
        if options:
            statement = statement.options(*options)
        if for_update:
            statement = statement.with_for_update()
        statement = statement.execution_options(populate_existing=True)
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def count(self, db: AsyncSession, *conditions: Any) -> int:
        """조건을 만족하는 레코드 수를 반환합니다."""
        statement = select(func.count()).select_from(self.model)
        if conditions:
            statement = statement.where(*conditions)
        result = await db.execute(statement)
        return result.scalar_one()

    async def get_multi_and_count(
        self,
        db: AsyncSession,
        *,
        conditions: Sequence[Any] = (),
        options: Sequence[Any] = (),
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[ModelType], int]:
        """
        조건에 맞는 레코드를 skip/limit 범위로 조회하고, 전체 건수를 함께 반환합니다.
        정렬 기준은 id 오름차순입니다 (페이지 간 순서 안정성 보장).
        """
        total = await self.count(db, *conditions)

        statement = select(self.model)
        if conditions:
            statement = statement.where(*conditions)
        if options:
            statement = statement.options(*options)
        statement = statement.order_by(self.model.id).offset(skip).limit(limit)
        statement = statement.execution_options(populate_existing=True)

        result = await db.execute(statement)
        return list(result.scalars().all()), total

    async def save(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        """
        객체를 세션에 추가하고 커밋한 뒤, DB에서 생성된 값(id, 타임스탬프)을 다시 읽어옵니다.
        예외 처리는 호출하는 도메인 CRUD에서 담당합니다.
        """
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
