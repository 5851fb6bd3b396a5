# app/domains/loc/models.py

"""
'loc' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
 - 장소(Location)는 건물 -> 층/방 -> 세부 구역으로 이어지는 트리(forest) 구조
 - 계층은 parent_id 외래 키 하나로만 표현되며, children은 그 역관계입니다.

각 클래스는 해당 테이블의 구조와 컬럼을 Python 객체로 매핑하며,
SQLModel의 Field 및 Relationship을 사용하여 데이터베이스 제약 조건 및 관계를 정의합니다.
"""

from typing import Optional, List
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey, Float, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# locations 테이블 모델
# =============================================================================
class LocationBase(SQLModel):
    """
    locations 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="장소 고유 ID")
    building: str = Field(max_length=100, description="건물 (예: A동)")
    name: str = Field(max_length=100, description="장소 명칭 (예: 주차장, 회의실)")
    number: str = Field(max_length=50, description="장소 번호 (예: A-CarPark, A-01-02)")
    area: float = Field(sa_column=Column(Float, nullable=False), description="면적 (0 이상)")
    # 상위 장소가 삭제되면 DB 수준에서는 NULL 처리됩니다.
    # (엔진은 삭제 전에 하위 장소를 조부모로 먼저 승격시킵니다)
    parent_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("locations.id", onupdate="CASCADE", ondelete="SET NULL"), nullable=True, index=True),
        description="상위 장소 ID (없으면 루트)"
    )

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


class Location(LocationBase, table=True):
    """
    locations 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "locations"
    __table_args__ = (
        CheckConstraint("area >= 0", name="ck_locations_area_non_negative"),
    )

    # 계층 관계: 자기 자신을 참조
    # parent는 다대일 관계. 삭제 cascade는 걸지 않습니다 (하위 장소는 승격 대상).
    parent: Optional["Location"] = Relationship(
        back_populates="children",
        sa_relationship_kwargs={
            "remote_side": "Location.id",
            "foreign_keys": "Location.parent_id",
        }
    )
    # children은 parent의 역관계이며 직접 수정하지 않습니다.
    children: List["Location"] = Relationship(
        back_populates="parent",
        sa_relationship_kwargs={
            "foreign_keys": "Location.parent_id",
            "order_by": "Location.id",
            "passive_deletes": True,
        }
    )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
