# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 장소 계층 엔진 인스턴스 제공 (get_location_crud).
"""

from typing import AsyncGenerator
from sqlmodel.ext.asyncio.session import AsyncSession

# 실제 데이터베이스 세션 제너레이터 임포트
from app.core.database import get_session as get_main_app_session
from app.domains.loc import crud as loc_crud


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    app.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


def get_location_crud() -> loc_crud.CRUDLocation:
    """
    라우터가 사용할 장소 계층 엔진을 반환합니다.
    테스트에서는 dependency_overrides로 다른 설정(max_depth, logger)의 인스턴스를 주입할 수 있습니다.
    """
    return loc_crud.location
