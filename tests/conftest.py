# tests/conftest.py

import os
from typing import AsyncGenerator, Awaitable, Callable, Optional

# 앱 모듈을 임포트하기 전에 테스트용 설정을 환경 변수로 지정합니다.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["APP_ENV"] = "testing"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel, select  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from app.main import app as main_app  # noqa: E402
from app.core import dependencies as deps  # noqa: E402
from app.core.database import get_session  # noqa: E402
from app.domains.loc import models as loc_models  # noqa: E402


# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 독립된 인메모리 SQLite 데이터베이스를 사용합니다.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 연결마다 외래 키 제약을 켜 주어야 합니다.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    테스트 함수마다 새 인메모리 데이터베이스를 만들고 모든 테이블을 생성합니다.
    StaticPool로 하나의 연결을 공유하므로 세션이 바뀌어도 같은 데이터를 봅니다.
    """
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """테스트용 비동기 데이터베이스 세션을 제공합니다."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 장소 생성 팩토리 ---
# 역할: 엔진(CRUDLocation)을 거치지 않고 locations 테이블에 직접 행을 만듭니다.
# 목적: API/엔진 테스트의 사전 데이터 준비.
@pytest.fixture(scope="function")
def location_factory(db_session: AsyncSession) -> Callable[..., Awaitable[loc_models.Location]]:
    async def _create_location(
        name: str,
        *,
        parent: Optional[loc_models.Location] = None,
        building: str = "A",
        number: Optional[str] = None,
        area: float = 10.0,
    ) -> loc_models.Location:
        location = loc_models.Location(
            building=building,
            name=name,
            number=number or f"{building}-{name}",
            area=area,
            parent_id=parent.id if parent else None,
        )
        db_session.add(location)
        await db_session.commit()
        await db_session.refresh(location)
        return location
    return _create_location


@pytest.fixture(scope="function")
def parent_id_of(db_session: AsyncSession) -> Callable[[int], Awaitable[Optional[int]]]:
    """DB에 저장된 parent_id 값을 직접 조회하는 헬퍼를 반환합니다."""
    async def _parent_id_of(location_id: int) -> Optional[int]:
        result = await db_session.execute(
            select(loc_models.Location.parent_id).where(loc_models.Location.id == location_id)
        )
        return result.scalar_one()
    return _parent_id_of


# --- 비동기 테스트 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient 인스턴스를 생성하고, 테스트용 비동기 DB 세션을 주입합니다.
    """

    def override_get_session_and_dependency():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()

    try:
        main_app.dependency_overrides[get_session] = override_get_session_and_dependency
        main_app.dependency_overrides[deps.get_db_session] = override_get_session_and_dependency

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client

    finally:
        # 클라이언트 픽스처가 끝나면 오버라이드를 반드시 복원해야 합니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)
