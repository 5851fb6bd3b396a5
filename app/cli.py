# app/cli.py

"""
장소 계층 데이터베이스 관리용 커맨드라인 도구입니다.

    locations init-db          # 테이블 생성
    locations seed             # 예제 트리(건물 -> 층 -> 방) 생성
    locations show 1 --depth 2 # 특정 장소의 하위 트리 출력
"""

import asyncio
from typing import List, Optional

import typer
from fastapi import HTTPException
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import create_db_and_tables, engine, get_async_session_context
from app.domains.loc import crud as loc_crud
from app.domains.loc import models as loc_models
from app.domains.loc import schemas as loc_schemas

cli = typer.Typer(help="Location hierarchy maintenance commands.")


async def seed_sample_tree(db: AsyncSession, *, building: str = "A") -> List[loc_models.Location]:
    """
    건물 1개, 층 1개, 방 2개로 구성된 예제 트리를 엔진을 통해 생성하고 생성 순서대로 반환합니다.
    """
    crud = loc_crud.location
    root = await crud.create(db, obj_in=loc_schemas.LocationCreate(
        building=building, name=f"Building {building}", number=building, area=1200.0,
    ))
    floor = await crud.create(db, obj_in=loc_schemas.LocationCreate(
        building=building, name="Level 1", number=f"{building}-01", area=400.0, parent_id=root.id,
    ))
    rooms = [
        await crud.create(db, obj_in=loc_schemas.LocationCreate(
            building=building, name=name, number=f"{building}-01-{index:02d}", area=area, parent_id=floor.id,
        ))
        for index, (name, area) in enumerate([("Lobby", 80.5), ("Car Park", 80.62)], start=1)
    ]
    return [root, floor, *rooms]


def render_tree(node: loc_schemas.LocationDetail, indent: int = 0) -> List[str]:
    """LocationDetail 트리를 들여쓰기 된 텍스트 줄 목록으로 변환합니다."""
    lines = [f"{'  ' * indent}- [{node.id}] {node.building} / {node.name} ({node.number}, {node.area} m2)"]
    for child in node.children or []:
        lines.extend(render_tree(child, indent + 1))
    return lines


async def _init_db() -> None:
    await create_db_and_tables()
    await engine.dispose()


async def _seed(building: str) -> None:
    await create_db_and_tables()
    async with get_async_session_context() as db:
        created = await seed_sample_tree(db, building=building)
    await engine.dispose()
    for location in created:
        print(f"created [{location.id}] {location.name} (parent: {location.parent_id})")


async def _show(location_id: int, depth: Optional[int]) -> None:
    crud = loc_crud.CRUDLocation(max_depth=depth)
    async with get_async_session_context() as db:
        location = await crud.find_one(db, id=location_id, include_children=True)
        tree = loc_schemas.LocationDetail.from_location(location, depth=crud.max_depth)
    await engine.dispose()
    print("\n".join(render_tree(tree)))


@cli.command("init-db")
def init_db():
    """테이블을 생성합니다 (이미 있으면 건너뜀)."""
    asyncio.run(_init_db())
    print("Database tables are ready.")


@cli.command()
def seed(
    building: str = typer.Option("A", "--building", "-b", help="예제 트리의 건물 코드"),
):
    """예제 장소 트리를 생성합니다."""
    asyncio.run(_seed(building))


@cli.command()
def show(
    location_id: int = typer.Argument(..., help="출력할 장소 ID"),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=0, help="출력할 하위 깊이 (기본: LOCATION_MAX_DEPTH)"),
):
    """특정 장소와 그 하위 트리를 출력합니다."""
    try:
        asyncio.run(_show(location_id, depth))
    except HTTPException as e:
        print(f"오류: {e.detail}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
