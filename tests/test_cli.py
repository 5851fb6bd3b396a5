# tests/test_cli.py

"""
관리용 커맨드라인 도구(app.cli)의 예제 데이터 생성 및 트리 출력 로직 테스트입니다.
"""

import pytest

from app.cli import render_tree, seed_sample_tree
from app.domains.loc import crud as loc_crud
from app.domains.loc import schemas as loc_schemas


@pytest.mark.asyncio
async def test_seed_sample_tree_builds_hierarchy(db_session):
    root, floor, lobby, car_park = await seed_sample_tree(db_session, building="B")

    assert root.parent_id is None
    assert floor.parent_id == root.id
    assert lobby.parent_id == floor.id
    assert car_park.parent_id == floor.id
    assert car_park.area == pytest.approx(80.62)
    assert await loc_crud.location.count(db_session) == 4


@pytest.mark.asyncio
async def test_render_tree_indents_by_level(db_session):
    root, floor, lobby, car_park = await seed_sample_tree(db_session)
    crud = loc_crud.CRUDLocation(max_depth=2)

    found = await crud.find_one(db_session, id=root.id, include_children=True)
    lines = render_tree(loc_schemas.LocationDetail.from_location(found, depth=crud.max_depth))

    assert lines == [
        f"- [{root.id}] A / Building A (A, 1200.0 m2)",
        f"  - [{floor.id}] A / Level 1 (A-01, 400.0 m2)",
        f"    - [{lobby.id}] A / Lobby (A-01-01, 80.5 m2)",
        f"    - [{car_park.id}] A / Car Park (A-01-02, 80.62 m2)",
    ]


def test_render_tree_stops_at_unloaded_level():
    node = loc_schemas.LocationDetail(id=1, building="A", name="Solo", number="A-0", area=1.0)
    assert render_tree(node) == ["- [1] A / Solo (A-0, 1.0 m2)"]
