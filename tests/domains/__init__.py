# tests/domains/__init__.py

"""
도메인별 테스트 패키지입니다.

- `test_loc_crud.py`: 장소 계층 엔진(CRUDLocation)을 세션에 직접 호출하는 테스트.
- `test_loc_n.py`: /api/v1/locations 엔드포인트 통합 테스트.
"""

__title__ = "Location Hierarchy Domain Tests"
__all__ = []
