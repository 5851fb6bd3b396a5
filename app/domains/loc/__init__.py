# app/domains/loc/__init__.py

"""
FastAPI 애플리케이션의 'loc' 도메인 패키지입니다.

'loc' 도메인은 건물, 층, 방과 같은 장소(Location)를 하나의 트리로 관리합니다.
각 장소는 최대 하나의 상위 장소를 가지며, 상위 장소가 없는 장소가 최상위(루트)입니다.

주요 서브모듈:
- `models.py`: locations 테이블에 매핑되는 SQLModel 정의 (자기 참조 parent/children 관계).
- `schemas.py`: 요청 및 응답 유효성 검사용 Pydantic 모델 (camelCase 별칭).
- `crud.py`: 트리 무결성(순환 차단, 삭제 시 승격, 조회 깊이 제한)을 보장하는 비동기 CRUD 로직.
- `routers.py`: /locations FastAPI API 엔드포인트 정의.
"""

# 패키지 메타데이터
__title__ = "Location Hierarchy Domain"
__description__ = "Manages a tree of physical locations (buildings, floors, rooms)."
__version__ = "0.1.0"
__all__ = []
