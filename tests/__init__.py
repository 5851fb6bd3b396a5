# tests/__init__.py

"""
Location Hierarchy API의 테스트 스위트 패키지입니다.

- `core/`: 페이지네이션 등 공통 구성 요소 테스트.
- `domains/`: 'loc' 도메인의 엔진(CRUD) 및 API 엔드포인트 테스트.
- `test_main.py`, `test_cli.py`: 루트/헬스 체크 엔드포인트 및 관리용 CLI 테스트.
- `conftest.py`: 테스트마다 새로 만드는 인메모리 SQLite 데이터베이스, 세션, 클라이언트 픽스처.
"""

__title__ = "Location Hierarchy API Tests"
__description__ = "Test suite for the location hierarchy FastAPI application."
__version__ = "0.1.0"
__all__ = []
