# app/__init__.py

"""
Location Hierarchy FastAPI 애플리케이션의 메인 패키지입니다.

이 패키지는 건물(Building), 층, 방과 같은 물리적 장소(Location)를
트리 구조로 관리하는 API 서버를 구성합니다.
FastAPI 애플리케이션의 진입점 (main.py)과
공통 설정, 데이터베이스 연결을 담는 core 서브패키지,
그리고 장소 계층 도메인을 담는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "Location Hierarchy API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # API 라우트의 공통 접두사 (main.py에서 적용)

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Location hierarchy (building / room / sub-area) management API backend."
__license__ = "MIT"
__all__ = []
