"""
애플리케이션 설정 관리
"""
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 애플리케이션 정보
    APP_NAME: str = "Order Management System"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    API_PREFIX: str = Field(default="/api/v1", description="API 기본 경로")
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # 데이터베이스 설정
    DATABASE_URL: str = Field(
        default="sqlite:///./orders.db",
        description="Database URL (SQLite, PostgreSQL 등 SQLAlchemy URL)"
    )
    DB_ECHO: bool = False
    # 커넥션 풀 설정 (SQLite 이외의 데이터베이스에만 적용)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = Field(default=30, description="커넥션 대기 시간(초)")
    DB_POOL_RECYCLE: int = Field(default=1800, description="커넥션 재사용 주기(초)")

    # 로깅 설정
    LOG_LEVEL: str = "INFO"

    # 주문 상태 전이 검증 (기본값: 제한 없음)
    ENFORCE_STATUS_TRANSITIONS: bool = False

    # 시작 시 샘플 주문 데이터 적재
    SEED_SAMPLE_DATA: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


# 전역 설정 인스턴스
settings = Settings()
