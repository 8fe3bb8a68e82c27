"""
데이터베이스 엔진 및 세션 관리
"""
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
import structlog

from app.core.config import settings
from app.models import Base

logger = structlog.get_logger()


def build_engine(database_url: str) -> Engine:
    """설정값 기반 SQLAlchemy 엔진 생성"""
    if database_url.startswith("sqlite"):
        # SQLite 는 요청마다 다른 스레드에서 커넥션을 사용한다
        return create_engine(
            database_url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_tables(bind: Engine = None) -> None:
    """테이블 생성 (이미 존재하면 건너뜀)"""
    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Generator[Session, None, None]:
    """요청 단위 DB 세션 의존성"""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
