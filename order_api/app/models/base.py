"""
SQLAlchemy Base 모델
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """SQLAlchemy Base 클래스 (모든 테이블 메타데이터 공유)"""
    pass
