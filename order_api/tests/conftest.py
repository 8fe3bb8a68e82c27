"""
테스트 공통 픽스처 (인메모리 SQLite)
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import get_db
from app.main import app
from app.models import Base
from app.repositories.order_repository import OrderRepository
from app.services.order_service import OrderService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session):
    return OrderRepository(db_session)


@pytest.fixture
def order_service(repository):
    return OrderService(repository)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def order_data():
    """서비스 계층 입력용 주문 데이터 (snake_case)"""
    return {
        "customer_name": "John Doe",
        "customer_email": "john@example.com",
        "product_name": "Widget",
        "quantity": 2,
        "unit_price": Decimal("10.00"),
        "shipping_address": "123 Main St City",
    }


@pytest.fixture
def order_payload():
    """API 요청 본문 (camelCase)"""
    return {
        "customerName": "John Doe",
        "customerEmail": "john@example.com",
        "productName": "Widget",
        "quantity": 2,
        "unitPrice": 10.00,
        "shippingAddress": "123 Main St City",
    }
