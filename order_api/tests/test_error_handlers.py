from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from pydantic import ValidationError

from app.api.v1.endpoints.orders import get_order_service
from app.core.config import settings
from app.core.error_handlers import ERROR_TABLE, resolve_error
from app.core.exceptions import (
    InvalidOrderDataError,
    InvalidOrderStatusError,
    OrderManagerError,
    OrderNotFoundError,
    OrderNotModifiableError,
    OrderProcessingError,
)
from app.db.database import get_db
from app.db.seed import SAMPLE_ORDERS, seed_sample_orders
from app.main import app
from app.models import OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderCount
from app.services.order_service import OrderService

ORDERS_URL = f"{settings.API_PREFIX}/orders"
ERROR_KEYS = {"timestamp", "status", "error", "message", "path"}


class BrokenService:
    def get_order_by_id(self, order_id):
        raise RuntimeError("connection reset by peer: secret-host:5432")


class CorruptRowService:
    def get_all_orders(self):
        return [SimpleNamespace(id=1, customer_name="secret-row")]


@pytest.mark.parametrize(
    "exc, expected",
    [
        (OrderNotFoundError("x"), (404, "Order Not Found")),
        (InvalidOrderDataError("x"), (400, "Invalid Order Data")),
        (OrderNotModifiableError("x"), (409, "Order Not Modifiable")),
        (InvalidOrderStatusError("x"), (422, "Invalid Order Status Transition")),
        (OrderProcessingError("x"), (422, "Order Processing Failed")),
        (ValueError("x"), (400, "Invalid Request")),
        (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), (400, "Invalid Request")),
    ],
)
def test_resolve_error(exc, expected):
    assert resolve_error(exc) == expected


def test_unmapped_error_not_resolved():
    assert resolve_error(RuntimeError("boom")) is None
    assert RuntimeError not in ERROR_TABLE


def test_every_domain_error_is_mapped():
    for exc_class in OrderManagerError.__subclasses__():
        assert exc_class in ERROR_TABLE


def test_pydantic_validation_error_not_resolved():
    with pytest.raises(ValidationError) as excinfo:
        OrderCount.model_validate({})
    assert isinstance(excinfo.value, ValueError)
    assert resolve_error(excinfo.value) is None


def test_bad_row_in_response_is_500():
    app.dependency_overrides[get_order_service] = lambda: CorruptRowService()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get(ORDERS_URL, params={"page": -1})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"] == "Internal Server Error"
    assert "secret-row" not in response.text


def test_unexpected_error_hides_detail():
    app.dependency_overrides[get_order_service] = lambda: BrokenService()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get(f"{ORDERS_URL}/1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert set(body) == ERROR_KEYS
    assert body["error"] == "Internal Server Error"
    assert body["message"] == "An unexpected error occurred. Please try again later."
    assert "secret-host" not in response.text


def test_unknown_route_uses_error_shape(client):
    response = client.get(f"{settings.API_PREFIX}/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert set(body) == ERROR_KEYS
    assert body["error"] == "Not Found"
    assert body["path"] == f"{settings.API_PREFIX}/does-not-exist"


def test_method_not_allowed(client):
    response = client.post(f"{ORDERS_URL}/health")
    assert response.status_code == 405
    assert response.json()["error"] == "Method Not Allowed"


def test_error_body_has_no_field_errors_unless_validation(client):
    body = client.get(f"{ORDERS_URL}/777").json()
    assert "fieldErrors" not in body
    assert body["status"] == 404
    assert body["path"] == f"{ORDERS_URL}/777"


class TestStrictTransitionsOverHttp:
    @pytest.fixture
    def strict_client(self, session_factory):
        def override_get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        def strict_service(db=Depends(get_db)):
            return OrderService(OrderRepository(db), enforce_transitions=True)

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_order_service] = strict_service
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_invalid_transition_is_422(self, strict_client, order_payload):
        order_id = strict_client.post(ORDERS_URL, json=order_payload).json()["id"]

        response = strict_client.patch(f"{ORDERS_URL}/{order_id}/status", json="DELIVERED")

        assert response.status_code == 422
        assert response.json()["error"] == "Invalid Order Status Transition"

    def test_completed_order_update_is_409(self, strict_client, order_payload):
        order_id = strict_client.post(ORDERS_URL, json=dict(order_payload, status="CANCELLED")).json()["id"]

        response = strict_client.put(f"{ORDERS_URL}/{order_id}", json=order_payload)

        assert response.status_code == 409
        assert response.json()["error"] == "Order Not Modifiable"


def test_seed_sample_orders(db_session):
    assert seed_sample_orders(db_session) == len(SAMPLE_ORDERS)
    assert seed_sample_orders(db_session) == 0

    repository = OrderRepository(db_session)
    orders = repository.find_all()
    assert orders[0].total_amount == Decimal("1199.98")
    assert repository.count_by_status(OrderStatus.PROCESSING) == 0
    assert repository.count_by_status(OrderStatus.CANCELLED) == 1
