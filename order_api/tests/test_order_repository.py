from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from app.core.exceptions import InvalidOrderDataError, OrderProcessingError
from app.models import Order, OrderStatus
from app.repositories.order_repository import Page


def make_order(index=0, status=OrderStatus.PENDING, email=None, created_at=None):
    created_at = created_at or datetime(2025, 10, 16, 12, 0, 0) + timedelta(minutes=index)
    return Order(
        customer_name=f"Customer {index}",
        customer_email=email or f"customer{index}@example.com",
        product_name=f"Product {index}",
        quantity=index + 1,
        unit_price=Decimal("10.00"),
        total_amount=Decimal("10.00") * (index + 1),
        status=status,
        shipping_address=f"{index} Long Street Name",
        created_at=created_at,
        updated_at=created_at,
    )


def test_save_assigns_id(repository):
    saved = repository.save(make_order())
    assert saved.id is not None
    assert repository.find_by_id(saved.id) is saved
    assert repository.exists_by_id(saved.id)


def test_save_wraps_constraint_violation(repository):
    order = make_order()
    order.customer_name = None
    with pytest.raises(OrderProcessingError):
        repository.save(order)
    # 롤백 후에도 세션은 계속 사용 가능
    assert repository.count() == 0


def test_delete_by_id(repository):
    saved = repository.save(make_order())
    repository.delete_by_id(saved.id)
    assert repository.find_by_id(saved.id) is None
    assert not repository.exists_by_id(saved.id)


def test_find_all_ordered_by_id(repository):
    ids = [repository.save(make_order(i)).id for i in range(3)]
    assert [o.id for o in repository.find_all()] == ids


def test_find_page_metadata(repository):
    for i in range(15):
        repository.save(make_order(i))

    first = repository.find_page(0, 5, "createdAt", "desc")
    assert isinstance(first, Page)
    assert len(first.content) == 5
    assert first.total_elements == 15
    assert first.total_pages == 3
    assert first.has_next
    assert not first.has_previous
    # 최신순 정렬
    assert first.content[0].customer_name == "Customer 14"

    last = repository.find_page(2, 5, "createdAt", "desc")
    assert not last.has_next
    assert last.has_previous
    assert last.content[-1].customer_name == "Customer 0"


def test_find_page_ascending_by_snake_case_field(repository):
    for i in range(3):
        repository.save(make_order(i))
    page = repository.find_page(0, 10, "customer_name", "ASC")
    assert [o.customer_name for o in page.content] == ["Customer 0", "Customer 1", "Customer 2"]


def test_find_page_rejects_unknown_field(repository):
    with pytest.raises(InvalidOrderDataError):
        repository.find_page(0, 10, "password", "asc")


def test_find_page_beyond_last_page(repository):
    repository.save(make_order())
    page = repository.find_page(3, 5)
    assert page.content == []
    assert page.total_pages == 1
    assert not page.has_next


def test_find_and_count_by_status(repository):
    for i, status in enumerate(OrderStatus):
        repository.save(make_order(i, status=status))
    repository.save(make_order(10, status=OrderStatus.PENDING))

    pending = repository.find_by_status(OrderStatus.PENDING)
    assert len(pending) == 2
    assert all(o.status == OrderStatus.PENDING for o in pending)
    assert repository.count_by_status(OrderStatus.PENDING) == 2
    assert repository.count_by_status(OrderStatus.SHIPPED) == 1


def test_find_by_customer_email_ignores_case(repository):
    repository.save(make_order(0, email="Jane.Doe@Example.com"))
    repository.save(make_order(1, email="other@example.com"))

    found = repository.find_by_customer_email("jane.doe@example.COM")
    assert [o.customer_email for o in found] == ["Jane.Doe@Example.com"]
    assert repository.find_by_customer_email("jane@example.com") == []


def test_find_created_between_includes_boundaries(repository):
    start = datetime(2025, 10, 16, 12, 0, 0)
    repository.save(make_order(0, created_at=start))
    repository.save(make_order(1, created_at=start + timedelta(hours=1)))
    repository.save(make_order(2, created_at=start + timedelta(hours=2)))
    repository.save(make_order(3, created_at=start - timedelta(seconds=5)))

    found = repository.find_created_between(start, start + timedelta(hours=1))
    assert [o.customer_name for o in found] == ["Customer 0", "Customer 1"]
