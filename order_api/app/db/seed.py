"""
샘플 주문 데이터 적재
"""
from decimal import Decimal
from sqlalchemy.orm import Session
import structlog

from app.models import OrderStatus
from app.repositories.order_repository import OrderRepository
from app.services.order_service import OrderService

logger = structlog.get_logger()

SAMPLE_ORDERS = [
    {
        "customer_name": "John Doe",
        "customer_email": "john.doe@example.com",
        "product_name": "Smartphone Samsung Galaxy S24",
        "quantity": 2,
        "unit_price": Decimal("599.99"),
        "status": OrderStatus.PENDING,
        "shipping_address": "123 Main St, Apt 4B, New York, NY 10001",
    },
    {
        "customer_name": "Alice Smith",
        "customer_email": "alice.smith@example.com",
        "product_name": "Laptop Dell XPS 13",
        "quantity": 1,
        "unit_price": Decimal("1299.99"),
        "status": OrderStatus.CONFIRMED,
        "shipping_address": "789 Pine St, Unit 5A, Chicago, IL 60601",
    },
    {
        "customer_name": "Bob Johnson",
        "customer_email": "bob.johnson@example.com",
        "product_name": "Tablet iPad Air",
        "quantity": 3,
        "unit_price": Decimal("699.99"),
        "status": OrderStatus.SHIPPED,
        "shipping_address": "456 Oak Ave, Suite 12, Los Angeles, CA 90210",
    },
    {
        "customer_name": "Emily Brown",
        "customer_email": "emily.brown@example.com",
        "product_name": "Headphones Sony WH-1000XM5",
        "quantity": 1,
        "unit_price": Decimal("349.99"),
        "status": OrderStatus.DELIVERED,
        "shipping_address": "321 Elm Dr, Floor 3, Miami, FL 33101",
    },
    {
        "customer_name": "Michael Davis",
        "customer_email": "michael.davis@example.com",
        "product_name": "Smart Watch Apple Series 9",
        "quantity": 2,
        "unit_price": Decimal("449.99"),
        "status": OrderStatus.CANCELLED,
        "shipping_address": "654 Maple Ln, Apt 8C, Seattle, WA 98101",
    },
]


def seed_sample_orders(db: Session) -> int:
    """주문 테이블이 비어 있을 때만 샘플 주문 생성, 생성 건수 반환"""
    repository = OrderRepository(db)
    if repository.count() > 0:
        logger.info("Skipping sample data, orders table is not empty")
        return 0

    service = OrderService(repository)
    for order_data in SAMPLE_ORDERS:
        service.create_order(dict(order_data))

    logger.info("Sample orders created", count=len(SAMPLE_ORDERS))
    return len(SAMPLE_ORDERS)
