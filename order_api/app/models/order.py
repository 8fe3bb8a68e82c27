"""
주문 모델
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum
from .base import Base
from .order_status import OrderStatus

CENT = Decimal("0.01")


def round_to_cents(value: Optional[Decimal]) -> Optional[Decimal]:
    """금액을 소수점 2자리로 반올림 (ROUND_HALF_UP)"""
    if value is None:
        return None
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_total_amount(unit_price: Optional[Decimal], quantity: Optional[int]) -> Optional[Decimal]:
    """총액 계산 (단가 x 수량, 소수점 2자리)"""
    if unit_price is None or quantity is None:
        return None
    return (Decimal(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(100), nullable=False, index=True)
    product_name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    # 서비스 계층이 저장 직전에 calculate_total_amount 로 채운다
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum(OrderStatus, native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    shipping_address = Column(String(500), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Order(id={self.id}, customer_email='{self.customer_email}', status='{self.status}')>"
