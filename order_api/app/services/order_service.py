"""
주문 관련 서비스 로직
"""
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
import structlog

from app.core.exceptions import (
    InvalidOrderDataError,
    InvalidOrderStatusError,
    OrderNotFoundError,
    OrderNotModifiableError,
)
from app.models.order import Order, calculate_total_amount, round_to_cents
from app.models.order_status import OrderStatus
from app.repositories.order_repository import OrderRepository, Page

logger = structlog.get_logger()

# 수정 가능한 필드 (id, total_amount, 타임스탬프는 호출자가 지정할 수 없음)
MUTABLE_FIELDS = (
    "customer_name",
    "customer_email",
    "product_name",
    "quantity",
    "unit_price",
    "shipping_address",
)


class OrderService:
    def __init__(self, repository: OrderRepository, enforce_transitions: bool = False):
        self.repository = repository
        self.enforce_transitions = enforce_transitions

    def create_order(self, order_data: Dict) -> Order:
        """새 주문 생성"""
        order = Order(**{key: order_data.get(key) for key in MUTABLE_FIELDS})
        order.status = order_data.get("status") or OrderStatus.PENDING
        self._validate(order)

        logger.info("Creating new order", customer_email=order.customer_email)
        now = datetime.now()
        order.created_at = now
        saved = self._save(order, now)
        logger.info("Order created successfully", order_id=saved.id)
        return saved

    def get_all_orders(self) -> List[Order]:
        """모든 주문 조회"""
        logger.info("Retrieving all orders")
        return self.repository.find_all()

    def get_orders_page(self, page: int, size: int, sort_by: str = "createdAt", sort_dir: str = "desc") -> Page:
        """페이징 주문 조회"""
        logger.info("Retrieving orders page", page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
        return self.repository.find_page(page, size, sort_by, sort_dir)

    def get_order_by_id(self, order_id: int) -> Order:
        """주문 ID로 주문 조회"""
        logger.info("Retrieving order", order_id=order_id)
        order = self.repository.find_by_id(order_id)
        if order is None:
            logger.warning("Order not found", order_id=order_id)
            raise OrderNotFoundError.for_id(order_id)
        return order

    def update_order(self, order_id: int, order_data: Dict) -> Order:
        """주문 전체 정보 업데이트"""
        logger.info("Updating order", order_id=order_id)
        order = self.get_order_by_id(order_id)

        new_status = order_data.get("status") or order.status
        if self.enforce_transitions:
            if order.status.is_completed:
                raise OrderNotModifiableError(
                    f"Order {order_id} is {order.status.value} and can no longer be modified"
                )
            self._check_transition(order, new_status)

        # 세션이 추적 중인 주문은 검증을 통과한 값으로만 변경한다
        candidate = Order(**{key: order_data.get(key) for key in MUTABLE_FIELDS}, status=new_status)
        self._validate(candidate)

        for key in MUTABLE_FIELDS:
            setattr(order, key, getattr(candidate, key))
        order.status = new_status

        saved = self._save(order, datetime.now())
        logger.info("Order updated successfully", order_id=saved.id)
        return saved

    def update_order_status(self, order_id: int, status: OrderStatus) -> Order:
        """주문 상태만 업데이트"""
        logger.info("Updating order status", order_id=order_id, status=status.value)
        order = self.get_order_by_id(order_id)
        if self.enforce_transitions:
            self._check_transition(order, status)

        order.status = status
        saved = self._save(order, datetime.now())
        logger.info("Order status updated successfully", order_id=saved.id, status=status.value)
        return saved

    def delete_order(self, order_id: int) -> None:
        """주문 삭제"""
        logger.info("Deleting order", order_id=order_id)
        if not self.repository.exists_by_id(order_id):
            logger.warning("Attempted to delete non-existent order", order_id=order_id)
            raise OrderNotFoundError.for_id(order_id)
        self.repository.delete_by_id(order_id)
        logger.info("Order deleted successfully", order_id=order_id)

    def get_orders_by_customer_email(self, customer_email: str) -> List[Order]:
        """고객 이메일로 주문 조회"""
        logger.info("Retrieving orders for customer", customer_email=customer_email)
        return self.repository.find_by_customer_email(customer_email)

    def get_orders_by_status(self, status: OrderStatus) -> List[Order]:
        """상태별 주문 조회"""
        logger.info("Retrieving orders by status", status=status.value)
        return self.repository.find_by_status(status)

    def get_orders_by_date_range(self, start_date: datetime, end_date: datetime) -> List[Order]:
        """생성 일시 범위로 주문 조회"""
        logger.info("Retrieving orders by date range", start_date=start_date.isoformat(), end_date=end_date.isoformat())
        if start_date > end_date:
            raise InvalidOrderDataError("Start date must be before or equal to end date")
        return self.repository.find_created_between(start_date, end_date)

    def count_orders_by_status(self, status: OrderStatus) -> int:
        """상태별 주문 건수"""
        logger.info("Counting orders by status", status=status.value)
        return self.repository.count_by_status(status)

    def _save(self, order: Order, now: datetime) -> Order:
        # 단가는 센트 단위로 맞추고 총액은 항상 저장 직전에 다시 계산한다
        order.unit_price = round_to_cents(order.unit_price)
        order.total_amount = calculate_total_amount(order.unit_price, order.quantity)
        order.updated_at = now
        return self.repository.save(order)

    def _check_transition(self, order: Order, new_status: OrderStatus) -> None:
        if not order.status.can_transition_to(new_status):
            logger.warning(
                "Rejected status transition",
                order_id=order.id,
                current=order.status.value,
                requested=new_status.value,
            )
            raise InvalidOrderStatusError(
                f"Cannot change order {order.id} status from {order.status.value} to {new_status.value}"
            )

    @staticmethod
    def _validate(order: Optional[Order]) -> None:
        """필수값 검증 (요청 스키마 검증과 별도로 한 번 더 확인)"""
        if order is None:
            raise InvalidOrderDataError("Order cannot be null")
        if _is_blank(order.customer_name):
            raise InvalidOrderDataError("Customer name is required")
        if _is_blank(order.customer_email):
            raise InvalidOrderDataError("Customer email is required")
        if _is_blank(order.product_name):
            raise InvalidOrderDataError("Product name is required")
        if order.quantity is None or order.quantity <= 0:
            raise InvalidOrderDataError("Quantity must be greater than 0")
        if order.unit_price is None or Decimal(order.unit_price) <= 0:
            raise InvalidOrderDataError("Unit price must be greater than 0")
        if _is_blank(order.shipping_address):
            raise InvalidOrderDataError("Shipping address is required")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()
