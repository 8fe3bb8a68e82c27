"""
주문 저장소 (데이터 접근 계층)
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog

from app.core.exceptions import InvalidOrderDataError, OrderProcessingError
from app.models.order import Order
from app.models.order_status import OrderStatus

logger = structlog.get_logger()

# 정렬 가능한 필드 (JSON 필드명 -> 컬럼)
SORTABLE_FIELDS = {
    "id": Order.id,
    "customerName": Order.customer_name,
    "customerEmail": Order.customer_email,
    "productName": Order.product_name,
    "quantity": Order.quantity,
    "unitPrice": Order.unit_price,
    "totalAmount": Order.total_amount,
    "status": Order.status,
    "shippingAddress": Order.shipping_address,
    "createdAt": Order.created_at,
    "updatedAt": Order.updated_at,
}
SORTABLE_FIELDS.update({column.key: column for column in list(SORTABLE_FIELDS.values())})

# 날짜 범위 조회 시 경계값 포함을 위한 여유 시간
BOUNDARY_PADDING = timedelta(seconds=1)


@dataclass
class Page:
    """페이징 조회 결과"""
    content: List[Order]
    number: int
    size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def save(self, order: Order) -> Order:
        """주문 저장 (신규/수정 공통)"""
        self.db.add(order)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Order violates a storage constraint", error=str(e.orig))
            raise OrderProcessingError("Order could not be saved: data violates a storage constraint") from e
        self.db.refresh(order)
        return order

    def find_by_id(self, order_id: int) -> Optional[Order]:
        """ID로 주문 조회"""
        return self.db.get(Order, order_id)

    def exists_by_id(self, order_id: int) -> bool:
        stmt = select(func.count()).select_from(Order).where(Order.id == order_id)
        return self.db.scalar(stmt) > 0

    def delete_by_id(self, order_id: int) -> None:
        order = self.find_by_id(order_id)
        if order is not None:
            self.db.delete(order)
            self.db.commit()

    def find_all(self) -> List[Order]:
        """모든 주문 조회"""
        return list(self.db.scalars(select(Order).order_by(Order.id)))

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Order))

    def find_page(self, page: int, size: int, sort_by: str = "createdAt", sort_dir: str = "desc") -> Page:
        """페이징 및 정렬 조회 (page 는 0부터 시작)"""
        column = SORTABLE_FIELDS.get(sort_by)
        if column is None:
            raise InvalidOrderDataError(f"Invalid sort field: '{sort_by}'")

        descending = sort_dir.lower() == "desc"
        ordering = [column.desc(), Order.id.desc()] if descending else [column.asc(), Order.id.asc()]

        stmt = select(Order).order_by(*ordering).offset(page * size).limit(size)
        content = list(self.db.scalars(stmt))
        return Page(content=content, number=page, size=size, total_elements=self.count())

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        """상태별 주문 조회"""
        stmt = select(Order).where(Order.status == status).order_by(Order.id)
        return list(self.db.scalars(stmt))

    def count_by_status(self, status: OrderStatus) -> int:
        stmt = select(func.count()).select_from(Order).where(Order.status == status)
        return self.db.scalar(stmt)

    def find_by_customer_email(self, email: str) -> List[Order]:
        """고객 이메일로 조회 (대소문자 무시)"""
        stmt = (
            select(Order)
            .where(func.lower(Order.customer_email) == email.lower())
            .order_by(Order.id)
        )
        return list(self.db.scalars(stmt))

    def find_created_between(self, start: datetime, end: datetime) -> List[Order]:
        """생성 일시 범위 조회 (양 끝 포함)"""
        stmt = (
            select(Order)
            .where(
                Order.created_at > start - BOUNDARY_PADDING,
                Order.created_at < end + BOUNDARY_PADDING,
            )
            .order_by(Order.id)
        )
        return list(self.db.scalars(stmt))
