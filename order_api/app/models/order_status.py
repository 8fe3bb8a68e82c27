"""
주문 상태 열거형
"""
import enum
from typing import Dict, FrozenSet


class OrderStatus(str, enum.Enum):
    """주문 라이프사이클 상태

    정상 흐름: PENDING -> CONFIRMED -> PROCESSING -> SHIPPED -> DELIVERED
    CANCELLED 는 진행 중인 모든 상태에서 전이 가능하다.
    DELIVERED, CANCELLED 는 완료(종결) 상태다.
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_completed(self) -> bool:
        """완료 상태 여부 (배송 완료 또는 취소)"""
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @property
    def is_active(self) -> bool:
        """진행 중인 상태 여부"""
        return not self.is_completed

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """정상 흐름 기준으로 target 상태로 전이 가능한지 확인"""
        if target == self:
            return True
        return target in _TRANSITIONS[self]

    @classmethod
    def names(cls) -> str:
        return ", ".join(status.value for status in cls)


_DESCRIPTIONS: Dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Order is pending processing",
    OrderStatus.CONFIRMED: "Order has been confirmed",
    OrderStatus.PROCESSING: "Order is being processed",
    OrderStatus.SHIPPED: "Order has been shipped",
    OrderStatus.DELIVERED: "Order has been delivered",
    OrderStatus.CANCELLED: "Order has been cancelled",
}

_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}
