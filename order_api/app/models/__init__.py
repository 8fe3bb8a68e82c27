# SQLAlchemy 모델 패키지
from .base import Base
from .order import Order, calculate_total_amount, round_to_cents
from .order_status import OrderStatus

__all__ = ["Base", "Order", "OrderStatus", "calculate_total_amount", "round_to_cents"]
