# Pydantic 스키마 패키지
from .order import OrderBase, OrderCreate, OrderUpdate, OrderResponse, OrderPage, OrderCount
from .common import ErrorResponse, HealthStatus

__all__ = [
    "OrderBase", "OrderCreate", "OrderUpdate", "OrderResponse", "OrderPage", "OrderCount",
    "ErrorResponse", "HealthStatus",
]
