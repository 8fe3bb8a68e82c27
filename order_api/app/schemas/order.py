"""
주문 관련 스키마
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from app.models.order_status import OrderStatus

# 금액은 JSON 숫자로 직렬화
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """camelCase JSON 필드명을 사용하는 기본 스키마"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderBase(CamelModel):
    """주문 기본 스키마"""
    customer_name: str = Field(..., min_length=2, max_length=100, description="고객 이름")
    # EmailStr 은 도메인 부분을 소문자로 정규화해서 저장한다
    customer_email: EmailStr = Field(..., description="고객 이메일")
    product_name: str = Field(..., min_length=1, max_length=200, description="상품명")
    quantity: int = Field(..., ge=1, le=1000, description="수량")
    unit_price: Decimal = Field(
        ..., ge=Decimal("0.01"), le=Decimal("999999.99"), description="단가 (저장 시 센트 단위로 반올림)"
    )
    shipping_address: str = Field(..., min_length=10, max_length=500, description="배송지 주소")
    status: Optional[OrderStatus] = Field(None, description="주문 상태 (생략 시 PENDING)")


class OrderCreate(OrderBase):
    """주문 생성 스키마 (totalAmount 등 계산 필드는 무시됨)"""
    pass


class OrderUpdate(OrderBase):
    """주문 전체 업데이트 스키마 (status 생략 시 기존 상태 유지)"""
    pass


class OrderResponse(CamelModel):
    """주문 응답 스키마"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="주문 ID")
    customer_name: str
    customer_email: str
    product_name: str
    quantity: int
    unit_price: Money
    total_amount: Money = Field(..., description="총액 (단가 x 수량)")
    status: OrderStatus
    shipping_address: str
    created_at: datetime = Field(..., description="생성 일시")
    updated_at: Optional[datetime] = Field(None, description="수정 일시")


class OrderPage(CamelModel):
    """주문 페이징 응답"""
    orders: List[OrderResponse]
    current_page: int
    total_items: int
    total_pages: int
    page_size: int
    has_next: bool
    has_previous: bool


class OrderCount(BaseModel):
    """상태별 주문 건수"""
    status: OrderStatus
    count: int
