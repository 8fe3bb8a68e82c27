"""
주문 관련 API 엔드포인트
"""
from datetime import datetime
from typing import List, Union
from fastapi import APIRouter, Body, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session
import structlog

from app.core.config import settings
from app.db.database import get_db
from app.models.order_status import OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.common import HealthStatus
from app.schemas.order import OrderCount, OrderCreate, OrderPage, OrderResponse, OrderUpdate
from app.services.order_service import OrderService

logger = structlog.get_logger()

router = APIRouter()

SERVICE_NAME = "Order Management System"

# 페이지 파라미터 상한 (32비트 정수 범위, offset 계산이 DB 정수 범위를 넘지 않도록)
MAX_PAGE_PARAM = 2**31 - 1


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """요청 세션에 묶인 주문 서비스 생성"""
    return OrderService(OrderRepository(db), enforce_transitions=settings.ENFORCE_STATUS_TRANSITIONS)


def to_local_naive(value: datetime) -> datetime:
    """타임존이 있는 일시는 로컬 시간 기준 naive 일시로 변환 (저장값과 비교용)"""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(order: OrderCreate, order_service: OrderService = Depends(get_order_service)):
    """새 주문 생성"""
    logger.info("Create order request", customer_email=order.customer_email)
    return order_service.create_order(order.model_dump())


@router.get("", response_model=Union[OrderPage, List[OrderResponse]])
def get_orders(
    page: int = Query(0, le=MAX_PAGE_PARAM, description="페이지 번호 (0부터 시작, 음수면 전체 조회)"),
    size: int = Query(20, le=MAX_PAGE_PARAM, description="페이지당 항목 수 (0 이하면 전체 조회)"),
    sort_by: str = Query("createdAt", alias="sortBy", description="정렬 필드"),
    sort_dir: str = Query("desc", alias="sortDir", description="정렬 방향 (asc/desc)"),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 목록 조회 (페이징 파라미터가 유효하면 페이지, 아니면 전체 목록)"""
    logger.info("Get orders request", page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

    if page < 0 or size <= 0:
        orders = order_service.get_all_orders()
        return [OrderResponse.model_validate(order) for order in orders]

    result = order_service.get_orders_page(page, size, sort_by, sort_dir)
    return OrderPage(
        orders=[OrderResponse.model_validate(order) for order in result.content],
        current_page=result.number,
        total_items=result.total_elements,
        total_pages=result.total_pages,
        page_size=result.size,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )


@router.get("/health", response_model=HealthStatus)
async def health_check():
    """주문 서비스 헬스 체크"""
    return HealthStatus(status="UP", service=SERVICE_NAME, timestamp=datetime.now())


@router.get("/customer/{email}", response_model=List[OrderResponse])
def get_orders_by_customer_email(email: str, order_service: OrderService = Depends(get_order_service)):
    """고객 이메일로 주문 조회"""
    logger.info("Get orders by customer email", customer_email=email)
    return order_service.get_orders_by_customer_email(email)


@router.get("/status/{order_status}", response_model=List[OrderResponse])
def get_orders_by_status(order_status: OrderStatus, order_service: OrderService = Depends(get_order_service)):
    """상태별 주문 조회"""
    logger.info("Get orders by status", status=order_status.value)
    return order_service.get_orders_by_status(order_status)


@router.get("/date-range", response_model=List[OrderResponse])
def get_orders_by_date_range(
    start_date: datetime = Query(..., alias="startDate", description="시작 일시 (ISO 8601)"),
    end_date: datetime = Query(..., alias="endDate", description="종료 일시 (ISO 8601)"),
    order_service: OrderService = Depends(get_order_service),
):
    """생성 일시 범위로 주문 조회"""
    logger.info("Get orders by date range", start_date=start_date.isoformat(), end_date=end_date.isoformat())
    return order_service.get_orders_by_date_range(to_local_naive(start_date), to_local_naive(end_date))


@router.get("/count/status/{order_status}", response_model=OrderCount)
def get_order_count_by_status(order_status: OrderStatus, order_service: OrderService = Depends(get_order_service)):
    """상태별 주문 건수 조회"""
    logger.info("Get order count by status", status=order_status.value)
    count = order_service.count_orders_by_status(order_status)
    return OrderCount(status=order_status, count=count)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int = Path(..., gt=0, description="주문 ID"),
    order_service: OrderService = Depends(get_order_service),
):
    """특정 주문 상세 조회"""
    logger.info("Get order detail", order_id=order_id)
    return order_service.get_order_by_id(order_id)


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_update: OrderUpdate,
    order_id: int = Path(..., gt=0, description="주문 ID"),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 정보 전체 업데이트"""
    logger.info("Update order request", order_id=order_id)
    return order_service.update_order(order_id, order_update.model_dump())


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int = Path(..., gt=0, description="주문 ID"),
    new_status: OrderStatus = Body(..., description="새로운 주문 상태 (JSON 문자열)"),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 상태 업데이트"""
    logger.info("Update order status", order_id=order_id, status=new_status.value)
    return order_service.update_order_status(order_id, new_status)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_order(
    order_id: int = Path(..., gt=0, description="주문 ID"),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 삭제"""
    logger.info("Delete order request", order_id=order_id)
    order_service.delete_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
