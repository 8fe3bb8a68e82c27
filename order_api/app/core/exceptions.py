"""
주문 도메인 예외 정의

서비스 계층은 비즈니스 규칙 위반 시 아래 예외를 발생시키고 직접 처리하지 않는다.
HTTP 상태 코드 변환은 app.core.error_handlers 의 매핑 테이블이 담당한다.
"""


class OrderManagerError(Exception):
    """주문 관리 예외 기본 클래스"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderNotFoundError(OrderManagerError):
    """요청한 주문이 존재하지 않음"""

    @classmethod
    def for_id(cls, order_id: int) -> "OrderNotFoundError":
        return cls(f"Order not found with id: {order_id}")


class InvalidOrderDataError(OrderManagerError):
    """주문 데이터가 비즈니스 규칙을 위반함"""


class OrderNotModifiableError(OrderManagerError):
    """완료된 주문은 수정할 수 없음"""


class InvalidOrderStatusError(OrderManagerError):
    """허용되지 않는 주문 상태 전이"""


class OrderProcessingError(OrderManagerError):
    """주문 저장/처리 실패"""
