"""
전역 예외 처리기

예외 종류별 (HTTP 상태 코드, 오류 제목) 매핑 테이블을 기준으로 모든 오류를
동일한 JSON 구조 {timestamp, status, error, message, path[, fieldErrors]} 로 변환한다.
"""
from http import HTTPStatus
from typing import Dict, Optional, Tuple, Type
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from app.core.exceptions import (
    InvalidOrderDataError,
    InvalidOrderStatusError,
    OrderNotFoundError,
    OrderNotModifiableError,
    OrderProcessingError,
)
from app.models.order_status import OrderStatus
from app.schemas.common import ErrorResponse

logger = structlog.get_logger()

ERROR_TABLE: Dict[Type[Exception], Tuple[int, str]] = {
    OrderNotFoundError: (404, "Order Not Found"),
    InvalidOrderDataError: (400, "Invalid Order Data"),
    OrderNotModifiableError: (409, "Order Not Modifiable"),
    InvalidOrderStatusError: (422, "Invalid Order Status Transition"),
    OrderProcessingError: (422, "Order Processing Failed"),
    ValueError: (400, "Invalid Request"),
}

MALFORMED_BODY_MESSAGE = "Request body is not readable or is malformed JSON"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

# 요청 본문 필드별 검증 메시지
FIELD_MESSAGES = {
    "customerName": "Customer name must be between 2 and 100 characters",
    "customerEmail": "Please provide a valid email address",
    "productName": "Product name must be between 1 and 200 characters",
    "quantity": "Quantity must be between 1 and 1000",
    "unitPrice": "Unit price must be between 0.01 and 999999.99",
    "shippingAddress": "Shipping address must be between 10 and 500 characters",
}

REQUIRED_MESSAGES = {
    "customerName": "Customer name is required",
    "customerEmail": "Customer email is required",
    "productName": "Product name is required",
    "quantity": "Quantity is required",
    "unitPrice": "Unit price is required",
    "shippingAddress": "Shipping address is required",
}


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    field_errors: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """표준 오류 응답 생성"""
    body = ErrorResponse(
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        field_errors=field_errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def resolve_error(exc: Exception) -> Optional[Tuple[int, str]]:
    """예외 클래스 계층을 따라 매핑 테이블 항목 검색

    pydantic ValidationError 는 ValueError 의 하위 클래스지만 내부 데이터 오류이므로
    매핑하지 않고 500 처리로 넘긴다.
    """
    if isinstance(exc, ValidationError):
        return None
    for klass in type(exc).__mro__:
        if klass in ERROR_TABLE:
            return ERROR_TABLE[klass]
    return None


async def handle_application_error(request: Request, exc: Exception) -> JSONResponse:
    resolved = resolve_error(exc)
    if resolved is None:
        return await handle_unexpected_error(request, exc)

    status_code, error = resolved
    logger.warning(error, path=request.url.path, message=str(exc))
    return error_response(request, status_code, error, str(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    body_errors = [e for e in errors if e["loc"] and e["loc"][0] == "body"]
    param_errors = [e for e in errors if e["loc"] and e["loc"][0] in ("path", "query", "header")]

    if body_errors:
        return _body_error_response(request, body_errors)
    if param_errors:
        return _param_error_response(request, param_errors[0])

    logger.warning("Request validation failed", path=request.url.path, errors=len(errors))
    return error_response(request, 400, "Validation Failed", "Request validation failed")


def _body_error_response(request: Request, errors) -> JSONResponse:
    for e in errors:
        if e["type"] == "enum":
            message = (
                f"Invalid value '{e.get('input')}' for type OrderStatus. "
                f"Allowed values: {OrderStatus.names()}"
            )
            logger.warning("Rejected enum value in request body", path=request.url.path, value=str(e.get("input")))
            return error_response(request, 400, "Malformed JSON", message)

    # 본문 전체가 JSON 이 아니거나 누락/형식 불일치
    for e in errors:
        if e["type"] == "json_invalid" or len(e["loc"]) == 1:
            logger.warning("Malformed JSON request", path=request.url.path)
            return error_response(request, 400, "Malformed JSON", MALFORMED_BODY_MESSAGE)

    field_errors = {}
    for e in errors:
        field = ".".join(str(part) for part in e["loc"][1:])
        if field in field_errors:
            continue
        if e["type"] == "missing":
            field_errors[field] = REQUIRED_MESSAGES.get(field, "Field is required")
        else:
            field_errors[field] = FIELD_MESSAGES.get(field, e["msg"])

    logger.warning("Validation failed", path=request.url.path, fields=sorted(field_errors))
    return error_response(
        request,
        400,
        "Validation Failed",
        "Request validation failed. Check the field errors for details.",
        field_errors=field_errors,
    )


def _param_error_response(request: Request, e) -> JSONResponse:
    name = e["loc"][-1]
    if e["type"] == "missing":
        logger.warning("Missing required parameter", parameter=name)
        return error_response(
            request, 400, "Missing Required Parameter", f"Required parameter '{name}' is missing"
        )
    if e["type"].startswith("datetime"):
        logger.warning("Invalid date format", parameter=name, value=str(e.get("input")))
        return error_response(
            request,
            400,
            "Invalid Date Format",
            "Invalid date format. Please use ISO format (yyyy-MM-ddTHH:mm:ss)",
        )

    logger.warning("Invalid parameter format", parameter=name, value=str(e.get("input")))
    return error_response(
        request,
        400,
        "Invalid Parameter Format",
        f"Invalid format for parameter '{name}': '{e.get('input')}'",
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        error = HTTPStatus(exc.status_code).phrase
    except ValueError:
        error = "Error"
    message = exc.detail if isinstance(exc.detail, str) else error
    response = error_response(request, exc.status_code, error, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected error occurred",
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return error_response(request, 500, "Internal Server Error", UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션 생성 시 한 번 호출하여 예외 처리기 등록"""
    for exc_class in ERROR_TABLE:
        app.add_exception_handler(exc_class, handle_application_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
