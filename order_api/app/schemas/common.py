"""
공통 스키마 정의
"""
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HealthStatus(BaseModel):
    """헬스 체크 응답"""
    status: str = "UP"
    service: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    """오류 응답 스키마"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: datetime = Field(default_factory=datetime.now)
    status: int
    error: str
    message: str
    path: str
    field_errors: Optional[Dict[str, str]] = None
