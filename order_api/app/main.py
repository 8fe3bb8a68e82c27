"""
Order Management API - 메인 애플리케이션
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from app.core.config import settings
from app.core.error_handlers import register_exception_handlers
from app.api.v1.api import api_router
from app.db.database import SessionLocal, create_tables
from app.db.seed import seed_sample_orders


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """structlog 로거 설정 (stdlib logging 위에서 JSON 출력)"""
    logging.basicConfig(format="%(message)s", level=level.upper())
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# 로거 설정
configure_logging()

logger = structlog.get_logger()


def create_application() -> FastAPI:
    """FastAPI 애플리케이션 생성"""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="주문 생성/조회/수정/삭제 및 상태 관리 API",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.DEBUG else settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 전역 예외 처리기 등록
    register_exception_handlers(app)

    # API 라우터 등록
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Starting Order Management API", version=settings.APP_VERSION)
        logger.info("Initializing database", database_url=settings.DATABASE_URL)

        try:
            create_tables()
            logger.info("Database tables initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

        if settings.SEED_SAMPLE_DATA:
            with SessionLocal() as db:
                seed_sample_orders(db)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down Order Management API")

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs" if settings.DEBUG else "Documentation disabled in production"
        }

    @app.get("/health")
    async def health_check():
        """헬스 체크 엔드포인트"""
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app


# 애플리케이션 인스턴스 생성
app = create_application()
