"""
FastAPI 서버 실행 스크립트
"""
import uvicorn
from app.core.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"Database: {settings.DATABASE_URL}")
    print(f"Server will be available at: http://{settings.HOST}:{settings.PORT}{settings.API_PREFIX}/orders")
    print(f"API Documentation: http://localhost:{settings.PORT}/docs" if settings.DEBUG else "API Documentation disabled (DEBUG=false)")
    print("Press Ctrl+C to stop the server")

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
