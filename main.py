"""
ASGI entrypoint.

    uvicorn main:app
"""
from app.core.config import get_settings
from app.main import get_application

settings = get_settings()
app = get_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
