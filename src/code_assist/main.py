"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn code_assist.main:app --reload

    # Production
    uvicorn code_assist.main:app --host 0.0.0.0 --port 8000
"""

from code_assist.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from code_assist.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "code_assist.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
