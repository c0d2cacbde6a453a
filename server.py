"""
CRM AI Gateway Server Entry Point.

This module serves as the entry point for the gateway server.
All application logic is organized in the `ai_gateway` package.
"""
from ai_gateway.main import app

if __name__ == "__main__":
    import uvicorn
    from ai_gateway.config import settings

    uvicorn.run(
        "server:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
