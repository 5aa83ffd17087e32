# sleepcircle/api/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sleepcircle.api.dependencies import AppState
from sleepcircle.api.routes import sleep_routes, leaderboard_routes, session_routes
from sleepcircle.config.config_manager import ConfigManager
from sleepcircle.config.logging_config import setup_logging
from sleepcircle.core.exceptions import (
    AuthenticationRequiredError, DuplicateRecordDateError, InvalidDateError,
    InvalidTimeError, RecordNotFoundError
)

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

# Map core errors to HTTP status codes
ERROR_STATUS = {
    AuthenticationRequiredError: 401,
    RecordNotFoundError: 404,
    DuplicateRecordDateError: 409,
    InvalidTimeError: 422,
    InvalidDateError: 422,
}


def _error_handler(status_code):
    async def handler(request: Request, exc: Exception):
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    return handler


def create_app(config=None):
    """Build the API with one in-memory session"""
    config = config or ConfigManager()

    app = FastAPI(
        title="Sleep Circle API",
        description="API for tracking nightly sleep and ranking it against friends",
        version=API_VERSION
    )

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # For development - restrict this in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.sleepcircle = AppState(config)

    for exc_class, status_code in ERROR_STATUS.items():
        app.add_exception_handler(exc_class, _error_handler(status_code))

    # Include routers
    app.include_router(session_routes.router)
    app.include_router(sleep_routes.router)
    app.include_router(leaderboard_routes.router)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to the Sleep Circle API",
            "version": API_VERSION,
            "documentation": "/docs"
        }

    return app


if __name__ == "__main__":
    import uvicorn

    config = ConfigManager()
    setup_logging(config.get('logging.level'), config.get('logging.file'))
    uvicorn.run(create_app(config), host=config.get('api.host'), port=config.get('api.port'))
