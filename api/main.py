"""
FastAPI main application for the Bookshelf API.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import APIConfig, config as default_config
from api.database import BookStore
from api.middleware import AccessLogMiddleware
from api.routes import auth, books, health
from api.tokens import TokenService
from api.users import CredentialStore
from utilities.logger import setup_logging

# Setup logging
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config: APIConfig = app.state.config
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file,
        debug=config.debug
    )

    logger.info("Starting Bookshelf API", port=config.port, books=app.state.book_store.count())
    if not config.jwt_secret:
        logger.error("JWT_SECRET is not set, login will fail")

    yield

    logger.info("Shutting down Bookshelf API")


def create_app(
    config: Optional[APIConfig] = None,
    book_store: Optional[BookStore] = None,
    credential_store: Optional[CredentialStore] = None,
    token_service: Optional[TokenService] = None
) -> FastAPI:
    """
    Build the application with its services.

    Args:
        config: Settings; the process-wide config when omitted
        book_store: Book storage; seeded according to ``config.seed_sample_data`` when omitted
        credential_store: Accounts allowed to log in; the built-in users when omitted
        token_service: Token signer; built from the config secret when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or default_config

    if book_store is None:
        book_store = BookStore.with_sample_data() if config.seed_sample_data else BookStore()
    if credential_store is None:
        credential_store = CredentialStore()
    if token_service is None:
        token_service = TokenService(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            expires_hours=config.token_expire_hours
        )

    app = FastAPI(
        title=config.api_title,
        description=config.api_description,
        version=config.api_version,
        lifespan=lifespan
    )
    app.state.config = config
    app.state.book_store = book_store
    app.state.credential_store = credential_store
    app.state.token_service = token_service

    app.add_middleware(AccessLogMiddleware)

    # Exception handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        """Malformed or mistyped request payloads."""
        return PlainTextResponse(
            "Invalid request payload",
            status_code=status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        message = "Internal server error"
        if config.debug:
            message = f"{message}: {exc}"
        return PlainTextResponse(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(books.router)
    app.include_router(books.protected_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=default_config.host,
        port=default_config.port,
        log_level="info"
    )
