"""Application factory: settings in, configured FastAPI app out."""

import logging
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from micropost.api import router as api_router
from micropost.core.config import Settings, get_settings
from micropost.core.database import build_engine, build_session_factory, init_db
from micropost.core.errors import AppError
from micropost.core.security import TokenIssuer

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error("Request failed: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Malformed request body."},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application from explicit settings.

    The token issuer is constructed here so a missing signing secret
    (ConfigError) stops startup instead of failing individual requests.
    """
    settings = settings or get_settings()
    token_issuer = TokenIssuer(
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(days=settings.JWT_EXPIRE_DAYS),
    )
    engine = build_engine(settings)
    init_db(engine)

    app = FastAPI(
        title="Micropost API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = token_issuer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Micropost API is running"}

    logger.info(
        "Application configured",
        extra={"environment": settings.APP_ENV, "api_prefix": settings.API_PREFIX},
    )
    return app

