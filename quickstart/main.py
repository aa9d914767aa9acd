"""
FastAPI Application Factory
===========================

Main entry point for the Auth0 quickstart web application.

Authentication:
    - Auth0 scheme : OIDC authorization-code flow (Authlib Starlette client)
    - Cookies scheme : signed session cookie (Starlette SessionMiddleware)

Routes:
    - /login, /callback, /logout : Account handlers
    - /, /profile, /fetchdata    : Pages
    - /health                    : Health check endpoint

Environment Variables Required:
    - AUTH0_DOMAIN: Auth0 tenant domain
    - AUTH0_CLIENT_ID: Auth0 application client ID
    - SESSION_SECRET: Secret for signing the session cookie
    See .env.example for the optional ones.

Running the Service:
    Development:
        uvicorn quickstart.main:create_app --factory --reload --port 3000

    Or via the console script:
        auth0-quickstart
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from quickstart import __version__
from quickstart.auth import NotAuthenticatedError, account_router
from quickstart.auth.oidc import build_oauth
from quickstart.config import Settings, get_settings, log_configuration_status
from quickstart.models import ErrorResponse, HealthResponse
from quickstart.pages import pages_router
from quickstart.pages.layout import login_url


SERVICE_NAME = "auth0-quickstart"


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s", "module": "%(module)s", "function": "%(funcName)s"}',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup logs the effective configuration and any configuration
    problems; shutdown only logs.
    """
    settings: Settings = app.state.settings
    logger = logging.getLogger("quickstart.main")

    logger.info(
        "Starting quickstart application",
        extra={
            "domain": settings.AUTH0_DOMAIN,
            "scope": settings.requested_scope,
            "log_level": settings.LOG_LEVEL,
        }
    )
    log_configuration_status(settings, logger)

    yield

    logger.info("Quickstart application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application instance with:
        - Lifespan management
        - Session (cookie scheme) middleware
        - Auth0 (OIDC scheme) registration
        - Route handlers
        - Exception handlers

    Args:
        settings: Settings to use; loaded from the environment when omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Auth0 Quickstart",
        description="Login, logout and token propagation with Auth0",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.oauth = build_oauth(settings)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        same_site="lax",
        https_only=settings.SESSION_HTTPS_ONLY,
    )

    app.include_router(account_router)
    app.include_router(pages_router)

    @app.get("/health", tags=["system"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Return service status and basic metadata."""
        return HealthResponse(status="ok", service=SERVICE_NAME, version=__version__)

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError) -> RedirectResponse:
        """Challenge: send anonymous users to the login route."""
        logging.getLogger("quickstart.main").debug(
            "Redirecting anonymous request to login",
            extra={"path": request.url.path},
        )
        return RedirectResponse(url=login_url(exc.return_url), status_code=302)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Global exception handler for unhandled errors.

        Logs the error and returns a standardized error response.
        """
        logger = logging.getLogger("quickstart.main")
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "exception_type": type(exc).__name__
            },
            exc_info=True
        )

        error = ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred",
            detail=str(exc) if settings.LOG_LEVEL == "DEBUG" else None,
        )
        return JSONResponse(status_code=500, content=error.model_dump(mode="json"))

    return app


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    settings = get_settings()

    uvicorn.run(
        "quickstart.main:create_app",
        factory=True,
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
