import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings
from app.core.errors import LoginStoreError, StartupError, ValidationError
from app.core.logging_config import setup_logging
from app.core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.domain.logins.services import LoginRecordStore
from app.web.routes import api, health, pages

logger = logging.getLogger("app.main")


def _log_banner(app_settings: Settings) -> None:
    base_url = f"http://localhost:{app_settings.PORT}"
    logger.info("Server running at %s", base_url)
    logger.info("Login page: %s%s (or %s/)", base_url, pages.LOGIN_PAGE, base_url)
    logger.info("Data panel: %s%s", base_url, pages.DATA_PANEL_PAGE)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the application around a login store owned by its lifespan.

    Logging is configured from ``app_settings`` as well.
    """
    setup_logging(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the login store on startup and release it on shutdown."""
        store = LoginRecordStore.from_settings(app_settings)
        try:
            await store.initialize()
        except StartupError:
            logger.critical("Critical failure while starting the server", exc_info=True)
            await store.close()
            raise

        logger.info("Connected to SQLite database at %s", app_settings.database_path)
        app.state.login_store = store
        _log_banner(app_settings)
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Records login attempts and serves the capture pages",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=app_settings.ALLOWED_HOSTS,
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, env=app_settings.ENV)

    @app.exception_handler(LoginStoreError)
    async def login_store_error_handler(request: Request, exc: LoginStoreError) -> JSONResponse:
        if isinstance(exc, ValidationError):
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        else:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Malformed request to %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": ValidationError.default_message},
        )

    # Include routers
    app.include_router(pages.router, tags=["pages"])
    app.include_router(api.router, prefix="/api", tags=["api"])
    app.include_router(health.router, tags=["health"])

    # Static front-end at the root path; mounted last so the routes above win.
    app.mount("/", StaticFiles(directory=str(app_settings.STATIC_DIR)), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
