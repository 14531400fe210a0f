import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from image_server.backend.app.api.v1.router import api_router
from image_server.backend.app.core.config import Settings, settings
from image_server.backend.app.core.logging_config import setup_logging
from image_server.backend.app.exception_handlers import register_exception_handlers
from image_server.backend.app.infrastructure.files.filesystem_storage import FilesystemImageStorage
from image_server.backend.app.infrastructure.security.rate_limiter import FixedWindowRateLimiter
from image_server.backend.app.middleware.errors import UnhandledErrorMiddleware
from image_server.backend.app.middleware.rate_limit import RateLimitMiddleware, default_rate_limit_message
from image_server.backend.app.middleware.security_headers import add_security_headers

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    storage = FilesystemImageStorage(
        app_settings.storage_roots(),
        chunk_size=app_settings.UPLOAD_CHUNK_SIZE,
    )
    limiter = FixedWindowRateLimiter(
        max_requests=app_settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=app_settings.RATE_LIMIT_WINDOW_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings.LOG_LEVEL)
        try:
            storage.ensure_directories()
        except OSError:
            logger.exception("Error creating upload directories")
            raise
        for root in storage.roots:
            logger.info("Upload directory (%s): %s", root.key, root.directory)
        logger.info("CORS allows origins: %s", app_settings.CORS_ALLOW_ORIGINS)
        yield

    app = FastAPI(title="Image Server", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.image_storage = storage
    app.state.rate_limiter = limiter

    # last added runs first: CORS -> security headers -> rate limit -> errors -> routes
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter,
        message=default_rate_limit_message(app_settings.RATE_LIMIT_WINDOW_SECONDS),
    )
    add_security_headers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOW_ORIGINS,
        allow_methods=app_settings.CORS_ALLOW_METHODS,
        allow_headers=app_settings.CORS_ALLOW_HEADERS,
    )

    app.include_router(api_router)

    @app.get("/health")
    def health():
        return {"success": True, "status": "ok"}

    register_exception_handlers(app)
    return app

app = create_app()
