import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from users_api.core.config import get_settings
from users_api.core.observability import setup_logging
from users_api.repositories import UserStore, build_store
from users_api.routers import pages as pages_router
from users_api.routers import users as users_router
from users_api.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Users API started on port %s", settings.port)
    yield
    logger.info("Users API shutting down")


def create_app(store: UserStore | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn; tests pass their own store."""
    settings = get_settings()
    app = FastAPI(title="Users API", lifespan=lifespan)

    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                f"http://localhost:{settings.port}",
                f"http://127.0.0.1:{settings.port}",
            ],
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    app.state.user_service = UserService(store if store is not None else build_store(settings))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=True, extra={"path": request.url.path})
        return JSONResponse(
            {"ok": False, "error": "internal_error", "message": "An unexpected error occurred"},
            status_code=500,
        )

    app.include_router(pages_router.router)
    app.include_router(users_router.router)
    return app


app = create_app()
