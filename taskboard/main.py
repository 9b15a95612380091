import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.core.config import Settings, get_settings
from taskboard.core.database import AppContext
from taskboard.core.errors import AppError
from taskboard.core.logging_setup import setup_logging

# Routers
from taskboard.routers import auth as auth_router
from taskboard.routers import health as health_router
from taskboard.routers import project as project_router
from taskboard.routers import task as task_router

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # A context passed in by the caller is theirs to dispose.
        if context is None:
            app.state.context.dispose()

    app = FastAPI(
        title="Taskboard API",
        version="1.0.0",
        description="Projects and tasks, scoped per user",
        lifespan=lifespan,
    )
    app.state.context = context or AppContext.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(project_router.router)
    app.include_router(task_router.router)
    app.include_router(health_router.router)
    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    app = create_app(settings)
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
