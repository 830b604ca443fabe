"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exceptions import STORE_FAILURE_MESSAGE
from app.core.logging import setup_logging
from app.db.session import engine

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging; shutdown: dispose the engine."""
    setup_logging(settings.log_format, settings.log_level.upper())
    logger.info("%s starting (%s)", settings.app_name, settings.environment)
    # Tables come from Alembic (alembic upgrade head)
    yield
    await engine.dispose()


async def store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures surface as a generic, retryable error; nothing is retried here."""
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": STORE_FAILURE_MESSAGE})


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in dev; in production use CORS_ORIGINS env
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
