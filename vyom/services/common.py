import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vyom.config import config
from vyom.database.connection import close_db, init_db

logger = logging.getLogger(__name__)


def create_service_app(service: str, title: str, with_database: bool = True) -> FastAPI:
    """Build a service app with CORS and, optionally, database setup/teardown"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if with_database:
            await init_db()
        logger.info("%s ready", service)
        yield
        if with_database:
            await close_db()

    app = FastAPI(
        title=f"{config.APP_NAME} - {title}",
        version=config.APP_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.service_name = service

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Mobile clients read failures from an "error" key
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    return app


async def get_http_client():
    """Dependency yielding an HTTP client for calls to other services"""
    async with httpx.AsyncClient(timeout=config.DOWNSTREAM_TIMEOUT) as client:
        yield client


def health_payload(service: str, **extra) -> dict:
    return {"service": service, "status": "healthy", **extra}
