"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application().
  2. lifespan context manager runs on startup / shutdown.
  3. Routers are registered with their URL prefixes.
  4. Exception handlers turn every error into a {"message": ...} body.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from boutique.api.routes import (
    articles,
    auth,
    categories,
    clients,
    configurations,
    paiements,
    reservations,
    roles,
    societes,
    tailles,
    users,
)
from boutique.core.config import settings
from boutique.core.exceptions import BoutiqueError
from boutique.core.logging import bind_request_context, configure_logging, get_logger
from boutique.db.session import AsyncSessionLocal, engine
from boutique.services.bootstrap import seed_default_data

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging
      - Seed the default societe and roles on an empty database

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        debug=settings.DEBUG,
    )
    if settings.SEED_DEFAULT_DATA:
        async with AsyncSessionLocal() as session:
            async with session.begin():
                await seed_default_data(session)
    yield
    logger.info("Shutting down, disposing DB engine")
    await engine.dispose()


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Multi-tenant back-office for a caftan rental boutique: articles, "
            "clients, reservations and payments, isolated per societe."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request log context ───────────────────────────────────────────────────
    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = bind_request_context(
            request.method, request.url.path, request.headers.get("X-Request-ID")
        )
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(societes.router)
    app.include_router(roles.router)
    app.include_router(categories.router)
    app.include_router(tailles.router)
    app.include_router(articles.router)
    app.include_router(clients.router)
    app.include_router(reservations.router)
    app.include_router(paiements.router)
    app.include_router(configurations.router)

    # ── Exception Handlers ────────────────────────────────────────────────────

    @app.exception_handler(BoutiqueError)
    async def boutique_error_handler(request: Request, exc: BoutiqueError) -> JSONResponse:
        logger.info(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
            error=exc.message,
        )
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
            for error in exc.errors()
        )
        return _message(status.HTTP_400_BAD_REQUEST, f"Données invalides. {details}")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        response = _message(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning(
            "Integrity error",
            path=request.url.path,
            method=request.method,
            error=str(exc.orig),
        )
        return _message(
            status.HTTP_409_CONFLICT,
            "Conflit avec les données existantes (contrainte d'unicité ou de référence).",
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return _message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Une erreur interne est survenue.",
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}

    return app


app = create_application()
