"""
nexus.api.main — FastAPI application entry point
=================================================

Run with::

    uvicorn nexus.api.main:app --reload --port 8000

or ``python -m nexus.api`` (adds logging setup).

Every error leaves the API as ``{"error": "<message>"}``:

* :class:`~nexus.exceptions.AppException` → its own status + detail.
* Request validation failures → 400 with the first offending field.
* Starlette HTTP errors (unknown route, wrong method) → their status.
* Anything else → 500 ``Something went wrong!``, traceback logged.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

load_dotenv()

from nexus.api.auth import router as auth_router  # noqa: E402
from nexus.api.deps import get_config, get_engine  # noqa: E402
from nexus.api.routes.achievements import router as achievements_router  # noqa: E402
from nexus.api.routes.chat import router as chat_router  # noqa: E402
from nexus.api.routes.courses import router as courses_router  # noqa: E402
from nexus.api.routes.ideas import router as ideas_router  # noqa: E402
from nexus.api.routes.seed import router as seed_router  # noqa: E402
from nexus.api.routes.ui import router as ui_router  # noqa: E402
from nexus.api.routes.users import router as users_router  # noqa: E402
from nexus.database.engine import init_db  # noqa: E402
from nexus.exceptions import AppException, InternalError  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env with safe defaults.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — create tables and warm the engine."""
    cfg = get_config()
    engine = get_engine()
    init_db(engine)
    if cfg.enable_seed_endpoint:
        logger.warning("POST /api/seed is ENABLED — do not run this in production")
    logger.info("%s API started — engine ready (%s)", cfg.app_name, engine.url.database)
    yield
    logger.info("%s API shutting down", cfg.app_name)


app = FastAPI(
    title="Nexus Workspace API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------
def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
        detail = InternalError.default_detail
    else:
        detail = exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": detail})


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    return await app_exception_handler(
        request, InternalError(f"Storage failure: {type(exc).__name__}: {exc}")
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": InternalError.default_detail})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(courses_router, prefix="/api")
app.include_router(ideas_router, prefix="/api")
app.include_router(achievements_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(seed_router, prefix="/api")
app.include_router(ui_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
