"""FastAPI application entrypoint.

Responsibilities kept minimal:
  * App / lifespan initialization (logging, schema)
  * Router registration (tasks)
  * Cross-cutting concerns: metrics middleware & exception handlers
"""

from contextlib import asynccontextmanager
import logging
import os
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from .api.tasks import router as tasks_router
from .db.session import ensure_tables
from .errors import BaseAppException
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - simple startup path
    """Configure logging and create the schema (idempotent)."""
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    ensure_tables()
    logger.info("taskboard started")
    yield


# --- Optional .env loading (opt-in via APP_LOAD_DOTENV) ---
if os.getenv("APP_LOAD_DOTENV") in {"1", "true", "TRUE", "yes", "on"}:  # pragma: no cover
    from dotenv import load_dotenv
    # Respect existing env (override=False). Default search walks up from CWD.
    load_dotenv(override=False)

app = FastAPI(title="Taskboard API", version="0.1.0", lifespan=lifespan)

# --- Metrics setup ---
REQUEST_COUNT = Counter(
    "taskboard_requests_total", "Total HTTP requests", ["method", "path", "status"]
)
REQUEST_LATENCY = Histogram(
    "taskboard_request_latency_seconds", "Latency of HTTP requests", ["method", "path"]
)

# --- CORS (for local frontend dev) ---
cors_origins_env = os.getenv("CORS_ALLOW_ORIGINS")
if cors_origins_env:
    allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
else:
    allow_origins = ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tasks_router)


_FIXED_PATHS = {"/", "/tasks", "/healthz", "/metrics", "/docs", "/redoc", "/openapi.json"}


def _path_label(path: str) -> str:
    # Collapse task ids and unknown paths so the label set stays bounded
    path = path.rstrip("/") or "/"
    if path in _FIXED_PATHS:
        return path
    parts = path.split("/")
    if len(parts) == 3 and parts[1] == "tasks":
        return "/tasks/:id"
    if len(parts) == 4 and parts[1] == "tasks" and parts[3] in ("status", "events"):
        return f"/tasks/:id/{parts[3]}"
    return "other"


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    method = request.method
    path_label = _path_label(request.url.path)
    with REQUEST_LATENCY.labels(method=method, path=path_label).time():
        response: Response = await call_next(request)
    REQUEST_COUNT.labels(method=method, path=path_label, status=str(response.status_code)).inc()
    return response


@app.get("/metrics")
def metrics():  # pragma: no cover - external scrape
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.exception_handler(BaseAppException)
async def app_exception_handler(request: Request, exc: BaseAppException):
    if exc.http_status >= 500:
        logger.error("request failed %s %s code=%s", request.method, request.url.path, exc.code)
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": {"code": exc.code, "message": exc.message}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):  # pragma: no cover
    logger.exception("unhandled error %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": "INTERNAL_ERROR", "message": "unexpected error"}},
    )


@app.get("/healthz")
async def health():
    return {"status": "ok"}
