# fieldstock/core/middleware.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from fieldstock.config.settings import settings

logger = logging.getLogger(__name__)

ACTOR_HEADER = "X-Actor-Id"
TIMING_HEADER = "X-Process-Time"


async def log_requests(request: Request, call_next):
    """Registrar cada request con su actor y tiempo; el tiempo tambien va en la respuesta"""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    response.headers[TIMING_HEADER] = f"{elapsed_ms:.1f}"
    actor = request.headers.get(ACTOR_HEADER, "-")
    message = f"⏱️ {request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.1f} ms, actor {actor})"
    if response.status_code >= 500:
        logger.error(message)
    else:
        logger.info(message)
    return response


def setup_middleware(app: FastAPI):
    """CORS con los origenes configurados y log de requests"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TIMING_HEADER],
    )
    app.middleware("http")(log_requests)
