"""FastAPI entrypoint for the food delivery order core."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fooddelivery.api.v1.api import api_router
from fooddelivery.core.config import settings
from fooddelivery.core.errors import (
    ConcurrentConflict,
    ConstraintViolation,
    DeliveryError,
    InvalidTransition,
    NotFound,
    ReferentialViolation,
)
from fooddelivery.db.base import Base
from fooddelivery.db.seed import ensure_seed_data
from fooddelivery.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[DeliveryError], int] = {
    NotFound: 404,
    ReferentialViolation: 422,
    ConstraintViolation: 400,
    InvalidTransition: 409,
    ConcurrentConflict: 409,
}

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(DeliveryError)
def handle_delivery_error(request: Request, exc: DeliveryError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    headers = {"Retry-After": "1"} if isinstance(exc, ConcurrentConflict) else None
    logger.info("[API] %s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
        headers=headers,
    )


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        try:
            ensure_seed_data(session)
        except DeliveryError:
            logger.exception("[BOOTSTRAP] Demo seed failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}
