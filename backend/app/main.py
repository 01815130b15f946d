# backend/app/main.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import models  # noqa: F401  (registers tables on Base.metadata)
from .api import api_booking, api_documents, api_pricing
from .core.config import settings
from .core.observability import setup_logging
from .database import Base, engine
from .utils.status_logger import register_status_listeners

setup_logging()
logger = logging.getLogger(__name__)

register_status_listeners()

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Artist Booking Settlement API")


@app.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors with details and log them for debugging."""
    errors = jsonable_encoder(exc.errors())
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


api_prefix = settings.API_V1_STR  # usually something like "/api/v1"

app.include_router(api_booking.router, prefix=f"{api_prefix}/bookings", tags=["bookings"])
app.include_router(api_documents.router, prefix=f"{api_prefix}", tags=["documents"])
app.include_router(api_pricing.router, prefix=f"{api_prefix}/pricing", tags=["pricing"])
