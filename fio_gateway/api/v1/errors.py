"""Translate Fio client failures into HTTP errors"""

import logging
from fastapi import HTTPException

from fio_gateway.domain.exceptions import (
    ApiError,
    BadRequestError,
    FioError,
    NotFoundError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    TransportError,
)


def http_error_for(error: FioError, request_id: str) -> HTTPException:
    """Log a Fio failure and return the HTTPException the endpoint should raise"""
    if isinstance(error, RateLimitError):
        logging.warning(f"Fio rate limit hit: {error}", extra={"request_id": request_id})
        return HTTPException(
            status_code=429,
            detail="Fio API rate limit, retry in 30 seconds",
            headers={"Retry-After": "30"},
        )

    if isinstance(error, (BadRequestError, NotFoundError)):
        logging.warning(f"Fio rejected request: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=error.status_code, detail=error.message or "Rejected by Fio API")

    if isinstance(error, ApiError):
        logging.error(f"Fio API error: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=502, detail=error.message or "Fio API error")

    if isinstance(error, ParseError):
        logging.error(f"Unparseable Fio response: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=502, detail="Unparseable Fio response")

    if isinstance(error, RequestTimeoutError):
        logging.error(f"Fio API timeout: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=504, detail="Fio API timeout")

    if isinstance(error, TransportError):
        logging.error(f"Fio API unreachable: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=503, detail="Fio API unavailable")

    logging.error(f"Unexpected Fio error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")
