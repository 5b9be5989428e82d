"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import HTTPException, Request
from fio_gateway.config import settings
from fio_gateway.infrastructure.clients.fio import FioClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_fio_client() -> FioClient:
    """Provide Fio API client built from service settings"""
    try:
        return FioClient(
            token=settings.fio_token,
            base_url=settings.fio_api_base,
            timeout=settings.http_timeout_seconds,
        )
    except ValueError as e:
        logging.error("Fio client not configured", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail="Fio API token not configured") from e
