"""GET /v1/statements/{year}/{statement_id} - official statements"""

import io
from fastapi import APIRouter, Depends, Path, Query, Request
from starlette.responses import Response

from fio_gateway.api.v1.schemas import StatementResponse
from fio_gateway.api.v1.errors import http_error_for
from fio_gateway.api.v1.transactions import MEDIA_TYPES
from fio_gateway.api.dependencies import get_fio_client, get_request_id
from fio_gateway.infrastructure.clients.fio import FioClient
from fio_gateway.domain.exceptions import FioError
from fio_gateway.domain.models import ExportFormat

router = APIRouter()


@router.get("/statements/{year}/{statement_id}", response_model=StatementResponse)
async def get_statement(
    request: Request,
    year: int = Path(..., ge=1900, le=9999),
    statement_id: int = Path(..., ge=0),
    fio_client: FioClient = Depends(get_fio_client),
):
    """Statement identified by year and statement number"""
    try:
        statement = await fio_client.get_statement(year, statement_id)
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return StatementResponse.from_domain(statement)


@router.get("/statements/{year}/{statement_id}/export")
async def export_statement(
    request: Request,
    year: int = Path(..., ge=1900, le=9999),
    statement_id: int = Path(..., ge=0),
    format: ExportFormat = Query(ExportFormat.XML),
    fio_client: FioClient = Depends(get_fio_client),
):
    """Raw export of a statement, passed through unchanged"""
    buffer = io.BytesIO()
    try:
        await fio_client.export_statement(year, statement_id, format, buffer)
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return Response(content=buffer.getvalue(), media_type=MEDIA_TYPES[format])
