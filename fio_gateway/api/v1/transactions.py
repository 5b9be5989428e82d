"""GET /v1/transactions - period queries, exports and incremental polling"""

import io
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.responses import Response

from fio_gateway.api.v1.schemas import StatementResponse
from fio_gateway.api.v1.errors import http_error_for
from fio_gateway.api.dependencies import get_fio_client, get_request_id
from fio_gateway.infrastructure.clients.fio import FioClient
from fio_gateway.domain.exceptions import FioError
from fio_gateway.domain.models import ExportFormat

router = APIRouter()

MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.XML: "application/xml",
    ExportFormat.CSV: "text/csv",
    ExportFormat.GPC: "application/octet-stream",
    ExportFormat.HTML: "text/html",
    ExportFormat.OFX: "application/x-ofx",
}


def _check_period(date_from: date, date_to: date) -> None:
    if date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")


@router.get("/transactions", response_model=StatementResponse)
async def get_transactions(
    request: Request,
    date_from: date = Query(..., description="First day, YYYY-MM-DD"),
    date_to: date = Query(..., description="Last day, YYYY-MM-DD"),
    fio_client: FioClient = Depends(get_fio_client),
):
    """Transactions booked between date_from and date_to (inclusive)"""
    _check_period(date_from, date_to)
    try:
        statement = await fio_client.transactions_by_period(date_from, date_to)
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return StatementResponse.from_domain(statement)


@router.get("/transactions/export")
async def export_transactions(
    request: Request,
    date_from: date = Query(...),
    date_to: date = Query(...),
    format: ExportFormat = Query(ExportFormat.XML),
    fio_client: FioClient = Depends(get_fio_client),
):
    """Raw export of a period, passed through unchanged"""
    _check_period(date_from, date_to)
    buffer = io.BytesIO()
    try:
        await fio_client.export_by_period(date_from, date_to, format, buffer)
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return Response(content=buffer.getvalue(), media_type=MEDIA_TYPES[format])


@router.get("/transactions/last", response_model=StatementResponse)
async def get_transactions_since_last_download(
    request: Request,
    fio_client: FioClient = Depends(get_fio_client),
):
    """
    Transactions after the server-side last-download cursor.

    Fio advances the cursor on every successful call.
    """
    try:
        statement = await fio_client.since_last_download()
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return StatementResponse.from_domain(statement)
