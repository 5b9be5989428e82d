"""PUT /v1/cursor/... - move the server-side last-download cursor"""

from datetime import date
from fastapi import APIRouter, Depends, Path, Request
from starlette.responses import Response

from fio_gateway.api.v1.errors import http_error_for
from fio_gateway.api.dependencies import get_fio_client, get_request_id
from fio_gateway.infrastructure.clients.fio import FioClient
from fio_gateway.domain.exceptions import FioError

router = APIRouter()


@router.put("/cursor/id/{transaction_id}", status_code=204)
async def set_cursor_by_id(
    request: Request,
    transaction_id: int = Path(..., ge=0),
    fio_client: FioClient = Depends(get_fio_client),
):
    """Next /transactions/last call starts after this transaction"""
    try:
        await fio_client.set_last_download_id(transaction_id)
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return Response(status_code=204)


@router.put("/cursor/date/{day}", status_code=204)
async def set_cursor_by_date(
    request: Request,
    day: date,
    fio_client: FioClient = Depends(get_fio_client),
):
    """Next /transactions/last call starts after this day"""
    try:
        await fio_client.set_last_download_date(day)
    except FioError as e:
        raise http_error_for(e, get_request_id(request))

    return Response(status_code=204)
