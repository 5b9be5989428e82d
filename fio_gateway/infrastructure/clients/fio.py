"""Fio banking API HTTP client for statements, exports and download cursors"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, BinaryIO, Dict, Optional, Type

import httpx

from fio_gateway.domain.exceptions import (
    ApiError,
    BadRequestError,
    NotFoundError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from fio_gateway.domain.models import ExportFormat, TransactionsResponse
from fio_gateway.domain.parser import parse_error_envelope, parse_transactions_response
from fio_gateway.infrastructure.observability.logging import log_fio_call
from fio_gateway.infrastructure.observability.metrics import (
    fio_exported_bytes_counter,
    fio_parse_failures_counter,
    record_fio_call,
)
from fio_gateway.utils.date_utils import format_date

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://fioapi.fio.cz"
REDACTED = "REDACTED"

PERIODS_RESOURCE = "ib_api/rest/periods"
BY_ID_RESOURCE = "ib_api/rest/by-id"
LAST_RESOURCE = "ib_api/rest/last"
SET_LAST_ID_RESOURCE = "ib_api/rest/set-last-id"
SET_LAST_DATE_RESOURCE = "ib_api/rest/set-last-date"

# Observed status mapping of the Fio API:
# 500 validation error or invalid token
# 409 rate limit (one request per 30 seconds)
# 404 resource not found
# 400 invalid date format in url
_ERRORS_BY_STATUS: Dict[int, Type[ApiError]] = {
    400: BadRequestError,
    404: NotFoundError,
    409: RateLimitError,
    500: ServerError,
}


def sanitize_url(token: str, url: str) -> str:
    """Replace every occurrence of the token in url with a placeholder"""
    if not token:
        return url
    return url.replace(token, REDACTED)


def _terminal_segment(export_format: ExportFormat | str) -> str:
    return f"transactions.{ExportFormat(export_format).value}"


class FioClient:
    """
    Client for the Fio transaction export API.

    The token is part of every URL path, so it never leaves this class
    unredacted through logs or exceptions. The client keeps no per-call
    state and can be shared between concurrent tasks. The API allows one
    call per token every ~30 seconds; pacing is left to the caller.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not token.strip():
            raise ValueError("Fio API token must not be empty")
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def build_url(self, resource: str, *segments: str) -> str:
        """base URL / resource / token / segments..., in the order the server routes them"""
        return "/".join([self.base_url.rstrip("/"), resource, self.token, *segments])

    async def transactions_by_period(self, date_from: date, date_to: date) -> TransactionsResponse:
        """Fetch transactions booked between date_from and date_to (inclusive)"""
        url = self.build_url(
            PERIODS_RESOURCE, format_date(date_from), format_date(date_to), _terminal_segment(ExportFormat.XML)
        )
        return await self._fetch_statement("transactions_by_period", url)

    async def export_by_period(
        self,
        date_from: date,
        date_to: date,
        export_format: ExportFormat | str,
        sink: BinaryIO,
    ) -> int:
        """
        Write transactions between date_from and date_to to sink in the given format.

        The body is copied byte for byte; nothing but XML is understood here.

        Returns:
            Number of bytes written to sink
        """
        url = self.build_url(
            PERIODS_RESOURCE, format_date(date_from), format_date(date_to), _terminal_segment(export_format)
        )
        return await self._export("export_by_period", url, ExportFormat(export_format), sink)

    async def get_statement(self, year: int, statement_id: int) -> TransactionsResponse:
        """Fetch an official statement by its year and number"""
        url = self.build_url(BY_ID_RESOURCE, str(int(year)), str(int(statement_id)), _terminal_segment(ExportFormat.XML))
        return await self._fetch_statement("get_statement", url)

    async def export_statement(
        self,
        year: int,
        statement_id: int,
        export_format: ExportFormat | str,
        sink: BinaryIO,
    ) -> int:
        """Write an official statement to sink in the given format; returns bytes written"""
        url = self.build_url(BY_ID_RESOURCE, str(int(year)), str(int(statement_id)), _terminal_segment(export_format))
        return await self._export("export_statement", url, ExportFormat(export_format), sink)

    async def since_last_download(self) -> TransactionsResponse:
        """Fetch transactions after the server-side last-download cursor"""
        url = self.build_url(LAST_RESOURCE, _terminal_segment(ExportFormat.XML))
        return await self._fetch_statement("since_last_download", url)

    async def set_last_download_id(self, transaction_id: int) -> None:
        """Move the last-download cursor to the given transaction id"""
        url = self.build_url(SET_LAST_ID_RESOURCE, str(int(transaction_id)))
        await self._execute("set_last_download_id", url)

    async def set_last_download_date(self, day: date) -> None:
        """Move the last-download cursor to the given date"""
        url = self.build_url(SET_LAST_DATE_RESOURCE, format_date(day))
        await self._execute("set_last_download_date", url)

    async def _fetch_statement(self, operation: str, url: str) -> TransactionsResponse:
        async with self._get(operation, url) as response:
            body = await response.aread()

        try:
            return parse_transactions_response(body)
        except ParseError as e:
            fio_parse_failures_counter.inc()
            logger.warning(
                f"Unparseable Fio response: {e}",
                extra={"operation": operation, "url": sanitize_url(self.token, url), "field": e.field},
            )
            raise

    async def _export(self, operation: str, url: str, export_format: ExportFormat, sink: BinaryIO) -> int:
        written = 0
        async with self._get(operation, url) as response:
            async for chunk in response.aiter_bytes():
                sink.write(chunk)
                written += len(chunk)

        fio_exported_bytes_counter.labels(format=export_format.value).inc(written)
        return written

    async def _execute(self, operation: str, url: str) -> None:
        async with self._get(operation, url) as response:
            await response.aread()

    @asynccontextmanager
    async def _get(self, operation: str, url: str) -> AsyncIterator[httpx.Response]:
        """
        Open a streamed GET and yield the successful response.

        Raises:
            ApiError: On non-2xx status, after the body has been released
            TransportError: On network failure, including while reading the body
        """
        safe_url = sanitize_url(self.token, url)
        outcome = "cancelled"
        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                async with client.stream("GET", url) as response:
                    outcome = str(response.status_code)
                    await self._check_response(response)
                    yield response

        except httpx.TimeoutException as e:
            outcome = "transport_error"
            raise RequestTimeoutError(f"Fio API timeout after {self.timeout}s: GET {safe_url}") from e
        except httpx.RequestError as e:
            outcome = "transport_error"
            detail = sanitize_url(self.token, str(e)) or type(e).__name__
            raise TransportError(f"Fio API request failed: GET {safe_url}: {detail}") from e

        finally:
            duration = time.perf_counter() - start_time
            record_fio_call(operation, outcome, duration)
            log_fio_call(operation, safe_url, outcome, duration * 1000)

    async def _check_response(self, response: httpx.Response) -> None:
        if 200 <= response.status_code <= 299:
            return

        message = None
        error_code = None
        try:
            content_type = response.headers.get("content-type", "")
            if response.status_code == 500 and "text/xml" in content_type:
                # Best effort: a broken envelope still yields the status error
                try:
                    envelope = parse_error_envelope(await response.aread())
                    message = envelope.message or None
                    error_code = envelope.error_code or None
                except (ParseError, httpx.HTTPError) as e:
                    logger.debug(f"Could not decode Fio error envelope: {type(e).__name__}")
        finally:
            await response.aclose()

        error_cls = _ERRORS_BY_STATUS.get(response.status_code, ApiError)
        raise error_cls(
            status_code=response.status_code,
            method=response.request.method,
            url=sanitize_url(self.token, str(response.request.url)),
            message=message,
            error_code=error_code,
        )
