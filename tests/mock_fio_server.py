"""Mock Fio API server serving canned statements from tests/fixtures"""

from datetime import date
from pathlib import Path

from fastapi import FastAPI, HTTPException
from starlette.responses import Response

DATA_DIR = Path(__file__).resolve().parent / "fixtures"

VALID_TOKEN = "xxxx"
THROTTLED_TOKEN = "throttled"
KNOWN_STATEMENT = (2017, 1)


class _InvalidToken(Exception):
    pass


CONTENT_TYPES = {
    "xml": "text/xml;charset=UTF-8",
    "json": "application/json;charset=UTF-8",
    "csv": "text/csv;charset=UTF-8",
    "gpc": "text/plain;charset=windows-1250",
    "html": "text/html;charset=UTF-8",
    "ofx": "application/x-ofx;charset=UTF-8",
}


def fixture_bytes(name: str) -> bytes:
    return (DATA_DIR / name).read_bytes()


def export_body(fmt: str) -> bytes:
    """Canned body per export format; formats without a fixture reuse the XML one"""
    file = DATA_DIR / f"transactions.{fmt}"
    if not file.exists():
        file = DATA_DIR / "transactions.xml"
    return file.read_bytes()


def create_mock_server() -> FastAPI:
    """Fresh mock server; app.state.cursor and app.state.requests track calls"""
    app = FastAPI(title="Mock Fio Server", version="1.0.0")
    app.state.cursor = {}
    app.state.requests = []

    def authorize(token: str) -> None:
        app.state.requests.append(token)
        if token == THROTTLED_TOKEN:
            raise HTTPException(status_code=409, detail="too many requests")
        if token != VALID_TOKEN:
            # Fio reports an unknown token as a 500 with an XML envelope
            raise _InvalidToken()

    def parse_day(value: str) -> date:
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid date")

    def statement(fmt: str, body: bytes) -> Response:
        if fmt not in CONTENT_TYPES:
            raise HTTPException(status_code=404, detail="unknown format")
        return Response(content=body, media_type=CONTENT_TYPES[fmt])

    @app.exception_handler(_InvalidToken)
    def invalid_token(request, exc):
        return Response(
            content=fixture_bytes("error_invalid_token.xml"),
            status_code=500,
            media_type="text/xml;charset=UTF-8",
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/ib_api/rest/periods/{token}/{date_from}/{date_to}/transactions.{fmt}")
    def periods(token: str, date_from: str, date_to: str, fmt: str):
        authorize(token)
        parse_day(date_from)
        parse_day(date_to)
        return statement(fmt, export_body(fmt))

    @app.get("/ib_api/rest/by-id/{token}/{year}/{statement_id}/transactions.{fmt}")
    def by_id(token: str, year: int, statement_id: int, fmt: str):
        authorize(token)
        if (year, statement_id) != KNOWN_STATEMENT:
            raise HTTPException(status_code=404, detail="statement not found")
        return statement(fmt, export_body(fmt))

    @app.get("/ib_api/rest/last/{token}/transactions.{fmt}")
    def last(token: str, fmt: str):
        authorize(token)
        if app.state.cursor:
            return statement(fmt, fixture_bytes("transactions_empty.xml"))
        return statement(fmt, export_body(fmt))

    @app.get("/ib_api/rest/set-last-id/{token}/{transaction_id}")
    def set_last_id(token: str, transaction_id: int):
        authorize(token)
        app.state.cursor = {"id": transaction_id}
        return Response(status_code=200)

    @app.get("/ib_api/rest/set-last-date/{token}/{day}")
    def set_last_date(token: str, day: str):
        authorize(token)
        app.state.cursor = {"date": parse_day(day)}
        return Response(status_code=200)

    return app
