"""Pytest fixtures for testing"""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from fio_gateway.api.main import create_app
from fio_gateway.api.dependencies import get_fio_client
from fio_gateway.infrastructure.clients.fio import FioClient
from mock_fio_server import DATA_DIR, VALID_TOKEN, create_mock_server


MOCK_BASE_URL = "http://fio.test"


@pytest.fixture
def fio_server() -> FastAPI:
    """Fresh mock Fio API for each test"""
    return create_mock_server()


@pytest.fixture
def fio_client(fio_server: FastAPI) -> FioClient:
    """Fio client routed in-process to the mock server"""
    return FioClient(
        VALID_TOKEN,
        base_url=MOCK_BASE_URL,
        transport=httpx.ASGITransport(app=fio_server),
    )


@pytest.fixture
def client(fio_client: FioClient) -> TestClient:
    """Create FastAPI test client talking to the mock Fio API"""
    app = create_app()
    app.dependency_overrides[get_fio_client] = lambda: fio_client
    return TestClient(app)


@pytest.fixture
def transactions_xml() -> bytes:
    """Canonical single-transaction statement"""
    return (DATA_DIR / "transactions.xml").read_bytes()


@pytest.fixture
def error_envelope_xml() -> bytes:
    """Invalid token error body"""
    return (DATA_DIR / "error_invalid_token.xml").read_bytes()
