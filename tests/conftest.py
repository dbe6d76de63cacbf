"""Shared pytest fixtures: fixture dataset, FastAPI app and clients wired over ASGI."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from pydantic import SecretStr

from usersearch.client import SearchClient
from usersearch.config import ServerSettings
from usersearch.server import create_app
from usersearch.services.store import RecordStore

DATASET_PATH = Path(__file__).parent / "data" / "dataset.xml"
ACCESS_TOKEN = "s3cr3t"
SEARCH_URL = "http://testserver/search"


@pytest.fixture
def dataset_path() -> Path:
    return DATASET_PATH


@pytest.fixture
def store(dataset_path) -> RecordStore:
    return RecordStore(dataset_path)


@pytest.fixture
def server_settings() -> ServerSettings:
    return ServerSettings(dataset_path=DATASET_PATH, access_token=SecretStr(ACCESS_TOKEN))


@pytest.fixture
def app(server_settings, store):
    return create_app(server_settings, store)


@pytest_asyncio.fixture
async def http_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def search_client(http_client) -> SearchClient:
    return SearchClient(SEARCH_URL, ACCESS_TOKEN, http_client=http_client)
