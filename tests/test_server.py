"""HTTP surface of the search service."""

from __future__ import annotations

import httpx
import pytest

from usersearch.config import ServerSettings
from usersearch.server import create_app
from usersearch.services.store import RecordStore

AUTH = {"Authorization": "Bearer s3cr3t"}


def _params(**overrides):
    params = {"limit": "10", "offset": "0", "query": "", "order_field": "", "order_by": "0"}
    params.update(overrides)
    return params


@pytest.mark.asyncio
async def test_search_returns_wire_shaped_users(http_client):
    response = await http_client.get(
        "/search",
        params=_params(limit="1", query="Boyd", order_field="Id", order_by="1"),
        headers=AUTH,
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert set(body[0]) == {"Id", "Name", "Age", "About", "Gender"}
    assert body[0]["Id"] == 0
    assert body[0]["Name"] == "BoydWolf"
    assert body[0]["Age"] == 22
    assert body[0]["Gender"] == "male"


@pytest.mark.asyncio
async def test_empty_result_is_empty_array(http_client):
    response = await http_client.get(
        "/search", params=_params(query="nobody-matches-this"), headers=AUTH
    )

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "reason"),
    [
        ({"limit": "abc"}, "ErrorBadLimit"),
        ({"offset": "-1"}, "ErrorBadOffset"),
        ({"order_by": "5"}, "ErrorBadOrderBy"),
        ({"order_field": "Salary", "order_by": "1"}, "ErrorBadOrderField"),
    ],
)
async def test_bad_parameters_are_400_with_reason(http_client, overrides, reason):
    response = await http_client.get("/search", params=_params(**overrides), headers=AUTH)

    assert response.status_code == 400
    assert response.json() == {"Error": reason}


@pytest.mark.asyncio
async def test_missing_required_parameters_are_400(http_client):
    response = await http_client.get("/search", headers=AUTH)

    assert response.status_code == 400
    assert response.json() == {"Error": "ErrorBadLimit"}


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "Basic s3cr3t"}])
async def test_bad_token_is_401(http_client, headers):
    response = await http_client.get("/search", params=_params(), headers=headers)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_auth_disabled_without_configured_token(store):
    app = create_app(ServerSettings(), store)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/search", params=_params())

    assert response.status_code == 200
    assert len(response.json()) == 6


@pytest.mark.asyncio
async def test_unreadable_dataset_is_500(tmp_path):
    app = create_app(ServerSettings(), RecordStore(tmp_path / "missing.xml"))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/search", params=_params())

    assert response.status_code == 500
    assert response.json() == {"Error": "ErrorInternal"}


@pytest.mark.asyncio
async def test_health_reports_record_count_once_loaded(http_client):
    before = await http_client.get("/health")
    assert before.json() == {"status": "healthy", "records": None}

    await http_client.get("/search", params=_params(), headers=AUTH)

    after = await http_client.get("/health")
    assert after.json() == {"status": "healthy", "records": 6}
