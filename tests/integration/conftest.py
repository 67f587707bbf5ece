"""Integration-test fixtures.

The app's registry is process-wide; the autouse reset in tests/conftest.py
gives every test an empty arena and a fresh settlement asset.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from src.pm_gateway.auth.dependencies import CALLER_HEADER


@pytest.fixture
async def funded_client(client: AsyncClient) -> AsyncClient:
    """Client whose alice/bob/carol identities each hold 1,000,000 units."""
    for name in ("alice", "bob", "carol"):
        resp = await client.post(
            "/api/v1/account/deposit", json={"amount": 1_000_000}, headers={CALLER_HEADER: name}
        )
        assert resp.status_code == 200
    return client


@pytest.fixture
async def market_id(funded_client: AsyncClient) -> int:
    deadline = datetime.now(timezone.utc) + timedelta(days=7)
    resp = await funded_client.post(
        "/api/v1/markets",
        json={"question": "Will it rain?", "resolution_deadline": deadline.isoformat()},
        headers={CALLER_HEADER: "creator"},
    )
    assert resp.status_code == 201
    return resp.json()["data"]["market_id"]
