"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_account.infrastructure.memory_asset import InMemorySettlementAsset
from src.pm_market.application.registry_provider import reset_registry
from src.pm_market.domain.registry import MarketRegistry

OWNER = "owner"
RESOLVER = "resolver"
T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _fresh_registry():
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def asset() -> InMemorySettlementAsset:
    return InMemorySettlementAsset()


@pytest.fixture
def registry(asset: InMemorySettlementAsset, clock: FakeClock) -> MarketRegistry:
    return MarketRegistry(
        asset=asset,
        owner=OWNER,
        resolver=RESOLVER,
        fee_rate_bps=200,
        max_fee_rate_bps=500,
        min_liquidity=100,
        clock=clock,
    )


@pytest.fixture
def funded(asset: InMemorySettlementAsset) -> InMemorySettlementAsset:
    for holder in ("alice", "bob", "carol", "dave"):
        asset.mint(holder, 1_000_000)
    return asset


@pytest.fixture
def market_id(registry: MarketRegistry, clock: FakeClock) -> int:
    return registry.create_market("creator", "Will it rain?", clock.now + timedelta(days=30))


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
