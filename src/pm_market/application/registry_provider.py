"""Process-wide MarketRegistry, settlement asset and per-market locks.

The registry's operations are synchronous; async callers serialize per market
through get_market_lock() so independent markets proceed concurrently.
"""

import asyncio
from collections import defaultdict

from config.settings import settings
from src.pm_account.infrastructure.memory_asset import InMemorySettlementAsset
from src.pm_market.domain.registry import MarketRegistry

_asset: InMemorySettlementAsset | None = None
_registry: MarketRegistry | None = None
_market_locks: dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
_registry_lock: asyncio.Lock | None = None


def get_settlement_asset() -> InMemorySettlementAsset:
    global _asset  # noqa: PLW0603
    if _asset is None:
        _asset = InMemorySettlementAsset()
    return _asset


def get_market_registry() -> MarketRegistry:
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = MarketRegistry(
            asset=get_settlement_asset(),
            owner=settings.OWNER_ID,
            resolver=settings.RESOLVER_ID,
            fee_rate_bps=settings.TRADE_FEE_BPS,
            max_fee_rate_bps=settings.MAX_TRADE_FEE_BPS,
            min_liquidity=settings.MIN_LIQUIDITY,
            horizon_days=settings.MAX_RESOLUTION_HORIZON_DAYS,
        )
    return _registry


def get_market_lock(registry: MarketRegistry, market_id: int) -> asyncio.Lock:
    """Lock for an existing market; unknown ids raise MarketNotFoundError before a lock is made."""
    registry.get_market(market_id)
    return _market_locks[market_id]


def get_registry_lock() -> asyncio.Lock:
    """Guards market creation and registry-wide admin setters."""
    global _registry_lock  # noqa: PLW0603
    if _registry_lock is None:
        _registry_lock = asyncio.Lock()
    return _registry_lock


def reset_registry() -> None:
    """Drop all in-memory state (used by tests)."""
    global _asset, _registry, _registry_lock  # noqa: PLW0603
    _asset = None
    _registry = None
    _registry_lock = None
    _market_locks.clear()
