from datetime import datetime

from src.pm_common.enums import MarketStatus
from src.pm_common.errors import (
    MarketExpiredError,
    MarketNotActiveError,
    MarketNotResolvableError,
    MarketNotResolvedError,
)
from src.pm_market.domain.models import Market

# Liquidity removal and LP fee claims survive resolution; trading does not.
_LIQUIDITY_OPEN_STATUSES = frozenset({MarketStatus.ACTIVE, MarketStatus.RESOLVED})


def check_market_active(market: Market) -> None:
    if not market.is_active:
        raise MarketNotActiveError(market.id)


def check_market_open_for_liquidity(market: Market) -> None:
    if market.status not in _LIQUIDITY_OPEN_STATUSES:
        raise MarketNotActiveError(market.id)


def check_market_not_expired(market: Market, now: datetime) -> None:
    """Trading and liquidity adds stop at the resolution deadline."""
    if now >= market.resolution_deadline:
        raise MarketExpiredError(market.id)


def check_market_resolvable(market: Market, now: datetime) -> None:
    if now < market.resolution_deadline:
        raise MarketNotResolvableError(market.id)


def check_market_resolved(market: Market) -> None:
    if not market.is_resolved:
        raise MarketNotResolvedError(market.id)
