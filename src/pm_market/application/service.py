"""MarketApplicationService: thin async composition layer over MarketRegistry.

Mutations hold the market's asyncio.Lock for the duration of the (synchronous)
registry call. Reads are lock-free.
"""

from datetime import datetime

from src.pm_common.enums import ShareSide
from src.pm_market.application.registry_provider import (
    get_market_lock,
    get_market_registry,
    get_registry_lock,
)
from src.pm_market.application.schemas import (
    CreateMarketResponse,
    EventListResponse,
    LiquidityResponse,
    MarketDetail,
    PayoutResponse,
    PositionResponse,
    PriceResponse,
    QuoteResponse,
    TradeResponse,
)
from src.pm_market.domain.registry import MarketRegistry


class MarketApplicationService:
    def __init__(self, registry: MarketRegistry | None = None) -> None:
        self._registry_override = registry

    @property
    def _registry(self) -> MarketRegistry:
        return self._registry_override or get_market_registry()

    # --- reads ---

    async def get_market(self, market_id: int) -> MarketDetail:
        m = self._registry.get_market(market_id)
        return MarketDetail.from_domain(
            m,
            price_yes_bps=self._registry.get_share_price(market_id, True),
            price_no_bps=self._registry.get_share_price(market_id, False),
        )

    async def get_price(self, market_id: int) -> PriceResponse:
        return PriceResponse(
            market_id=market_id,
            price_yes_bps=self._registry.get_share_price(market_id, True),
            price_no_bps=self._registry.get_share_price(market_id, False),
        )

    async def get_quote(self, market_id: int, is_yes: bool, amount_in: int) -> QuoteResponse:
        q = self._registry.quote(market_id, is_yes, amount_in)
        return QuoteResponse.from_quote(market_id, is_yes, q)

    async def get_position(self, market_id: int, holder: str) -> PositionResponse:
        reg = self._registry
        yes = reg.balance_of(market_id, ShareSide.YES, holder)
        no = reg.balance_of(market_id, ShareSide.NO, holder)
        return PositionResponse(
            market_id=market_id,
            holder=holder,
            yes_balance=yes,
            no_balance=no,
            matched_pairs=min(yes, no),
            claimable_lp_fees=reg.get_claimable_liquidity_provider_fees(market_id, holder),
            claimed_lp_fees=reg.claimed_fees(market_id, holder),
        )

    async def list_events(self, market_id: int) -> EventListResponse:
        return EventListResponse.from_events(self._registry.events(market_id))

    # --- mutations ---

    async def create_market(
        self, creator: str, question: str, resolution_deadline: datetime
    ) -> CreateMarketResponse:
        async with get_registry_lock():
            market_id = self._registry.create_market(creator, question, resolution_deadline)
        return CreateMarketResponse(market_id=market_id)

    async def add_liquidity(self, caller: str, market_id: int, amount: int) -> LiquidityResponse:
        async with get_market_lock(self._registry, market_id):
            self._registry.add_liquidity(caller, market_id, amount)
            pool = self._registry.get_market(market_id).liquidity_pool
        return LiquidityResponse(market_id=market_id, amount=amount, liquidity_pool=pool)

    async def remove_liquidity(
        self, caller: str, market_id: int, yes_amount: int, no_amount: int
    ) -> LiquidityResponse:
        async with get_market_lock(self._registry, market_id):
            removed = self._registry.remove_liquidity(caller, market_id, yes_amount, no_amount)
            pool = self._registry.get_market(market_id).liquidity_pool
        return LiquidityResponse(market_id=market_id, amount=removed, liquidity_pool=pool)

    async def buy_shares(
        self, caller: str, market_id: int, is_yes: bool, amount_in: int, min_shares_out: int
    ) -> TradeResponse:
        async with get_market_lock(self._registry, market_id):
            shares_out = self._registry.buy_shares(
                caller, market_id, is_yes, amount_in, min_shares_out
            )
            price_yes = self._registry.get_share_price(market_id, True)
            price_no = self._registry.get_share_price(market_id, False)
        return TradeResponse(
            market_id=market_id,
            is_yes=is_yes,
            amount_in=amount_in,
            shares_out=shares_out,
            price_yes_bps=price_yes,
            price_no_bps=price_no,
        )

    async def claim_lp_fees(self, caller: str, market_id: int) -> PayoutResponse:
        async with get_market_lock(self._registry, market_id):
            amount = self._registry.claim_liquidity_provider_fees(caller, market_id)
        return PayoutResponse(market_id=market_id, amount=amount)

    async def claim_winnings(self, caller: str, market_id: int) -> PayoutResponse:
        async with get_market_lock(self._registry, market_id):
            amount = self._registry.claim_winnings(caller, market_id)
        return PayoutResponse(market_id=market_id, amount=amount)
