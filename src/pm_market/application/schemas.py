"""Pydantic schemas for pm_market API requests and responses.

Prices are basis points (10000 = 100%); amounts are settlement-asset base units.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.pm_clearing.domain.pricing import TradeQuote
from src.pm_common.units import bps_to_display
from src.pm_market.domain.events import MarketEvent
from src.pm_market.domain.models import Market

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    question: str
    resolution_deadline: datetime


class AddLiquidityRequest(BaseModel):
    amount: int = Field(gt=0, description="Settlement units to deposit as matched YES+NO pairs")


class RemoveLiquidityRequest(BaseModel):
    yes_amount: int = Field(ge=0)
    no_amount: int = Field(ge=0)


class BuySharesRequest(BaseModel):
    is_yes: bool
    amount_in: int = Field(gt=0, description="Settlement units paid, fee included")
    min_shares_out: int = Field(0, ge=0, description="Slippage bound")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MarketDetail(BaseModel):
    id: int
    question: str
    creator: str
    resolution_deadline: str
    created_at: str
    status: str
    outcome: str
    total_yes_shares: int
    total_no_shares: int
    liquidity_pool: int
    fees_collected: int
    price_yes_bps: int
    price_no_bps: int
    price_yes_display: str
    resolved_at: str | None

    @classmethod
    def from_domain(cls, m: Market, price_yes_bps: int, price_no_bps: int) -> "MarketDetail":
        return cls(
            id=m.id,
            question=m.question,
            creator=m.creator,
            resolution_deadline=m.resolution_deadline.isoformat(),
            created_at=m.created_at.isoformat(),
            status=m.status.value,
            outcome=m.outcome.value,
            total_yes_shares=m.total_yes_shares,
            total_no_shares=m.total_no_shares,
            liquidity_pool=m.liquidity_pool,
            fees_collected=m.fees_collected,
            price_yes_bps=price_yes_bps,
            price_no_bps=price_no_bps,
            price_yes_display=bps_to_display(price_yes_bps),
            resolved_at=m.resolved_at.isoformat() if m.resolved_at else None,
        )


class PriceResponse(BaseModel):
    market_id: int
    price_yes_bps: int
    price_no_bps: int


class QuoteResponse(BaseModel):
    market_id: int
    is_yes: bool
    amount_in: int
    fee: int
    net_in: int
    shares_out: int

    @classmethod
    def from_quote(cls, market_id: int, is_yes: bool, q: TradeQuote) -> "QuoteResponse":
        return cls(
            market_id=market_id,
            is_yes=is_yes,
            amount_in=q.amount_in,
            fee=q.fee,
            net_in=q.net_in,
            shares_out=q.shares_out,
        )


class PositionResponse(BaseModel):
    market_id: int
    holder: str
    yes_balance: int
    no_balance: int
    matched_pairs: int
    claimable_lp_fees: int
    claimed_lp_fees: int


class CreateMarketResponse(BaseModel):
    market_id: int


class LiquidityResponse(BaseModel):
    market_id: int
    amount: int
    liquidity_pool: int


class TradeResponse(BaseModel):
    market_id: int
    is_yes: bool
    amount_in: int
    shares_out: int
    price_yes_bps: int
    price_no_bps: int


class PayoutResponse(BaseModel):
    market_id: int
    amount: int


class EventListResponse(BaseModel):
    items: list[dict[str, Any]]

    @classmethod
    def from_events(cls, events: list[MarketEvent]) -> "EventListResponse":
        return cls(items=[e.to_dict() for e in events])
