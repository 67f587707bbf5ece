"""pm_market REST endpoints.

POST /markets                                  — create market
GET  /markets/{market_id}                      — full detail with spot prices
GET  /markets/{market_id}/price                — spot prices (bps)
GET  /markets/{market_id}/quote                — preview a buy
GET  /markets/{market_id}/events               — event log
GET  /markets/{market_id}/positions/{holder}   — balances + LP fee state
POST /markets/{market_id}/liquidity            — add liquidity
POST /markets/{market_id}/liquidity/remove     — remove matched pairs
POST /markets/{market_id}/buy                  — buy YES or NO shares
POST /markets/{market_id}/fees/claim           — claim LP fees
POST /markets/{market_id}/claim                — redeem after resolution
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.auth.dependencies import get_caller_id
from src.pm_market.application.schemas import (
    AddLiquidityRequest,
    BuySharesRequest,
    CreateMarketRequest,
    RemoveLiquidityRequest,
)
from src.pm_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()

Caller = Annotated[str, Depends(get_caller_id)]


def _ok(request: Request, data: object) -> ApiResponse:
    return success_response(data, getattr(request.state, "request_id", None))


@router.post("", status_code=201)
async def create_market(body: CreateMarketRequest, caller: Caller, request: Request) -> ApiResponse:
    result = await _service.create_market(caller, body.question, body.resolution_deadline)
    return _ok(request, result.model_dump())


@router.get("/{market_id}")
async def get_market(market_id: int, request: Request) -> ApiResponse:
    result = await _service.get_market(market_id)
    return _ok(request, result.model_dump())


@router.get("/{market_id}/price")
async def get_price(market_id: int, request: Request) -> ApiResponse:
    result = await _service.get_price(market_id)
    return _ok(request, result.model_dump())


@router.get("/{market_id}/quote")
async def get_quote(
    market_id: int,
    request: Request,
    is_yes: bool = Query(...),
    amount_in: int = Query(..., gt=0),
) -> ApiResponse:
    result = await _service.get_quote(market_id, is_yes, amount_in)
    return _ok(request, result.model_dump())


@router.get("/{market_id}/events")
async def list_events(market_id: int, request: Request) -> ApiResponse:
    result = await _service.list_events(market_id)
    return _ok(request, result.model_dump())


@router.get("/{market_id}/positions/{holder}")
async def get_position(market_id: int, holder: str, request: Request) -> ApiResponse:
    result = await _service.get_position(market_id, holder)
    return _ok(request, result.model_dump())


@router.post("/{market_id}/liquidity")
async def add_liquidity(
    market_id: int, body: AddLiquidityRequest, caller: Caller, request: Request
) -> ApiResponse:
    result = await _service.add_liquidity(caller, market_id, body.amount)
    return _ok(request, result.model_dump())


@router.post("/{market_id}/liquidity/remove")
async def remove_liquidity(
    market_id: int, body: RemoveLiquidityRequest, caller: Caller, request: Request
) -> ApiResponse:
    result = await _service.remove_liquidity(caller, market_id, body.yes_amount, body.no_amount)
    return _ok(request, result.model_dump())


@router.post("/{market_id}/buy")
async def buy_shares(
    market_id: int, body: BuySharesRequest, caller: Caller, request: Request
) -> ApiResponse:
    result = await _service.buy_shares(
        caller, market_id, body.is_yes, body.amount_in, body.min_shares_out
    )
    return _ok(request, result.model_dump())


@router.post("/{market_id}/fees/claim")
async def claim_lp_fees(market_id: int, caller: Caller, request: Request) -> ApiResponse:
    result = await _service.claim_lp_fees(caller, market_id)
    return _ok(request, result.model_dump())


@router.post("/{market_id}/claim")
async def claim_winnings(market_id: int, caller: Caller, request: Request) -> ApiResponse:
    result = await _service.claim_winnings(caller, market_id)
    return _ok(request, result.model_dump())
