# src/pm_admin/api/router.py
"""Admin REST API. Authorization (resolver / owner) is enforced by the registry."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from src.pm_admin.application.service import AdminService
from src.pm_common.enums import Outcome
from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.auth.dependencies import get_caller_id

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()

Caller = Annotated[str, Depends(get_caller_id)]


class ResolveRequest(BaseModel):
    outcome: Outcome
    force: bool = False


class SetResolverRequest(BaseModel):
    resolver: str = Field(min_length=1, max_length=128)


class SetFeeRateRequest(BaseModel):
    fee_rate_bps: int = Field(ge=0)


def _ok(request: Request, data: object) -> ApiResponse:
    return success_response(data, getattr(request.state, "request_id", None))


@router.post("/markets/{market_id}/resolve")
async def resolve_market(
    market_id: int, body: ResolveRequest, caller: Caller, request: Request
) -> ApiResponse:
    result = await _service.resolve_market(caller, market_id, body.outcome, body.force)
    return _ok(request, result)


@router.post("/markets/{market_id}/protocol-fees/withdraw")
async def withdraw_protocol_fees(market_id: int, caller: Caller, request: Request) -> ApiResponse:
    result = await _service.withdraw_protocol_fees(caller, market_id)
    return _ok(request, result)


@router.put("/resolver")
async def set_resolver(body: SetResolverRequest, caller: Caller, request: Request) -> ApiResponse:
    result = await _service.set_resolver(caller, body.resolver)
    return _ok(request, result)


@router.put("/fee-rate")
async def set_fee_rate(body: SetFeeRateRequest, caller: Caller, request: Request) -> ApiResponse:
    result = await _service.set_fee_rate(caller, body.fee_rate_bps)
    return _ok(request, result)


@router.get("/config")
async def get_config(request: Request) -> ApiResponse:
    return _ok(request, await _service.get_config())


@router.get("/invariants")
async def verify_invariants(request: Request) -> ApiResponse:
    return _ok(request, await _service.verify_all_invariants())
