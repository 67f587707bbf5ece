"""pm_account REST API: settlement-asset balance and deposit."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.pm_account.application.schemas import DepositRequest
from src.pm_account.application.service import AccountApplicationService
from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.auth.dependencies import get_caller_id

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    caller: Annotated[str, Depends(get_caller_id)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(caller)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    caller: Annotated[str, Depends(get_caller_id)],
    request: Request,
) -> ApiResponse:
    data = await _service.deposit(caller, body.amount)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
