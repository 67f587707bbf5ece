"""FastAPI dependency: get_caller_id.

Wallet and session management live outside this service; the upstream gateway
authenticates the caller and forwards its identity in the X-Caller-Id header.

Usage in any router:
    from src.pm_gateway.auth.dependencies import get_caller_id

    @router.post("/something")
    async def handler(caller: Annotated[str, Depends(get_caller_id)]):
        ...
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

CALLER_HEADER = "X-Caller-Id"

_MISSING_CALLER_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail=f"Missing {CALLER_HEADER} header",
)


async def get_caller_id(
    x_caller_id: Annotated[str | None, Header(alias=CALLER_HEADER)] = None,
) -> str:
    """Return the trimmed caller identity; HTTP 401 if absent or blank."""
    if x_caller_id is None or not x_caller_id.strip():
        raise _MISSING_CALLER_EXCEPTION
    return x_caller_id.strip()
