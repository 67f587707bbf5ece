# src/pm_admin/application/service.py
"""Admin application service: resolution, owner setters, invariant audit."""
from typing import Any

from src.pm_common.enums import Outcome
from src.pm_market.application.registry_provider import (
    get_market_lock,
    get_market_registry,
    get_registry_lock,
)
from src.pm_market.domain.registry import MarketRegistry


class AdminService:
    def __init__(self, registry: MarketRegistry | None = None) -> None:
        self._registry_override = registry

    @property
    def _registry(self) -> MarketRegistry:
        return self._registry_override or get_market_registry()

    async def resolve_market(
        self, caller: str, market_id: int, outcome: Outcome, force: bool = False
    ) -> dict[str, Any]:
        async with get_market_lock(self._registry, market_id):
            if force:
                self._registry.force_resolve_market(caller, market_id, outcome)
            else:
                self._registry.resolve_market(caller, market_id, outcome)
            m = self._registry.get_market(market_id)
        return {
            "market_id": market_id,
            "outcome": m.outcome.value,
            "status": m.status.value,
            "forced": force,
        }

    async def set_resolver(self, caller: str, resolver: str) -> dict[str, Any]:
        async with get_registry_lock():
            self._registry.set_resolver(caller, resolver)
        return {"resolver": self._registry.resolver}

    async def set_fee_rate(self, caller: str, fee_rate_bps: int) -> dict[str, Any]:
        async with get_registry_lock():
            self._registry.set_fee_rate(caller, fee_rate_bps)
        return {"fee_rate_bps": self._registry.fee_rate_bps}

    async def withdraw_protocol_fees(self, caller: str, market_id: int) -> dict[str, Any]:
        async with get_market_lock(self._registry, market_id):
            amount = self._registry.withdraw_protocol_fees(caller, market_id)
        return {"market_id": market_id, "amount": amount}

    async def get_config(self) -> dict[str, Any]:
        reg = self._registry
        return {
            "owner": reg.owner,
            "resolver": reg.resolver,
            "fee_rate_bps": reg.fee_rate_bps,
            "min_liquidity": reg.min_liquidity,
            "market_count": reg.market_count(),
        }

    async def verify_all_invariants(self) -> dict[str, object]:
        """Run per-market invariant checks over every market in the arena."""
        violations: list[str] = []
        for market_id in range(self._registry.market_count()):
            violations.extend(self._registry.verify_invariants(market_id))
        return {"ok": len(violations) == 0, "violations": violations}
