"""Owner and resolver administration, sync registry and async AdminService."""

import pytest

from src.pm_admin.application.service import AdminService
from src.pm_common.enums import MarketEventType, Outcome
from src.pm_common.errors import (
    FeeRateTooHighError,
    NothingToClaimError,
    NotOwnerError,
    NotResolverError,
    ProtocolFeesLockedError,
)


@pytest.fixture
def traded(registry, funded, market_id) -> int:
    registry.add_liquidity("alice", market_id, 1000)
    registry.buy_shares("bob", market_id, True, 100)
    return market_id


class TestSetters:
    def test_set_fee_rate(self, registry) -> None:
        registry.set_fee_rate("owner", 0)
        assert registry.fee_rate_bps == 0

    def test_fee_rate_above_cap(self, registry) -> None:
        with pytest.raises(FeeRateTooHighError):
            registry.set_fee_rate("owner", 501)
        assert registry.fee_rate_bps == 200

    def test_fee_rate_requires_owner(self, registry) -> None:
        with pytest.raises(NotOwnerError):
            registry.set_fee_rate("alice", 100)

    def test_set_resolver_hands_over(self, registry, traded) -> None:
        registry.set_resolver("owner", "oracle")
        with pytest.raises(NotResolverError):
            registry.force_resolve_market("resolver", traded, Outcome.YES)
        registry.force_resolve_market("oracle", traded, Outcome.YES)

    def test_set_resolver_requires_owner(self, registry) -> None:
        with pytest.raises(NotOwnerError):
            registry.set_resolver("resolver", "mallory")

    def test_empty_resolver(self, registry) -> None:
        with pytest.raises(ValueError):
            registry.set_resolver("owner", "")


class TestProtocolFees:
    def test_locked_while_active(self, registry, traded) -> None:
        with pytest.raises(ProtocolFeesLockedError):
            registry.withdraw_protocol_fees("owner", traded)

    def test_locked_while_lp_holds_pairs(self, registry, traded) -> None:
        registry.force_resolve_market("resolver", traded, Outcome.YES)
        with pytest.raises(ProtocolFeesLockedError):
            registry.withdraw_protocol_fees("owner", traded)

    def test_withdraw_after_lp_exit(self, registry, funded, traded) -> None:
        registry.force_resolve_market("resolver", traded, Outcome.YES)
        assert registry.claim_winnings("alice", traded) == 1000
        assert registry.withdraw_protocol_fees("owner", traded) == 2
        assert funded.balance_of("owner") == 2
        assert registry.get_market(traded).fees_collected == 0
        assert registry.events(traded)[-1].event_type is MarketEventType.PROTOCOL_FEES_WITHDRAWN
        with pytest.raises(NothingToClaimError):
            registry.withdraw_protocol_fees("owner", traded)

    def test_requires_owner(self, registry, traded) -> None:
        with pytest.raises(NotOwnerError):
            registry.withdraw_protocol_fees("alice", traded)


class TestAdminService:
    async def test_resolve(self, registry, traded, clock) -> None:
        svc = AdminService(registry)
        clock.advance(days=30)
        result = await svc.resolve_market("resolver", traded, Outcome.NO)
        assert result == {"market_id": traded, "outcome": "NO", "status": "RESOLVED", "forced": False}

    async def test_force_resolve(self, registry, traded) -> None:
        result = await AdminService(registry).resolve_market(
            "resolver", traded, Outcome.INVALID, force=True
        )
        assert result["forced"] is True
        assert result["outcome"] == "INVALID"

    async def test_config(self, registry, market_id) -> None:
        config = await AdminService(registry).get_config()
        assert config == {
            "owner": "owner",
            "resolver": "resolver",
            "fee_rate_bps": 200,
            "min_liquidity": 100,
            "market_count": 1,
        }

    async def test_setters(self, registry) -> None:
        svc = AdminService(registry)
        assert await svc.set_fee_rate("owner", 300) == {"fee_rate_bps": 300}
        assert await svc.set_resolver("owner", "oracle") == {"resolver": "oracle"}

    async def test_invariant_audit(self, registry, traded) -> None:
        assert await AdminService(registry).verify_all_invariants() == {
            "ok": True,
            "violations": [],
        }
