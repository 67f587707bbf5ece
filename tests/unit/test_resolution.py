"""Resolution and redemption of outcome shares."""

import pytest

from src.pm_common.enums import MarketEventType, MarketStatus, Outcome, ShareSide
from src.pm_common.errors import (
    InvalidOutcomeError,
    MarketNotActiveError,
    MarketNotResolvableError,
    MarketNotResolvedError,
    NoWinningSharesError,
    NotResolverError,
)


@pytest.fixture
def traded(registry, funded, market_id) -> int:
    registry.add_liquidity("alice", market_id, 1000)
    registry.buy_shares("bob", market_id, True, 100)
    return market_id


class TestResolve:
    def test_resolve_at_deadline(self, registry, traded, clock) -> None:
        clock.advance(days=30)
        registry.resolve_market("resolver", traded, Outcome.YES)
        m = registry.get_market(traded)
        assert m.status is MarketStatus.RESOLVED
        assert m.outcome is Outcome.YES
        assert m.resolved_at == clock.now
        assert registry.events(traded)[-1].payload == {"outcome": "YES", "forced": False}

    def test_early_resolve_rejected(self, registry, traded, clock) -> None:
        clock.advance(days=29)
        with pytest.raises(MarketNotResolvableError):
            registry.resolve_market("resolver", traded, Outcome.YES)
        assert registry.get_market(traded).status is MarketStatus.ACTIVE

    def test_force_resolve_skips_deadline(self, registry, traded) -> None:
        registry.force_resolve_market("resolver", traded, "NO")
        assert registry.get_market(traded).outcome is Outcome.NO
        assert registry.events(traded)[-1].payload["forced"] is True

    def test_only_resolver(self, registry, traded, clock) -> None:
        clock.advance(days=30)
        with pytest.raises(NotResolverError):
            registry.resolve_market("owner", traded, Outcome.YES)

    def test_unresolved_outcome_rejected(self, registry, traded, clock) -> None:
        clock.advance(days=30)
        with pytest.raises(InvalidOutcomeError):
            registry.resolve_market("resolver", traded, Outcome.UNRESOLVED)

    def test_resolve_twice(self, registry, traded) -> None:
        registry.force_resolve_market("resolver", traded, "YES")
        with pytest.raises(MarketNotActiveError):
            registry.force_resolve_market("resolver", traded, "NO")


class TestClaimWinnings:
    def test_yes_winner_paid_once(self, registry, funded, traded) -> None:
        registry.force_resolve_market("resolver", traded, Outcome.YES)
        assert registry.claim_winnings("bob", traded) == 90
        assert funded.balance_of("bob") == 1_000_000 - 100 + 90
        assert registry.balance_of(traded, ShareSide.YES, "bob") == 0
        with pytest.raises(NoWinningSharesError):
            registry.claim_winnings("bob", traded)

    def test_loser_has_nothing(self, registry, traded) -> None:
        registry.force_resolve_market("resolver", traded, Outcome.NO)
        with pytest.raises(NoWinningSharesError):
            registry.claim_winnings("bob", traded)

    def test_lp_redeems_winning_side_only(self, registry, funded, traded) -> None:
        registry.force_resolve_market("resolver", traded, Outcome.NO)
        assert registry.claim_winnings("alice", traded) == 1000
        assert registry.balance_of(traded, ShareSide.YES, "alice") == 1000

    def test_invalid_refunds_both_sides(self, registry, funded, traded) -> None:
        assert registry.buy_shares("bob", traded, False, 100) == 107
        registry.force_resolve_market("resolver", traded, Outcome.INVALID)
        assert registry.claim_winnings("bob", traded) == 197
        assert registry.balance_of(traded, ShareSide.NO, "bob") == 0

    def test_before_resolution(self, registry, traded) -> None:
        with pytest.raises(MarketNotResolvedError):
            registry.claim_winnings("bob", traded)

    def test_claim_event(self, registry, traded) -> None:
        registry.force_resolve_market("resolver", traded, Outcome.YES)
        registry.claim_winnings("bob", traded)
        event = registry.events(traded)[-1]
        assert event.event_type is MarketEventType.WINNINGS_CLAIMED
        assert event.payload["payout"] == 90
