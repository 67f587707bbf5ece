"""Liquidity-provider fee claims: pro-rata shares, watermarks, conservation."""

import pytest

from src.pm_common.enums import MarketEventType
from src.pm_common.errors import NoLiquidityProvidedError, NothingToClaimError


@pytest.fixture
def two_lp_market(registry, funded, market_id) -> int:
    registry.add_liquidity("alice", market_id, 1000)
    registry.add_liquidity("bob", market_id, 3000)
    registry.buy_shares("carol", market_id, True, 1000)
    return market_id


class TestClaimable:
    def test_pro_rata_after_trade(self, registry, two_lp_market) -> None:
        m = registry.get_market(two_lp_market)
        assert (m.fees_collected, m.liquidity_pool) == (20, 4980)
        assert registry.get_claimable_liquidity_provider_fees(two_lp_market, "alice") == 4
        assert registry.get_claimable_liquidity_provider_fees(two_lp_market, "bob") == 12

    def test_claimable_never_exceeds_trade_fee(self, registry, two_lp_market) -> None:
        total = sum(
            registry.get_claimable_liquidity_provider_fees(two_lp_market, h)
            for h in ("alice", "bob", "carol")
        )
        assert total <= registry.get_market(two_lp_market).fees_collected

    def test_trader_without_pairs_has_nothing(self, registry, two_lp_market) -> None:
        assert registry.get_claimable_liquidity_provider_fees(two_lp_market, "carol") == 0


class TestClaim:
    def test_sequential_claims_conserve_fees(self, registry, funded, two_lp_market) -> None:
        assert registry.claim_liquidity_provider_fees("alice", two_lp_market) == 4
        # bob's share is recomputed against the shrunk fee balance: 3000 * 16 // 4980
        assert registry.claim_liquidity_provider_fees("bob", two_lp_market) == 9
        # The 7 left over is not owed to any LP; the owner withdraws it after resolution.
        assert registry.get_market(two_lp_market).fees_collected == 7
        assert funded.balance_of("alice") == 1_000_000 - 1000 + 4
        assert funded.balance_of("bob") == 1_000_000 - 3000 + 9

    def test_watermark_pays_only_new_fees(self, registry, two_lp_market) -> None:
        registry.claim_liquidity_provider_fees("alice", two_lp_market)
        registry.buy_shares("carol", two_lp_market, True, 1000)
        m = registry.get_market(two_lp_market)
        assert (m.fees_collected, m.liquidity_pool) == (36, 5960)
        # 1000 * 36 // 5960 = 6, minus the 4 already claimed
        assert registry.get_claimable_liquidity_provider_fees(two_lp_market, "alice") == 2
        assert registry.claim_liquidity_provider_fees("alice", two_lp_market) == 2
        assert registry.claimed_fees(two_lp_market, "alice") == 6

    def test_second_claim_is_rejected(self, registry, funded, market_id) -> None:
        """Nothing owed on a repeat claim: the getter reads 0 and the claim raises
        NothingToClaimError without touching state or underflowing the watermark."""
        registry.add_liquidity("alice", market_id, 1000)
        registry.buy_shares("bob", market_id, True, 100)
        assert registry.claim_liquidity_provider_fees("alice", market_id) == 1
        assert registry.get_claimable_liquidity_provider_fees(market_id, "alice") == 0
        with pytest.raises(NothingToClaimError):
            registry.claim_liquidity_provider_fees("alice", market_id)
        assert registry.get_market(market_id).fees_collected == 1
        assert registry.claimed_fees(market_id, "alice") == 1

    def test_claims_never_exceed_collected(self, registry, two_lp_market) -> None:
        before = registry.get_market(two_lp_market).fees_collected
        paid = sum(
            registry.claim_liquidity_provider_fees(holder, two_lp_market)
            for holder in ("bob", "alice")
        )
        remaining = registry.get_market(two_lp_market).fees_collected
        assert paid + remaining == before
        assert remaining >= 0

    def test_non_provider(self, registry, two_lp_market) -> None:
        with pytest.raises(NoLiquidityProvidedError):
            registry.claim_liquidity_provider_fees("carol", two_lp_market)

    def test_no_fees_yet(self, registry, funded, market_id) -> None:
        registry.add_liquidity("alice", market_id, 1000)
        with pytest.raises(NothingToClaimError):
            registry.claim_liquidity_provider_fees("alice", market_id)

    def test_emits_claim_event(self, registry, two_lp_market) -> None:
        registry.claim_liquidity_provider_fees("bob", two_lp_market)
        event = registry.events(two_lp_market)[-1]
        assert event.event_type is MarketEventType.LP_FEES_CLAIMED
        assert event.payload == {"amount": 12, "cumulative": 12}
