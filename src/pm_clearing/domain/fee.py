"""Liquidity-provider fee accounting: pro-rata claims without double payment.

A provider's contribution is min(yes_balance, no_balance) at claim time.
Their cumulative entitlement is

    total_share = contribution * fees_collected // liquidity_pool

and the ledger keeps, per (market, holder), the cumulative amount already
credited (the watermark). A claim pays total_share - watermark and resyncs the
watermark to total_share. When other claims have shrunk fees_collected so that
total_share <= watermark, nothing is owed: the delta is zero, never negative.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass

from src.pm_common.units import checked_mul

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeClaim:
    contribution: int
    total_share: int
    already_claimed: int
    claimable: int


def calc_total_share(contribution: int, fees_collected: int, liquidity_pool: int) -> int:
    """Floor division; the remainder stays in fees_collected as dust."""
    if contribution == 0 or liquidity_pool == 0:
        return 0
    return checked_mul(contribution, fees_collected) // liquidity_pool


class FeeAccountant:
    def __init__(self) -> None:
        self._claimed: dict[int, dict[str, int]] = defaultdict(dict)

    def claimed(self, market_id: int, holder: str) -> int:
        return self._claimed[market_id].get(holder, 0)

    def assess(
        self,
        market_id: int,
        holder: str,
        contribution: int,
        fees_collected: int,
        liquidity_pool: int,
    ) -> FeeClaim:
        total_share = calc_total_share(contribution, fees_collected, liquidity_pool)
        already = self.claimed(market_id, holder)
        claimable = total_share - already if total_share > already else 0
        return FeeClaim(
            contribution=contribution,
            total_share=total_share,
            already_claimed=already,
            claimable=claimable,
        )

    def record_claim(self, market_id: int, holder: str, claim: FeeClaim) -> None:
        """Resync the watermark to the freshly computed cumulative share."""
        if claim.total_share < self.claimed(market_id, holder):
            raise ValueError("fee watermark must not decrease")
        self._claimed[market_id][holder] = claim.total_share
        logger.debug(
            "Fee watermark: market=%d holder=%s claimed=%d",
            market_id, holder, claim.total_share,
        )

    def snapshot(self, market_id: int) -> dict[str, int]:
        return dict(self._claimed[market_id])

    def restore(self, market_id: int, snap: dict[str, int]) -> None:
        self._claimed[market_id] = dict(snap)
