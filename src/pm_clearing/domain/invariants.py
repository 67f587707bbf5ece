"""Market invariant verification.

INV-1: status == ACTIVE  <=>  outcome == UNRESOLVED (CANCELLED carries no outcome)
INV-2: reserves are both zero before the first liquidity add, both positive after
INV-3: every counter is a non-negative int
INV-4: ledger supply per side equals the sum of holder balances
"""

import logging

from src.pm_clearing.domain.share_ledger import OutcomeShareLedger
from src.pm_common.enums import MarketStatus, Outcome, ShareSide
from src.pm_market.domain.models import Market

logger = logging.getLogger(__name__)


def verify_market_invariants(market: Market, ledger: OutcomeShareLedger) -> list[str]:
    """Return a list of violation messages; empty when the market is consistent."""
    violations: list[str] = []
    mid = market.id

    if market.status is MarketStatus.ACTIVE and market.outcome is not Outcome.UNRESOLVED:
        violations.append(f"INV-1 violated: market={mid} ACTIVE with outcome {market.outcome.value}")
    if market.status is MarketStatus.RESOLVED and market.outcome is Outcome.UNRESOLVED:
        violations.append(f"INV-1 violated: market={mid} RESOLVED without outcome")

    yes, no = market.total_yes_shares, market.total_no_shares
    if (yes == 0) != (no == 0):
        violations.append(f"INV-2 violated: market={mid} reserves yes={yes} no={no}")

    for name in ("total_yes_shares", "total_no_shares", "liquidity_pool", "fees_collected"):
        value = getattr(market, name)
        if not isinstance(value, int) or value < 0:
            violations.append(f"INV-3 violated: market={mid} {name}={value!r}")

    for side in ShareSide:
        held = sum(ledger.balance_of(mid, side, h) for h in ledger.holders(mid, side))
        supply = ledger.total_supply(mid, side)
        if held != supply:
            violations.append(
                f"INV-4 violated: market={mid} side={side.value} supply={supply} != held={held}"
            )

    if violations:
        logger.warning("Invariant violations for market=%d: %s", mid, violations)
    else:
        logger.debug("Invariants OK: market=%d, pool=%d, fees=%d", mid, market.liquidity_pool, market.fees_collected)
    return violations
