"""Domain models for pm_market: pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime

from src.pm_common.enums import MarketStatus, Outcome


@dataclass
class Market:
    id: int                        # arena index, dense and zero-based
    question: str
    creator: str
    resolution_deadline: datetime
    created_at: datetime
    status: MarketStatus = MarketStatus.ACTIVE
    outcome: Outcome = Outcome.UNRESOLVED
    total_yes_shares: int = 0      # YES pricing reserve
    total_no_shares: int = 0       # NO pricing reserve
    liquidity_pool: int = 0        # settlement units backing the pool
    fees_collected: int = 0        # owed to LPs, not yet disbursed
    resolved_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is MarketStatus.ACTIVE

    @property
    def is_resolved(self) -> bool:
        return self.status is MarketStatus.RESOLVED
