"""OutcomeShareLedger: per-market, per-side fungible share balances.

Balances are dense maps (market_id, side) -> {holder: balance}. A holder's
entry is created on first mint and removed when burned to zero. Only the
MarketRegistry that owns the ledger mints and burns.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass

from src.pm_common.enums import ShareSide
from src.pm_common.errors import InsufficientSharesError
from src.pm_common.units import checked_add, validate_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    balances: dict[ShareSide, dict[str, int]]
    supply: dict[ShareSide, int]


class OutcomeShareLedger:
    def __init__(self) -> None:
        self._balances: dict[tuple[int, ShareSide], dict[str, int]] = defaultdict(dict)
        self._supply: dict[tuple[int, ShareSide], int] = defaultdict(int)

    def open_market(self, market_id: int) -> None:
        """Allocate the two empty sides for a new market."""
        for side in ShareSide:
            self._balances[(market_id, side)] = {}
            self._supply[(market_id, side)] = 0

    def balance_of(self, market_id: int, side: ShareSide, holder: str) -> int:
        return self._balances[(market_id, side)].get(holder, 0)

    def total_supply(self, market_id: int, side: ShareSide) -> int:
        return self._supply[(market_id, side)]

    def holders(self, market_id: int, side: ShareSide) -> list[str]:
        return list(self._balances[(market_id, side)])

    def matched_pairs(self, market_id: int, holder: str) -> int:
        """min(yes, no), the holder's liquidity contribution."""
        return min(
            self.balance_of(market_id, ShareSide.YES, holder),
            self.balance_of(market_id, ShareSide.NO, holder),
        )

    def has_matched_pairs(self, market_id: int) -> bool:
        no_book = self._balances[(market_id, ShareSide.NO)]
        return any(
            yes > 0 and no_book.get(holder, 0) > 0
            for holder, yes in self._balances[(market_id, ShareSide.YES)].items()
        )

    def mint(self, market_id: int, side: ShareSide, holder: str, amount: int) -> int:
        validate_amount(amount)
        book = self._balances[(market_id, side)]
        book[holder] = checked_add(book.get(holder, 0), amount)
        self._supply[(market_id, side)] = checked_add(self._supply[(market_id, side)], amount)
        logger.debug(
            "Shares minted: market=%d side=%s holder=%s amount=%d",
            market_id, side.value, holder, amount,
        )
        return book[holder]

    def burn(self, market_id: int, side: ShareSide, holder: str, amount: int) -> int:
        validate_amount(amount)
        book = self._balances[(market_id, side)]
        held = book.get(holder, 0)
        if held < amount:
            raise InsufficientSharesError(
                f"{holder} holds {held} {side.value} shares, burn of {amount} requested"
            )
        remaining = held - amount
        if remaining:
            book[holder] = remaining
        else:
            del book[holder]
        self._supply[(market_id, side)] -= amount
        logger.debug(
            "Shares burned: market=%d side=%s holder=%s amount=%d",
            market_id, side.value, holder, amount,
        )
        return remaining

    def snapshot(self, market_id: int) -> LedgerSnapshot:
        return LedgerSnapshot(
            balances={side: dict(self._balances[(market_id, side)]) for side in ShareSide},
            supply={side: self._supply[(market_id, side)] for side in ShareSide},
        )

    def restore(self, market_id: int, snap: LedgerSnapshot) -> None:
        for side in ShareSide:
            self._balances[(market_id, side)] = dict(snap.balances[side])
            self._supply[(market_id, side)] = snap.supply[side]
