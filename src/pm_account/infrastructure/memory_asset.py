"""In-memory settlement asset: holder balances plus the market custody account.

transfer_in moves units holder -> custody, transfer_out moves custody -> holder.
mint is a faucet that creates units out of thin air, for local use and tests.
"""

import logging
from collections import defaultdict

from src.pm_common.errors import InsufficientBalanceError
from src.pm_common.units import checked_add, validate_amount

logger = logging.getLogger(__name__)

CUSTODY_ID = "__custody__"


class InMemorySettlementAsset:
    def __init__(self) -> None:
        self._balances: dict[str, int] = defaultdict(int)
        self._total_supply = 0

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, holder: str) -> int:
        return self._balances.get(holder, 0)

    def custody_balance(self) -> int:
        return self.balance_of(CUSTODY_ID)

    def mint(self, holder: str, amount: int) -> int:
        validate_amount(amount)
        self._balances[holder] = checked_add(self.balance_of(holder), amount)
        self._total_supply = checked_add(self._total_supply, amount)
        logger.info("Asset minted: holder=%s, amount=%d", holder, amount)
        return self._balances[holder]

    def transfer_in(self, holder: str, amount: int) -> None:
        self._move(holder, CUSTODY_ID, amount)

    def transfer_out(self, holder: str, amount: int) -> None:
        self._move(CUSTODY_ID, holder, amount)

    def _move(self, source: str, dest: str, amount: int) -> None:
        validate_amount(amount)
        available = self.balance_of(source)
        if available < amount:
            raise InsufficientBalanceError(source, amount, available)
        self._balances[source] = available - amount
        self._balances[dest] = checked_add(self.balance_of(dest), amount)
        logger.debug("Asset transfer: %s -> %s, amount=%d", source, dest, amount)
