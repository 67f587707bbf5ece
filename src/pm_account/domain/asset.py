"""SettlementAsset Protocol: the fungible balance markets denominate in.

The market core only pulls funds in, pays funds out and queries balances.
Implementations must raise on failure (never transfer partially).
"""

from typing import Protocol


class SettlementAssetProtocol(Protocol):
    def transfer_in(self, holder: str, amount: int) -> None: ...

    def transfer_out(self, holder: str, amount: int) -> None: ...

    def balance_of(self, holder: str) -> int: ...

    def custody_balance(self) -> int: ...
