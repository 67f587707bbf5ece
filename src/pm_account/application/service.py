"""AccountApplicationService: settlement-asset balances and the deposit faucet."""

from src.pm_account.application.schemas import BalanceResponse, DepositResponse
from src.pm_account.infrastructure.memory_asset import InMemorySettlementAsset
from src.pm_market.application.registry_provider import get_settlement_asset


class AccountApplicationService:
    def __init__(self, asset: InMemorySettlementAsset | None = None) -> None:
        self._asset_override = asset

    @property
    def _asset(self) -> InMemorySettlementAsset:
        return self._asset_override or get_settlement_asset()

    async def get_balance(self, holder: str) -> BalanceResponse:
        return BalanceResponse(holder=holder, balance=self._asset.balance_of(holder))

    async def deposit(self, holder: str, amount: int) -> DepositResponse:
        balance = self._asset.mint(holder, amount)
        return DepositResponse(holder=holder, amount=amount, balance=balance)
