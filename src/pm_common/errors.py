"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Settlement asset balances
  3xxx: Market lifecycle / state
  4xxx: Trading / validation
  5xxx: Shares / payouts
  6xxx: Authorization
  7xxx: Liquidity-provider fees
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Settlement asset ---

class InsufficientBalanceError(AppError):
    def __init__(self, holder: str, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance for {holder}: required {required}, available {available}",
            422,
        )


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


class MarketNotActiveError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3002, f"Market is not active: {market_id}", 422)


class InvalidQuestionError(AppError):
    def __init__(self) -> None:
        super().__init__(3003, "Question must not be empty", 422)


class InvalidDeadlineError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3004, f"Invalid resolution deadline: {detail}", 422)


class MarketExpiredError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3005, f"Market has passed its resolution deadline: {market_id}", 422)


class MarketNotResolvableError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(
            3006, f"Market cannot be resolved before its deadline: {market_id}", 422
        )


class MarketNotResolvedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3007, f"Market is not resolved: {market_id}", 422)


class InvalidOutcomeError(AppError):
    def __init__(self, outcome: str) -> None:
        super().__init__(3008, f"Invalid resolution outcome: {outcome}", 422)


# --- 4xxx: Trading ---

class InvalidAmountError(AppError):
    def __init__(self, amount: object) -> None:
        super().__init__(4001, f"Amount must be a positive integer, got {amount!r}", 422)


class SlippageExceededError(AppError):
    def __init__(self, shares_out: int, min_shares_out: int) -> None:
        super().__init__(
            4002,
            f"Slippage exceeded: would receive {shares_out} shares, minimum {min_shares_out}",
            422,
        )


class ZeroOutputError(AppError):
    def __init__(self) -> None:
        super().__init__(4003, "Trade would produce zero shares", 422)


class InsufficientLiquidityError(AppError):
    def __init__(self, liquidity_pool: int, minimum: int) -> None:
        super().__init__(
            4004,
            f"Insufficient liquidity: pool {liquidity_pool}, minimum {minimum}",
            422,
        )


class NoMatchingPairError(AppError):
    def __init__(self) -> None:
        super().__init__(4005, "No matched YES/NO pair to remove", 422)


class FeeRateTooHighError(AppError):
    def __init__(self, fee_rate_bps: int, maximum: int) -> None:
        super().__init__(
            4006, f"Fee rate {fee_rate_bps} bps outside allowed range [0, {maximum}]", 422
        )


class ReserveDepletedError(AppError):
    def __init__(self, side: str, reserve: int, requested: int) -> None:
        super().__init__(
            4007,
            f"{requested} units would deplete the {side} reserve ({reserve})",
            422,
        )


# --- 5xxx: Shares / payouts ---

class InsufficientSharesError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5001, f"Insufficient shares: {detail}", 422)


class NoWinningSharesError(AppError):
    def __init__(self) -> None:
        super().__init__(5002, "No winning shares to redeem", 422)


class NoSharesToRefundError(AppError):
    def __init__(self) -> None:
        super().__init__(5003, "No shares to refund", 422)


class NoPayoutError(AppError):
    def __init__(self) -> None:
        super().__init__(5004, "Computed payout is zero", 422)


# --- 6xxx: Authorization ---

class NotResolverError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(6001, f"Caller is not the resolver: {caller}", 403)


class NotOwnerError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(6002, f"Caller is not the owner: {caller}", 403)


# --- 7xxx: LP fees ---

class NoLiquidityProvidedError(AppError):
    def __init__(self) -> None:
        super().__init__(7001, "Caller has not provided liquidity", 422)


class NothingToClaimError(AppError):
    def __init__(self) -> None:
        super().__init__(7002, "Nothing to claim", 422)


class ProtocolFeesLockedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(
            7003,
            f"Protocol fees are locked until resolution and every LP has exited: {market_id}",
            422,
        )


# --- 9xxx: System ---

class ReentrantCallError(AppError):
    def __init__(self, key: object) -> None:
        super().__init__(9001, f"Reentrant call rejected for {key}", 409)


class ArithmeticOverflowError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Arithmetic overflow: {detail}", 500)
