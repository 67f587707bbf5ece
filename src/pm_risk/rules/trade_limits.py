from src.pm_common.errors import (
    FeeRateTooHighError,
    InsufficientLiquidityError,
    SlippageExceededError,
    ZeroOutputError,
)


def check_min_liquidity(liquidity_pool: int, minimum: int) -> None:
    """Raise InsufficientLiquidityError below the pool floor."""
    if liquidity_pool < minimum:
        raise InsufficientLiquidityError(liquidity_pool, minimum)


def check_trade_output(shares_out: int, min_shares_out: int) -> None:
    if shares_out < min_shares_out:
        raise SlippageExceededError(shares_out, min_shares_out)
    if shares_out == 0:
        raise ZeroOutputError()


def check_fee_rate(fee_rate_bps: int, maximum: int) -> None:
    if isinstance(fee_rate_bps, bool) or not isinstance(fee_rate_bps, int):
        raise FeeRateTooHighError(fee_rate_bps, maximum)
    if not (0 <= fee_rate_bps <= maximum):
        raise FeeRateTooHighError(fee_rate_bps, maximum)
