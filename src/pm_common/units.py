"""Integer arithmetic utilities for settlement-asset units and basis points.

All amounts, reserves, balances and fees are unsigned ints. No float, no Decimal.
Every division in the codebase is floor division; the pool absorbs the dust.
"""

from src.pm_common.errors import ArithmeticOverflowError, InvalidAmountError

BPS_DENOMINATOR = 10_000
MAX_UINT = (1 << 256) - 1


def validate_amount(amount: object) -> int:
    """Return amount if it is a positive int within uint range, else raise InvalidAmountError."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(amount)
    if amount <= 0 or amount > MAX_UINT:
        raise InvalidAmountError(amount)
    return amount


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > MAX_UINT:
        raise ArithmeticOverflowError(f"{a} + {b} exceeds uint range")
    return result


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticOverflowError(f"{a} - {b} underflows")
    return a - b


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > MAX_UINT:
        raise ArithmeticOverflowError(f"{a} * {b} exceeds uint range")
    return result


def calculate_fee(amount_in: int, fee_rate_bps: int) -> int:
    """Trading fee with floor division: fee = amount_in * fee_rate_bps // 10000.

    Rounds toward the trader; the sub-unit remainder stays in net input.
    """
    if amount_in == 0 or fee_rate_bps == 0:
        return 0
    return checked_mul(amount_in, fee_rate_bps) // BPS_DENOMINATOR


def bps_to_display(bps: int) -> str:
    """Convert basis points to a percentage string: 6500 -> '65.00%'."""
    return f"{bps // 100}.{bps % 100:02d}%"
