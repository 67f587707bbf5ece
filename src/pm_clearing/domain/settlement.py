"""Market resolution and post-resolution redemption.

Winning shares redeem 1:1 for settlement units. An INVALID outcome refunds
both sides 1:1. Redemptions burn shares and pay from custody; they do not
draw on liquidity_pool.
"""

from dataclasses import dataclass

from src.pm_common.enums import Outcome
from src.pm_common.errors import (
    InvalidOutcomeError,
    NoPayoutError,
    NoSharesToRefundError,
    NoWinningSharesError,
)
from src.pm_common.units import checked_add

RESOLVABLE_OUTCOMES = frozenset({Outcome.YES, Outcome.NO, Outcome.INVALID})


@dataclass(frozen=True)
class Redemption:
    burn_yes: int
    burn_no: int
    payout: int


def parse_outcome(outcome: Outcome | str) -> Outcome:
    """Accept an Outcome or its value; reject UNRESOLVED and unknown values."""
    try:
        parsed = Outcome(outcome)
    except ValueError:
        raise InvalidOutcomeError(str(outcome)) from None
    if parsed not in RESOLVABLE_OUTCOMES:
        raise InvalidOutcomeError(parsed.value)
    return parsed


def compute_redemption(outcome: Outcome, yes_balance: int, no_balance: int) -> Redemption:
    if outcome is Outcome.YES:
        if yes_balance == 0:
            raise NoWinningSharesError()
        redemption = Redemption(burn_yes=yes_balance, burn_no=0, payout=yes_balance)
    elif outcome is Outcome.NO:
        if no_balance == 0:
            raise NoWinningSharesError()
        redemption = Redemption(burn_yes=0, burn_no=no_balance, payout=no_balance)
    elif outcome is Outcome.INVALID:
        if yes_balance == 0 and no_balance == 0:
            raise NoSharesToRefundError()
        redemption = Redemption(
            burn_yes=yes_balance,
            burn_no=no_balance,
            payout=checked_add(yes_balance, no_balance),
        )
    else:
        raise InvalidOutcomeError(outcome.value)

    if redemption.payout == 0:
        raise NoPayoutError()
    return redemption
