"""Constant-product pricing on a market's YES/NO reserves.

Pure functions; callers pass reserves explicitly and apply the result.

For a YES buy with net input a on reserves (Y, N):
    k     = Y * N
    new_y = Y + a
    new_n = k // new_y          (floor: new_y * new_n <= k, dust stays in the pool)
    out   = N - new_n
A NO buy is the mirror image.
"""

import logging
from dataclasses import dataclass

from src.pm_common.units import BPS_DENOMINATOR, calculate_fee, checked_add, checked_mul

logger = logging.getLogger(__name__)

HALF_BPS = BPS_DENOMINATOR // 2


@dataclass(frozen=True)
class TradeQuote:
    amount_in: int
    fee: int
    net_in: int
    shares_out: int
    new_yes_reserve: int
    new_no_reserve: int


def calc_shares_out(yes_reserve: int, no_reserve: int, is_yes: bool, net_in: int) -> int:
    """Shares of the bought side released by the pool for net_in (post-fee) units."""
    if yes_reserve == 0 or no_reserve == 0:
        # 1:1 bootstrap, unreachable once liquidity exists
        return net_in
    k = checked_mul(yes_reserve, no_reserve)
    if is_yes:
        new_yes = checked_add(yes_reserve, net_in)
        return no_reserve - k // new_yes
    new_no = checked_add(no_reserve, net_in)
    return yes_reserve - k // new_no


def quote_trade(
    yes_reserve: int,
    no_reserve: int,
    is_yes: bool,
    amount_in: int,
    fee_rate_bps: int,
) -> TradeQuote:
    """Full trade computation: fee skim, shares out and resulting reserves.

    The bought side's reserve grows by net_in; the opposite side's reserve
    shrinks by shares_out.
    """
    fee = calculate_fee(amount_in, fee_rate_bps)
    net_in = amount_in - fee
    shares_out = calc_shares_out(yes_reserve, no_reserve, is_yes, net_in)
    bootstrap = yes_reserve == 0 or no_reserve == 0
    if is_yes:
        new_yes = checked_add(yes_reserve, net_in)
        new_no = no_reserve if bootstrap else no_reserve - shares_out
    else:
        new_no = checked_add(no_reserve, net_in)
        new_yes = yes_reserve if bootstrap else yes_reserve - shares_out
    quote = TradeQuote(
        amount_in=amount_in,
        fee=fee,
        net_in=net_in,
        shares_out=shares_out,
        new_yes_reserve=new_yes,
        new_no_reserve=new_no,
    )
    logger.debug("Trade quote: %s", quote)
    return quote


def spot_price_bps(yes_reserve: int, no_reserve: int, is_yes: bool) -> int:
    """Price of one side in basis points: opposite reserve / (Y + N).

    Floor division, so price_yes + price_no is 10000 or 9999.
    """
    if yes_reserve == 0 or no_reserve == 0:
        return HALF_BPS
    opposite = no_reserve if is_yes else yes_reserve
    return opposite * BPS_DENOMINATOR // (yes_reserve + no_reserve)
