"""MarketRegistry: owns the market arena and orchestrates every state change.

Markets live in a list indexed by market id. Each mutating operation:
  1. runs its guards and computes every new value (no mutation yet),
  2. enters a per-market unit of work (reentrancy flag + snapshot),
  3. writes internal state and appends its event,
  4. moves settlement units last.
Any exception inside the unit of work, a failed transfer included, restores the
snapshot and re-raises, so a failed call leaves no trace.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

from src.pm_account.domain.asset import SettlementAssetProtocol
from src.pm_clearing.domain.fee import FeeAccountant, FeeClaim
from src.pm_clearing.domain.invariants import verify_market_invariants
from src.pm_clearing.domain.pricing import TradeQuote, quote_trade, spot_price_bps
from src.pm_clearing.domain.settlement import compute_redemption, parse_outcome
from src.pm_clearing.domain.share_ledger import OutcomeShareLedger
from src.pm_common.datetime_utils import Clock, ensure_utc, utc_now
from src.pm_common.enums import MarketEventType, MarketStatus, Outcome, ShareSide
from src.pm_common.errors import (
    InsufficientSharesError,
    InvalidAmountError,
    MarketNotFoundError,
    NoLiquidityProvidedError,
    NoMatchingPairError,
    NothingToClaimError,
    ProtocolFeesLockedError,
    ReserveDepletedError,
)
from src.pm_common.reentrancy import ReentrancyGuard
from src.pm_common.units import MAX_UINT, checked_add, checked_sub, validate_amount
from src.pm_market.domain.events import EventLog, MarketEvent
from src.pm_market.domain.models import Market
from src.pm_risk.rules.authorization import check_owner, check_resolver
from src.pm_risk.rules.market_creation import check_deadline, check_question
from src.pm_risk.rules.market_status import (
    check_market_active,
    check_market_not_expired,
    check_market_open_for_liquidity,
    check_market_resolvable,
    check_market_resolved,
)
from src.pm_risk.rules.trade_limits import (
    check_fee_rate,
    check_min_liquidity,
    check_trade_output,
)

logger = logging.getLogger(__name__)


def _validate_quantity(value: object) -> int:
    """Non-negative uint; zero is allowed (callers decide what zero means)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > MAX_UINT:
        raise InvalidAmountError(value)
    return value


class MarketRegistry:
    def __init__(
        self,
        asset: SettlementAssetProtocol,
        owner: str,
        resolver: str,
        fee_rate_bps: int = 200,
        max_fee_rate_bps: int = 500,
        min_liquidity: int = 100,
        horizon_days: int = 365,
        clock: Clock = utc_now,
    ) -> None:
        check_fee_rate(fee_rate_bps, max_fee_rate_bps)
        self._asset = asset
        self._owner = owner
        self._resolver = resolver
        self._fee_rate_bps = fee_rate_bps
        self._max_fee_rate_bps = max_fee_rate_bps
        self._min_liquidity = min_liquidity
        self._horizon_days = horizon_days
        self._clock = clock

        self._markets: list[Market] = []
        self._shares = OutcomeShareLedger()
        self._fees = FeeAccountant()
        self._events = EventLog()
        self._guard = ReentrancyGuard()

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def resolver(self) -> str:
        return self._resolver

    @property
    def fee_rate_bps(self) -> int:
        return self._fee_rate_bps

    @property
    def min_liquidity(self) -> int:
        return self._min_liquidity

    def market_count(self) -> int:
        return len(self._markets)

    def get_market(self, market_id: int) -> Market:
        """Detached copy of the market record."""
        return replace(self._require_market(market_id))

    def balance_of(self, market_id: int, side: ShareSide, holder: str) -> int:
        self._require_market(market_id)
        return self._shares.balance_of(market_id, side, holder)

    def total_supply(self, market_id: int, side: ShareSide) -> int:
        self._require_market(market_id)
        return self._shares.total_supply(market_id, side)

    def get_share_price(self, market_id: int, is_yes: bool) -> int:
        m = self._require_market(market_id)
        return spot_price_bps(m.total_yes_shares, m.total_no_shares, is_yes)

    def get_shares_out(self, market_id: int, is_yes: bool, amount_in: int) -> int:
        """Side-effect-free preview of buy_shares' output."""
        return self.quote(market_id, is_yes, amount_in).shares_out

    def quote(self, market_id: int, is_yes: bool, amount_in: int) -> TradeQuote:
        m = self._require_market(market_id)
        validate_amount(amount_in)
        return quote_trade(
            m.total_yes_shares, m.total_no_shares, is_yes, amount_in, self._fee_rate_bps
        )

    def get_claimable_liquidity_provider_fees(self, market_id: int, holder: str) -> int:
        return self._assess_fees(self._require_market(market_id), holder).claimable

    def claimed_fees(self, market_id: int, holder: str) -> int:
        self._require_market(market_id)
        return self._fees.claimed(market_id, holder)

    def events(self, market_id: int | None = None) -> list[MarketEvent]:
        if market_id is None:
            return self._events.all()
        self._require_market(market_id)
        return self._events.for_market(market_id)

    def verify_invariants(self, market_id: int) -> list[str]:
        return verify_market_invariants(self._require_market(market_id), self._shares)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_market(self, creator: str, question: str, resolution_deadline: datetime) -> int:
        now = self._clock()
        deadline = ensure_utc(resolution_deadline)
        check_question(question)
        check_deadline(deadline, now, self._horizon_days)

        market_id = len(self._markets)
        self._markets.append(
            Market(
                id=market_id,
                question=question,
                creator=creator,
                resolution_deadline=deadline,
                created_at=now,
            )
        )
        self._shares.open_market(market_id)
        self._events.append(
            MarketEventType.MARKET_CREATED, market_id, creator, now,
            question=question, resolution_deadline=deadline.isoformat(),
        )
        logger.info("Market created: id=%d creator=%s deadline=%s", market_id, creator, deadline)
        return market_id

    def add_liquidity(self, caller: str, market_id: int, amount: int) -> None:
        m = self._require_market(market_id)
        validate_amount(amount)
        check_market_active(m)
        check_market_not_expired(m, self._clock())

        new_yes = checked_add(m.total_yes_shares, amount)
        new_no = checked_add(m.total_no_shares, amount)
        new_pool = checked_add(m.liquidity_pool, amount)

        with self._unit_of_work(m, "add_liquidity"):
            m.total_yes_shares = new_yes
            m.total_no_shares = new_no
            m.liquidity_pool = new_pool
            self._shares.mint(market_id, ShareSide.YES, caller, amount)
            self._shares.mint(market_id, ShareSide.NO, caller, amount)
            self._emit(MarketEventType.LIQUIDITY_ADDED, m, caller, amount=amount)
            self._asset.transfer_in(caller, amount)

        logger.info("Liquidity added: market=%d provider=%s amount=%d", market_id, caller, amount)

    def remove_liquidity(
        self, caller: str, market_id: int, yes_amount: int, no_amount: int
    ) -> int:
        """Burn matched YES/NO pairs and return their settlement value. Returns the quantity."""
        m = self._require_market(market_id)
        _validate_quantity(yes_amount)
        _validate_quantity(no_amount)
        check_market_open_for_liquidity(m)

        yes_held = self._shares.balance_of(market_id, ShareSide.YES, caller)
        no_held = self._shares.balance_of(market_id, ShareSide.NO, caller)
        if yes_held < yes_amount or no_held < no_amount:
            raise InsufficientSharesError(
                f"requested yes={yes_amount} no={no_amount}, held yes={yes_held} no={no_held}"
            )
        quantity = min(yes_amount, no_amount)
        if quantity == 0:
            raise NoMatchingPairError()
        self._check_reserves_cover(m, quantity)

        with self._unit_of_work(m, "remove_liquidity"):
            m.total_yes_shares = checked_sub(m.total_yes_shares, quantity)
            m.total_no_shares = checked_sub(m.total_no_shares, quantity)
            m.liquidity_pool = checked_sub(m.liquidity_pool, quantity)
            self._shares.burn(market_id, ShareSide.YES, caller, quantity)
            self._shares.burn(market_id, ShareSide.NO, caller, quantity)
            self._emit(MarketEventType.LIQUIDITY_REMOVED, m, caller, amount=quantity)
            self._asset.transfer_out(caller, quantity)

        logger.info("Liquidity removed: market=%d provider=%s amount=%d", market_id, caller, quantity)
        return quantity

    def buy_shares(
        self,
        caller: str,
        market_id: int,
        is_yes: bool,
        amount_in: int,
        min_shares_out: int = 0,
    ) -> int:
        m = self._require_market(market_id)
        validate_amount(amount_in)
        _validate_quantity(min_shares_out)
        check_market_active(m)
        check_market_not_expired(m, self._clock())
        check_min_liquidity(m.liquidity_pool, self._min_liquidity)

        q = quote_trade(
            m.total_yes_shares, m.total_no_shares, is_yes, amount_in, self._fee_rate_bps
        )
        side = ShareSide.from_is_yes(is_yes)
        check_trade_output(q.shares_out, min_shares_out)
        if q.new_yes_reserve == 0 or q.new_no_reserve == 0:
            drained = side.opposite
            reserve = m.total_no_shares if is_yes else m.total_yes_shares
            raise ReserveDepletedError(drained.value, reserve, q.shares_out)
        new_fees = checked_add(m.fees_collected, q.fee)
        new_pool = checked_add(m.liquidity_pool, q.net_in)

        with self._unit_of_work(m, "buy_shares"):
            m.fees_collected = new_fees
            m.liquidity_pool = new_pool
            m.total_yes_shares = q.new_yes_reserve
            m.total_no_shares = q.new_no_reserve
            self._shares.mint(market_id, side, caller, q.shares_out)
            self._emit(
                MarketEventType.SHARES_PURCHASED, m, caller,
                side=side.value, amount_in=amount_in, fee=q.fee,
                net_in=q.net_in, shares_out=q.shares_out,
            )
            self._asset.transfer_in(caller, amount_in)

        logger.info(
            "Trade: market=%d buyer=%s side=%s in=%d fee=%d out=%d",
            market_id, caller, side.value, amount_in, q.fee, q.shares_out,
        )
        return q.shares_out

    # ------------------------------------------------------------------
    # LP fees
    # ------------------------------------------------------------------

    def claim_liquidity_provider_fees(self, caller: str, market_id: int) -> int:
        m = self._require_market(market_id)
        check_market_open_for_liquidity(m)
        claim = self._assess_fees(m, caller)
        if claim.contribution == 0:
            raise NoLiquidityProvidedError()
        if m.liquidity_pool == 0 or claim.claimable == 0:
            raise NothingToClaimError()
        new_fees = checked_sub(m.fees_collected, claim.claimable)

        with self._unit_of_work(m, "claim_liquidity_provider_fees"):
            self._fees.record_claim(market_id, caller, claim)
            m.fees_collected = new_fees
            self._emit(
                MarketEventType.LP_FEES_CLAIMED, m, caller,
                amount=claim.claimable, cumulative=claim.total_share,
            )
            self._asset.transfer_out(caller, claim.claimable)

        logger.info(
            "LP fees claimed: market=%d provider=%s amount=%d cumulative=%d",
            market_id, caller, claim.claimable, claim.total_share,
        )
        return claim.claimable

    # ------------------------------------------------------------------
    # Resolution & redemption
    # ------------------------------------------------------------------

    def resolve_market(self, caller: str, market_id: int, outcome: Outcome | str) -> None:
        self._resolve(caller, market_id, outcome, enforce_deadline=True)

    def force_resolve_market(self, caller: str, market_id: int, outcome: Outcome | str) -> None:
        """Resolver-only early settlement: skips the deadline check."""
        self._resolve(caller, market_id, outcome, enforce_deadline=False)

    def claim_winnings(self, caller: str, market_id: int) -> int:
        m = self._require_market(market_id)
        check_market_resolved(m)
        yes_bal = self._shares.balance_of(market_id, ShareSide.YES, caller)
        no_bal = self._shares.balance_of(market_id, ShareSide.NO, caller)
        redemption = compute_redemption(m.outcome, yes_bal, no_bal)

        with self._unit_of_work(m, "claim_winnings"):
            if redemption.burn_yes:
                self._shares.burn(market_id, ShareSide.YES, caller, redemption.burn_yes)
            if redemption.burn_no:
                self._shares.burn(market_id, ShareSide.NO, caller, redemption.burn_no)
            self._emit(
                MarketEventType.WINNINGS_CLAIMED, m, caller,
                outcome=m.outcome.value, yes_burned=redemption.burn_yes,
                no_burned=redemption.burn_no, payout=redemption.payout,
            )
            self._asset.transfer_out(caller, redemption.payout)

        logger.info(
            "Winnings claimed: market=%d holder=%s payout=%d", market_id, caller, redemption.payout
        )
        return redemption.payout

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def set_resolver(self, caller: str, new_resolver: str) -> None:
        check_owner(caller, self._owner)
        if not new_resolver:
            raise ValueError("resolver identity must not be empty")
        logger.info("Resolver changed: %s -> %s", self._resolver, new_resolver)
        self._resolver = new_resolver

    def set_fee_rate(self, caller: str, fee_rate_bps: int) -> None:
        check_owner(caller, self._owner)
        check_fee_rate(fee_rate_bps, self._max_fee_rate_bps)
        logger.info("Fee rate changed: %d -> %d bps", self._fee_rate_bps, fee_rate_bps)
        self._fee_rate_bps = fee_rate_bps

    def withdraw_protocol_fees(self, caller: str, market_id: int) -> int:
        """Pay the fee remainder of a resolved market to the owner.

        Only once no holder has a matched pair left, i.e. no LP can claim anymore.
        """
        check_owner(caller, self._owner)
        m = self._require_market(market_id)
        if not m.is_resolved or self._shares.has_matched_pairs(market_id):
            raise ProtocolFeesLockedError(market_id)
        amount = m.fees_collected
        if amount == 0:
            raise NothingToClaimError()

        with self._unit_of_work(m, "withdraw_protocol_fees"):
            m.fees_collected = 0
            self._emit(MarketEventType.PROTOCOL_FEES_WITHDRAWN, m, caller, amount=amount)
            self._asset.transfer_out(caller, amount)

        logger.info("Protocol fees withdrawn: market=%d amount=%d", market_id, amount)
        return amount

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_market(self, market_id: int) -> Market:
        if (
            isinstance(market_id, bool)
            or not isinstance(market_id, int)
            or not 0 <= market_id < len(self._markets)
        ):
            raise MarketNotFoundError(market_id)
        return self._markets[market_id]

    def _assess_fees(self, m: Market, holder: str) -> FeeClaim:
        return self._fees.assess(
            m.id,
            holder,
            contribution=self._shares.matched_pairs(m.id, holder),
            fees_collected=m.fees_collected,
            liquidity_pool=m.liquidity_pool,
        )

    def _check_reserves_cover(self, m: Market, quantity: int) -> None:
        """Removal must not drive one reserve to zero while the other stays positive."""
        remaining_yes = m.total_yes_shares - quantity
        remaining_no = m.total_no_shares - quantity
        if remaining_yes < 0 or (remaining_yes == 0 and remaining_no != 0):
            raise ReserveDepletedError("YES", m.total_yes_shares, quantity)
        if remaining_no < 0 or (remaining_no == 0 and remaining_yes != 0):
            raise ReserveDepletedError("NO", m.total_no_shares, quantity)
        if m.liquidity_pool < quantity:
            raise ReserveDepletedError("pool", m.liquidity_pool, quantity)

    def _resolve(
        self, caller: str, market_id: int, outcome: Outcome | str, enforce_deadline: bool
    ) -> None:
        check_resolver(caller, self._resolver)
        m = self._require_market(market_id)
        check_market_active(m)
        now = self._clock()
        if enforce_deadline:
            check_market_resolvable(m, now)
        resolved = parse_outcome(outcome)

        with self._unit_of_work(m, "resolve_market"):
            m.status = MarketStatus.RESOLVED
            m.outcome = resolved
            m.resolved_at = now
            self._emit(
                MarketEventType.MARKET_RESOLVED, m, caller,
                outcome=resolved.value, forced=not enforce_deadline,
            )

        logger.info(
            "Market resolved: id=%d outcome=%s forced=%s", market_id, resolved.value, not enforce_deadline
        )

    def _emit(self, event_type: MarketEventType, m: Market, actor: str, **payload: object) -> None:
        self._events.append(event_type, m.id, actor, self._clock(), **payload)

    @contextmanager
    def _unit_of_work(self, m: Market, operation: str) -> Iterator[None]:
        market_id = m.id
        with self._guard.hold(market_id):
            market_snap = replace(m)
            shares_snap = self._shares.snapshot(market_id)
            fees_snap = self._fees.snapshot(market_id)
            events_mark = len(self._events)
            try:
                yield
            except Exception:
                # Restore in place: callers hold a reference to the arena record.
                for name, value in vars(market_snap).items():
                    setattr(m, name, value)
                self._shares.restore(market_id, shares_snap)
                self._fees.restore(market_id, fees_snap)
                self._events.rollback(events_mark, market_id)
                logger.warning("Rolled back %s on market=%d", operation, market_id)
                raise
