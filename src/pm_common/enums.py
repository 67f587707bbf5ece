"""Global enums shared across bounded contexts."""

from enum import Enum


class MarketStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RESOLVED = "RESOLVED"
    CANCELLED = "CANCELLED"  # declared, no operation transitions into it


class Outcome(str, Enum):
    UNRESOLVED = "UNRESOLVED"
    YES = "YES"
    NO = "NO"
    INVALID = "INVALID"


class ShareSide(str, Enum):
    """Outcome-share side held in the share ledger."""
    YES = "YES"
    NO = "NO"

    @classmethod
    def from_is_yes(cls, is_yes: bool) -> "ShareSide":
        return cls.YES if is_yes else cls.NO

    @property
    def opposite(self) -> "ShareSide":
        return ShareSide.NO if self is ShareSide.YES else ShareSide.YES


class MarketEventType(str, Enum):
    MARKET_CREATED = "MARKET_CREATED"
    LIQUIDITY_ADDED = "LIQUIDITY_ADDED"
    LIQUIDITY_REMOVED = "LIQUIDITY_REMOVED"
    SHARES_PURCHASED = "SHARES_PURCHASED"
    MARKET_RESOLVED = "MARKET_RESOLVED"
    WINNINGS_CLAIMED = "WINNINGS_CLAIMED"
    LP_FEES_CLAIMED = "LP_FEES_CLAIMED"
    PROTOCOL_FEES_WITHDRAWN = "PROTOCOL_FEES_WITHDRAWN"
