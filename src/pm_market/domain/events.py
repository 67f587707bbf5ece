"""Observable market events.

Every committed registry operation appends exactly one event carrying enough
fields (market id, actor, amounts) for an off-core indexer to reconstruct the
state delta. Events from a rolled-back operation are discarded with it.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from src.pm_common.enums import MarketEventType


@dataclass(frozen=True)
class MarketEvent:
    sequence: int
    event_type: MarketEventType
    market_id: int
    actor: str
    occurred_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["event_type"] = self.event_type.value
        data["occurred_at"] = self.occurred_at.isoformat()
        return data


class EventLog:
    """Append-only in-memory log; rollback() exists only for unit-of-work aborts."""

    def __init__(self) -> None:
        self._events: list[MarketEvent] = []
        self._next_sequence = 0

    def __len__(self) -> int:
        return len(self._events)

    def append(
        self,
        event_type: MarketEventType,
        market_id: int,
        actor: str,
        occurred_at: datetime,
        **payload: Any,
    ) -> MarketEvent:
        event = MarketEvent(
            sequence=self._next_sequence,
            event_type=event_type,
            market_id=market_id,
            actor=actor,
            occurred_at=occurred_at,
            payload=payload,
        )
        self._next_sequence += 1
        self._events.append(event)
        return event

    def rollback(self, mark: int, market_id: int) -> None:
        """Drop this market's events appended after mark; other markets' events stay."""
        tail = [e for e in self._events[mark:] if e.market_id != market_id]
        self._events[mark:] = tail

    def for_market(self, market_id: int) -> list[MarketEvent]:
        return [e for e in self._events if e.market_id == market_id]

    def all(self) -> list[MarketEvent]:
        return list(self._events)
