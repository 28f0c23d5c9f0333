"""
Event queue for presentation collaborators.

The core never calls into rendering code. Instead every observable change
(merge, attack, heal, outcome, round change) is pushed here as an Event,
and a renderer or log consumes them in emission order, at its own pace.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional
import heapq
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events emitted by the core."""
    # Placement phase
    SHOP_REFRESHED = auto()
    UNIT_PURCHASED = auto()
    UNIT_MERGED = auto()

    # Battle
    BATTLE_STARTED = auto()
    TURN_STARTED = auto()
    ATTACK_RESOLVED = auto()
    HEAL_APPLIED = auto()
    UNIT_DEFEATED = auto()
    BATTLE_OUTCOME = auto()

    # Round lifecycle
    ROUND_ADVANCED = auto()
    GAME_OVER = auto()
    GAME_RESTARTED = auto()


@dataclass(order=True)
class Event:
    """
    A single emitted event.

    Events are ordered by sequence number, so a heap of events pops them
    in emission order.

    Attributes:
        sequence: Emission counter (lower = earlier)
        event_type: Type of event (from EventType enum)
        data: Event-specific payload
    """
    sequence: int
    event_type: EventType = field(compare=False)
    data: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __repr__(self):
        return f"Event(#{self.sequence}, type={self.event_type.name}, data={self.data})"


class EventQueue:
    """
    Priority queue of emitted events plus synchronous subscribers.

    Subscribers are called at emission time; queued events stay until a
    consumer pops or drains them.
    """

    def __init__(self, max_pending: Optional[int] = None):
        """
        Args:
            max_pending: Drop the oldest events beyond this many pending.
                None keeps everything.
        """
        self.pending: List[Event] = []  # Min-heap by sequence
        self.max_pending = max_pending
        self._sequence = 0
        self.handlers: Dict[EventType, List[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: EventType, handler: Callable[[Event], None]):
        """Register a handler called on every emission of event_type."""
        self.handlers.setdefault(event_type, []).append(handler)

    def emit(self, event_type: EventType, **data: Any) -> Event:
        """
        Record an event and notify subscribers.

        Returns:
            The emitted event
        """
        self._sequence += 1
        event = Event(sequence=self._sequence, event_type=event_type, data=data)
        heapq.heappush(self.pending, event)

        if self.max_pending is not None and len(self.pending) > self.max_pending:
            heapq.heappop(self.pending)

        for handler in self.handlers.get(event_type, []):
            handler(event)

        logger.debug("%r", event)
        return event

    def pop(self) -> Optional[Event]:
        """Pop the oldest pending event, or None if the queue is empty."""
        if not self.pending:
            return None
        return heapq.heappop(self.pending)

    def peek(self) -> Optional[Event]:
        """Look at the oldest event without removing it."""
        return self.pending[0] if self.pending else None

    def drain(self) -> List[Event]:
        """Pop every pending event, oldest first."""
        events = []
        while self.pending:
            events.append(heapq.heappop(self.pending))
        return events

    def clear(self):
        """Drop pending events. Sequence numbers keep increasing."""
        self.pending.clear()

    def __len__(self):
        return len(self.pending)
