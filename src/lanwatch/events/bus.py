"""In-process event bus for scan lifecycle notifications.

The orchestrator and scheduler publish events (scan progress, device
discoveries, rogue devices, schedule triggers); subscribers register for
the types they care about. Every event gets a monotonic sequence number
and the most recent ones are kept so late subscribers can ``replay()``.

Delivery is awaited in subscription order. A failing subscriber is logged
and skipped; it never breaks the publisher or the other subscribers.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable
from uuid import uuid4

logger = logging.getLogger(__name__)

EventCallback = Callable[[dict[str, Any]], Awaitable[None]]

WILDCARD = "*"


@dataclass
class Subscription:
    callback: EventCallback
    event_types: frozenset[str]
    id: str = field(default_factory=lambda: uuid4().hex)

    def matches(self, event_type: str) -> bool:
        return WILDCARD in self.event_types or event_type in self.event_types


class EventBus:
    """Async pub/sub with a bounded replay buffer.

    Parameters
    ----------
    history_size:
        Number of most recent events retained for ``replay()``.
    """

    def __init__(self, history_size: int = 1000) -> None:
        if history_size < 1:
            raise ValueError("history_size must be >= 1")
        self._subscriptions: list[Subscription] = []
        self._history: deque[dict[str, Any]] = deque(maxlen=history_size)
        self._seq = 0

    @property
    def latest_seq(self) -> int:
        return self._seq

    async def publish(
        self,
        event_type: str,
        payload: dict[str, Any],
        source_id: str | None = None,
    ) -> int:
        """Record *event_type* and deliver it. Returns its sequence number."""
        self._seq += 1
        event = {
            "seq": self._seq,
            "event_type": event_type,
            "payload": payload,
            "source_id": source_id,
        }
        self._history.append(event)

        for sub in [s for s in self._subscriptions if s.matches(event_type)]:
            try:
                await sub.callback(event)
            except Exception:
                logger.exception("Subscriber %s failed on %s", sub.id, event_type)
        return self._seq

    def subscribe(self, event_types: Iterable[str], callback: EventCallback) -> Subscription:
        """Register *callback* for *event_types*; ``["*"]`` matches everything."""
        sub = Subscription(callback=callback, event_types=frozenset(event_types))
        self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions = [s for s in self._subscriptions if s.id != subscription.id]

    def replay(self, since_seq: int = 0) -> list[dict[str, Any]]:
        """Retained events with ``seq > since_seq``, oldest first."""
        return [e for e in self._history if e["seq"] > since_seq]
