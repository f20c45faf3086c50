# fieldstock/core/events.py
"""
Domain events for read-side caches.

Writers publish after their transaction commits, so a subscriber never sees
an event for a change that was rolled back.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Type
import logging
import threading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerChanged:
    owner_kind: str
    owner_id: str
    item_type_id: str


@dataclass(frozen=True)
class TransferStatusChanged:
    transfer_id: int
    status: str


class EventBus:
    def __init__(self):
        self._subscribers: Dict[Type, List[Callable]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type, handler: Callable) -> None:
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: Type, handler: Callable) -> None:
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, event) -> None:
        with self._lock:
            handlers = list(self._subscribers.get(type(event), []))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                # The write is already committed
                logger.exception(f"❌ Subscriber {handler!r} failed for {event!r}")

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()


event_bus = EventBus()
