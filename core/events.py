from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

import structlog

__all__ = [
    'TRANSACTION_ADDED', 'TRANSACTION_REJECTED', 'PERIOD_CHANGED',
    'Event', 'EventBus', 'log_event_handler', 'register_default_handlers',
]

logger = structlog.get_logger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        if name not in self._subscribers:
            self._subscribers[name] = []
        self._subscribers[name].append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )

        results = []
        for handler in list(self._subscribers[name]):
            results.append(handler(event, payload))
        return results

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_REJECTED = "TRANSACTION_REJECTED"
PERIOD_CHANGED = "PERIOD_CHANGED"


def log_event_handler(event: Event, payload: dict) -> dict:
    logger.info(event.name.lower(), ts=event.ts, **payload)
    return {"logged": True}


def register_default_handlers(bus: EventBus) -> EventBus:
    for name in (TRANSACTION_ADDED, TRANSACTION_REJECTED, PERIOD_CHANGED):
        bus.subscribe(name, log_event_handler)
    return bus
