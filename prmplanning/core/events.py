"""Observer hooks for planner progress events."""

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerEvent:
    """A single progress notification from a planner or roadmap."""
    name: str
    source: str
    data: Dict[str, Any] = field(default_factory=dict)


PlannerObserver = Callable[[PlannerEvent], None]


class EventEmitter:
    """Mixin that forwards named events to attached observers and the log."""

    def __init__(self):
        self._event_observers: List[PlannerObserver] = []

    def add_observer(self, observer: PlannerObserver):
        self._event_observers.append(observer)

    def remove_observer(self, observer: PlannerObserver):
        if observer in self._event_observers:
            self._event_observers.remove(observer)

    def emit(self, name: str, level: int = logging.DEBUG, **data):
        event = PlannerEvent(name, type(self).__name__, data)
        logger.log(level, "%s: %s %s", event.source, name, data)
        for observer in list(self._event_observers):
            observer(event)
