"""Pointer-down events dispatched by the host page.

The host reports every pointer-down together with whether it landed inside the
chart and inside the search box. Charts subscribe while mounted and must
release their subscription on teardown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from statwheel.utils.monitoring import logger


@dataclass(frozen=True)
class PointerDownEvent:
    inside_chart: bool
    inside_search: bool = False


Handler = Callable[[PointerDownEvent], None]


class Subscription:
    """Handle returned by ``PointerEventBus.subscribe``; releasing twice is harmless."""

    def __init__(self, bus: "PointerEventBus", handler: Handler):
        self._bus = bus
        self._handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._bus._remove(self._handler)
            self.active = False


class PointerEventBus:
    def __init__(self):
        self._handlers: List[Handler] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Handler) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def _remove(self, handler: Handler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            logger.debug("Pointer handler already removed")

    def dispatch(self, event: PointerDownEvent) -> None:
        for handler in list(self._handlers):
            handler(event)

