import logging
from typing import Callable, List

log = logging.getLogger(__name__)


class Subscription:
    """Handle returned by Signal.subscribe; cancel() detaches the listener."""

    def __init__(self, signal: "Signal", listener: Callable):
        self._signal = signal
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._signal is not None and self.listener in self._signal.listeners

    def cancel(self):
        if self._signal is not None:
            self._signal.disconnect(self.listener)
            self._signal = None


class Signal:
    """
    Synchronous listener list. emit() calls every listener in subscription
    order on the caller's thread.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.listeners: List[Callable] = []

    def subscribe(self, listener: Callable) -> Subscription:
        self.listeners.append(listener)
        return Subscription(self, listener)

    def disconnect(self, listener: Callable):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def emit(self, *args):
        for listener in list(self.listeners):
            listener(*args)

    def __len__(self) -> int:
        return len(self.listeners)
