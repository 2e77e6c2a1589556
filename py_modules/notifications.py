"""
Notification Fan-out
Latest-value observables shared by the client components
"""
from typing import Any, Callable, Generic, List, Optional, TypeVar

from plugin_logging import logger

T = TypeVar("T")

Callback = Callable[[Any], None]
Disposer = Callable[[], None]


class ObservableValue(Generic[T]):
    """
    Holds the latest published value and fans it out to subscribers.

    New subscribers receive the current value immediately unless they ask
    not to. Every publish reaches every subscriber, even when the value is
    unchanged.
    """

    def __init__(self, initial: Optional[T] = None, name: str = "value"):
        self.name = name
        self._value: Optional[T] = initial
        self._callbacks: List[Callback] = []

    @property
    def value(self) -> Optional[T]:
        return self._value

    def publish(self, value: Optional[T]) -> None:
        self._value = value
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Subscriber {getattr(callback, '__name__', callback)} of {self.name} failed: {e}")

    def subscribe(self, callback: Callback, replay: bool = True) -> Disposer:
        self._callbacks.append(callback)
        if replay:
            try:
                callback(self._value)
            except Exception as e:
                logger.error(f"Subscriber {getattr(callback, '__name__', callback)} of {self.name} failed: {e}")

        def dispose():
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return dispose

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)


class Subscriptions:
    """Collects disposers so they can be released together"""

    def __init__(self):
        self._disposers: List[Disposer] = []

    def add(self, disposer: Disposer) -> None:
        self._disposers.append(disposer)

    def dispose(self) -> None:
        while self._disposers:
            self._disposers.pop()()


class StateNotifier:
    """Process-wide streams: current settings and the profile being edited"""

    def __init__(self):
        self.settings = ObservableValue(name="settings")
        self.editing_profile = ObservableValue(name="editing_profile")
