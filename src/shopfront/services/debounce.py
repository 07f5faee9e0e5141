"""Debounced input.

Coalesces bursts of values (keystrokes in a search box) into one callback
that fires only after the input has been quiet for a fixed delay.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, Protocol, TypeVar

from shopfront.shared.constants import CatalogDefaults

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimerHandle(Protocol):
    """The part of ``threading.Timer`` the debouncer relies on."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def _daemon_timer(interval: float, function: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class Debouncer(Generic[T]):
    """Single-stream debouncer.

    Each :meth:`push` cancels the pending timer and arms a new one, so at
    most one timer is pending at any time and ``callback`` receives only
    the latest value.

    Args:
        callback: Called with the committed value
        delay_seconds: Quiet period before committing
        timer_factory: Builds the timer; tests pass a manually fired fake
    """

    def __init__(
        self,
        callback: Callable[[T], Any],
        delay_seconds: float = CatalogDefaults.SEARCH_DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = _daemon_timer,
    ):
        self._callback = callback
        self.delay_seconds = delay_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: TimerHandle | None = None
        self._value: T | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def push(self, value: T) -> None:
        """Buffer ``value`` and restart the quiet period."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._value = value
            self._timer = self._timer_factory(
                self.delay_seconds,
                lambda: self._fire(generation),
            )
            self._timer.start()

    def flush(self) -> bool:
        """Commit the pending value now.

        Returns:
            True if a value was pending
        """
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            value = self._take()

        self._callback(value)
        return True

    def cancel(self) -> None:
        """Drop the pending value without committing it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._take()

    def _take(self) -> T:
        value = self._value
        self._timer = None
        self._value = None
        self._generation += 1
        return value  # type: ignore[return-value]

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled after it started running must not commit
            if generation != self._generation or self._timer is None:
                return
            value = self._take()

        logger.debug("Debounced value committed")
        self._callback(value)


__all__ = ["Debouncer", "TimerFactory", "TimerHandle"]
