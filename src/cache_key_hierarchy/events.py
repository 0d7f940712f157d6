"""
Diagnostic events for key building.

Provides the suspicious-parameter check, the notifier that fans warnings
out to registered listeners, and basic listener implementations.
"""

import logging
from collections.abc import Callable, Iterable
from threading import Lock
from typing import Any

from .constants import ERROR_NOT_A_LISTENER, SUSPICIOUS_PARAMETER_MESSAGE
from .exceptions import CacheKeyConfigurationError
from .protocols import EventListener
from .signature import type_name

logger = logging.getLogger(__name__)


def is_suspicious_parameter(value: Any, encoded: str) -> bool:
    """Check whether an encoded parameter equals its own type name.

    An encoder that falls back to the type name instead of encoding the
    value makes every call with that parameter type share one key.

    Args:
        value: Original parameter value
        encoded: Fragment produced by the parameter encoder

    Returns:
        True if value is not None and encoded equals type_name(type(value))
    """
    if value is None:
        return False
    return encoded == type_name(type(value))


class LoggingEventListener:
    """Listener that writes diagnostic messages to the library logger.

    Attributes:
        log_level: Level used for messages (default: WARNING)
    """

    def __init__(self, log_level: int = logging.WARNING) -> None:
        self._log_level = log_level

    def notify(self, message: str) -> None:
        logger.log(self._log_level, "Cache key diagnostic: %s", message)


class CollectingEventListener:
    """Listener that keeps messages in memory.

    Useful for development and tests. Thread-safe.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._messages: list[str] = []

    def notify(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)

    @property
    def messages(self) -> list[str]:
        """Copy of the received messages."""
        with self._lock:
            return self._messages.copy()

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()


class CallableEventListener:
    """Adapts a plain function to the EventListener protocol."""

    def __init__(self, func: Callable[[str], Any]) -> None:
        self._func = func

    def notify(self, message: str) -> None:
        self._func(message)


def as_event_listener(listener: "EventListener | Callable[[str], Any]") -> EventListener:
    """Return listener as an EventListener, adapting plain callables.

    Raises:
        CacheKeyConfigurationError: If listener is neither a listener nor callable
    """
    if callable(getattr(listener, "notify", None)):
        return listener  # type: ignore[return-value]
    if callable(listener):
        return CallableEventListener(listener)
    raise CacheKeyConfigurationError(ERROR_NOT_A_LISTENER.format(type_name=type(listener).__name__))


class DiagnosticNotifier:
    """Delivers diagnostic warnings to every registered listener.

    The listener collection is captured once at construction and never
    changes afterwards. A failing listener is logged and skipped; errors
    never reach the caller building a key.

    Example:
        notifier = DiagnosticNotifier([
            LoggingEventListener(),
            CollectingEventListener(),
        ])
    """

    def __init__(self, listeners: "Iterable[EventListener | Callable[[str], Any]]" = ()) -> None:
        self._listeners: tuple[EventListener, ...] = tuple(as_event_listener(listener) for listener in listeners)

    @property
    def listeners(self) -> tuple[EventListener, ...]:
        return self._listeners

    def notify(self, message: str) -> None:
        """Deliver message to all listeners."""
        for listener in self._listeners:
            try:
                listener.notify(message)
            except Exception as e:
                # Listener errors must not break key building
                logger.warning("Listener error in notify for message '%s': %s", message, e)

    def warn_suspicious_parameter(self, value_type: type) -> None:
        """Notify that a parameter of value_type encoded to its own type name."""
        self.notify(SUSPICIOUS_PARAMETER_MESSAGE.format(type_name=type_name(value_type)))
