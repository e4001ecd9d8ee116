"""Subscribable channel for failures raised outside the caller's flow."""

import threading
from collections.abc import Callable
from dataclasses import dataclass

from src.application.ports.error_reporting import ErrorReporterPort
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ErrorEvent:
    """A failure published on the channel."""

    context: str
    error: BaseException

    @property
    def message(self) -> str:
        return f"{self.context}: {self.error}"


class ErrorChannel(ErrorReporterPort):
    """Fan out reported failures to subscribers, such as UI toasts.

    Every report is logged, even without subscribers.
    """

    def __init__(self, logger=None) -> None:
        """Initialize the channel.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()
        self._subscribers: list[Callable[[ErrorEvent], None]] = []
        self._lock = threading.Lock()

    def subscribe(
        self,
        callback: Callable[[ErrorEvent], None],
    ) -> Callable[[], None]:
        """Register a callback and return a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def report(self, error: BaseException, context: str) -> None:
        """Log a failure and deliver it to every subscriber."""
        event = ErrorEvent(context=context, error=error)
        self._logger.error(event.message)
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(event)
            except Exception as exc:  # noqa: BLE001
                self._logger.error(
                    f"Error subscriber {callback!r} failed: {exc}"
                )


__all__ = ["ErrorChannel", "ErrorEvent"]
