"""Background execution of store writes."""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from src.application.ports.error_reporting import (
    ErrorReporterPort,
    WriteDispatcherPort,
)
from src.infrastructure.logging.logger import get_app_logger


class NonBlockingWriter(WriteDispatcherPort):
    """Run writes on a worker thread and route failures to an error channel.

    The caller gets a ``Future`` back immediately. A failed write sets the
    exception on that future and is also reported to ``error_reporter``.
    """

    def __init__(
        self,
        error_reporter: ErrorReporterPort,
        executor: ThreadPoolExecutor | None = None,
        logger=None,
    ) -> None:
        """Initialize the writer.

        Args:
            error_reporter: Channel receiving write failures.
            executor: Optional executor; defaults to a single worker thread.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._error_reporter = error_reporter
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="ledger-writer",
        )
        self._logger = logger or get_app_logger()

    def submit(
        self,
        context: str,
        operation: Callable[..., Any],
        *args: Any,
    ) -> Future:
        """Schedule ``operation(*args)`` without waiting for it."""
        future = self._executor.submit(operation, *args)
        future.add_done_callback(
            lambda done: self._on_done(context, done)
        )
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting writes and optionally wait for pending ones."""
        self._executor.shutdown(wait=wait)

    def _on_done(self, context: str, future: Future) -> None:
        if future.cancelled():
            self._logger.warning(f"{context}: write cancelled")
            return
        error = future.exception()
        if error is not None:
            self._error_reporter.report(error, context)
            return
        self._logger.debug(f"{context}: write completed")


__all__ = ["NonBlockingWriter"]
