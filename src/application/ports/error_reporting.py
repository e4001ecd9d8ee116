"""Ports for asynchronous writes and their out-of-band failures."""

from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, Protocol


class ErrorReporterPort(Protocol):
    """Port receiving failures that happen outside the caller's flow."""

    def report(self, error: BaseException, context: str) -> None:
        """Publish a failure with a short description of the operation."""


class WriteDispatcherPort(Protocol):
    """Port running store writes without blocking the caller."""

    def submit(
        self,
        context: str,
        operation: Callable[..., Any],
        *args: Any,
    ) -> Future:
        """Schedule ``operation(*args)`` and return its future.

        Failures are set on the future and published to the error reporter.
        """


__all__ = ["ErrorReporterPort", "WriteDispatcherPort"]
