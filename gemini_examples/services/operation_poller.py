# -*- coding: utf-8 -*-
"""
Operation Poller
================
Waits for a vendor-side long-running operation (e.g. Veo video
generation) by re-checking its status at a fixed interval until it
reports `done`, then surfaces any error it carries.
"""

import logging
import time
from typing import Any, Callable, Optional

from gemini_examples.config.settings import settings

logger = logging.getLogger("examples.poller")


class OperationError(RuntimeError):
    """Base class for long-running operation failures."""

    def __init__(self, message: str, operation: Any = None):
        self.operation = operation
        super().__init__(message)


class OperationFailedError(OperationError):
    """The operation completed but reported an error."""

    def __init__(self, operation: Any):
        self.error = getattr(operation, "error", None)
        name = getattr(operation, "name", None) or "operation"
        super().__init__(f"{name} failed: {_describe_error(self.error)}", operation)


class OperationTimeoutError(OperationError):
    """The operation did not finish within the allowed time."""

    def __init__(self, operation: Any, waited: float):
        self.waited = waited
        name = getattr(operation, "name", None) or "operation"
        super().__init__(f"{name} did not finish after {waited:.0f}s", operation)


def _describe_error(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(getattr(error, "message", None) or error)


def wait_for_operation(
    operation: Any,
    refresh: Callable[[Any], Any],
    interval: Optional[float] = None,
    timeout: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Any:
    """
    Poll `operation` until it is done.

    Args:
        operation: Object with `done` and `error` attributes.
        refresh: Returns the latest state of an operation.
        interval: Seconds between checks (default: settings.polling).
        timeout: Give up after this many seconds; <= 0 waits forever
            (default: settings.polling).
        sleep: Injected for tests.
        clock: Injected for tests.

    Returns:
        The finished operation.

    Raises:
        OperationTimeoutError: If `timeout` elapses first.
        OperationFailedError: If the finished operation carries an error.
    """
    if interval is None:
        interval = settings.polling.interval_seconds
    if timeout is None:
        timeout = settings.polling.timeout_seconds

    started = clock()
    checks = 0
    while not getattr(operation, "done", False):
        waited = clock() - started
        if timeout > 0 and waited >= timeout:
            raise OperationTimeoutError(operation, waited)

        sleep(interval)
        operation = refresh(operation)
        checks += 1
        logger.debug("Operation %s check #%d: done=%s", getattr(operation, "name", "?"), checks, getattr(operation, "done", False))

    if getattr(operation, "error", None):
        raise OperationFailedError(operation)

    logger.info(
        "Operation %s finished after %d check(s), %.1fs",
        getattr(operation, "name", "?"),
        checks,
        clock() - started,
    )
    return operation
