r"""Structured logging utilities for machine-readable activity logs.

This module provides a JSON formatter and a context-local activity path.
The activity path is the stack of activity names currently being
reported, so log lines emitted from inside a nested retry loop can be
traced back to the outer loop that started it.

The structured logging system is opt-in and can be enabled by configuring
Python's logging system to use the provided formatter.

Example:
    Enable structured logging for autoretry:

    ```python
    import logging
    from autoretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("autoretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_activity_path",
    "get_activity_path",
    "log_structured",
    "pop_activity",
    "push_activity",
]

import contextvars
import json
import logging
import time
from typing import Any

# Names of the activities currently running, outermost first
_activity_path: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "activity_path", default=()
)

_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def get_activity_path() -> tuple[str, ...]:
    """Get the activity path of the current context.

    Returns:
        The names of the running activities, outermost first. Empty when
            no activity is running.

    Example:
        ```pycon
        >>> from autoretry.utils.structured_logging import get_activity_path
        >>> get_activity_path()
        ()

        ```
    """
    return _activity_path.get()


def push_activity(name: str) -> contextvars.Token[tuple[str, ...]]:
    """Enter an activity in the current context.

    The activity path is stored in a context variable, making it
    thread-safe and async-safe.

    Args:
        name: The name of the activity being entered.

    Returns:
        A token to pass to ``pop_activity`` when the activity ends.

    Example:
        ```pycon
        >>> from autoretry.utils.structured_logging import (
        ...     get_activity_path,
        ...     pop_activity,
        ...     push_activity,
        ... )
        >>> token = push_activity("Launch app")
        >>> get_activity_path()
        ('Launch app',)
        >>> pop_activity(token)
        >>> get_activity_path()
        ()

        ```
    """
    return _activity_path.set((*_activity_path.get(), name))


def pop_activity(token: contextvars.Token[tuple[str, ...]]) -> None:
    """Leave the activity entered with ``token``.

    Args:
        token: The token returned by the matching ``push_activity`` call.
    """
    _activity_path.reset(token)


def clear_activity_path() -> None:
    """Clear the activity path for the current context."""
    _activity_path.set(())


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records as JSON objects with consistent field
    names. It includes the current activity path if any activity is running,
    and preserves any extra fields added to the log record.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - logger: Logger name
        - message: Log message
        - activity_path: Optional list of running activity names
        - module: Module name where log originated
        - function: Function name where log originated
        - line: Line number where log originated
        - thread: Thread name
        - process: Process ID

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from autoretry.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Attempt unsuccessful", extra={"attempt": 1})
        >>> output = stream.getvalue()
        >>> '"attempt": 1' in output
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }

        activity_path = get_activity_path()
        if activity_path:
            log_data["activity_path"] = list(activity_path)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields added via the 'extra' parameter in logging calls
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        """Format timestamp as ISO 8601 with millisecond precision.

        Args:
            record: The log record.
            datefmt: Optional date format (ignored, always uses ISO 8601).

        Returns:
            ISO 8601 formatted timestamp.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    The extra fields are included in the JSON output when using
    ``StructuredFormatter``.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from autoretry.utils.structured_logging import (
        ...     StructuredFormatter,
        ...     log_structured,
        ... )
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_log_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> log_structured(logger, logging.INFO, "Retry succeeded", attempts_used=2)
        >>> "attempts_used" in stream.getvalue()
        True

        ```
    """
    logger.log(level, message, extra=extra)
