r"""Reporter implementations.

``LoggingReporter`` writes every activity to the standard logging system,
tagged with the nesting path of the activities around it.
``RecordingReporter`` keeps activities in memory so they can be inspected
after a run, which is mostly useful in tests.
"""

from __future__ import annotations

__all__ = ["ActivityRecord", "LoggingReporter", "RecordingReporter"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from autoretry.reporting.base import BaseReporter
from autoretry.utils.structured_logging import (
    get_activity_path,
    log_structured,
    pop_activity,
    push_activity,
)

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class LoggingReporter(BaseReporter):
    """Reporter that logs each activity.

    Each activity is logged once, when it starts, with the structured
    fields ``activity``, ``activity_path`` and ``depth``. While the body
    runs, the activity name is pushed onto the context-local activity
    path, so activities reported by a nested retry loop carry the path of
    the outer loop.

    Args:
        logger: The logger to write to. Defaults to this module's logger.
        level: The level activities are logged at.

    Example:
        ```pycon
        >>> from autoretry.reporting import LoggingReporter
        >>> reporter = LoggingReporter()
        >>> reporter.report_activity("Tap login button", lambda: 42)
        42

        ```
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._level = level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def level(self) -> int:
        return self._level

    def report_activity(self, name: str, body: Callable[[], T]) -> T:
        token = push_activity(name)
        try:
            path = get_activity_path()
            log_structured(
                self._logger,
                self._level,
                name,
                activity=name,
                activity_path=list(path),
                depth=len(path) - 1,
            )
            return body()
        finally:
            pop_activity(token)


@dataclass(frozen=True)
class ActivityRecord:
    """An activity seen by a ``RecordingReporter``.

    Attributes:
        name: The name of the activity.
        depth: How many recorded activities were running around it.
            Top-level activities have depth 0.
    """

    name: str
    depth: int


class RecordingReporter(BaseReporter):
    """Reporter that records activities in memory.

    Activities are recorded in the order they start. If ``inner`` is
    given, every activity is also forwarded to it.

    Args:
        inner: Optional reporter to forward activities to.

    Example:
        ```pycon
        >>> from autoretry.reporting import RecordingReporter
        >>> reporter = RecordingReporter()
        >>> reporter.report_event("Launch app")
        >>> reporter.names
        ['Launch app']

        ```
    """

    def __init__(self, inner: BaseReporter | None = None) -> None:
        self._inner = inner
        self._depth = 0
        self.records: list[ActivityRecord] = []

    @property
    def names(self) -> list[str]:
        """The names of the recorded activities, in order."""
        return [record.name for record in self.records]

    def clear(self) -> None:
        """Forget all recorded activities."""
        self.records.clear()

    def report_activity(self, name: str, body: Callable[[], T]) -> T:
        self.records.append(ActivityRecord(name=name, depth=self._depth))
        self._depth += 1
        try:
            if self._inner is not None:
                return self._inner.report_activity(name, body)
            return body()
        finally:
            self._depth -= 1
