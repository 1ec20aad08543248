r"""Implement the ``auto_retry`` convenience function.

``auto_retry`` is the one-call entry point: it builds the retry policy,
records where it was called from, and runs a ``RetryController``.
"""

from __future__ import annotations

__all__ = ["auto_retry"]

from typing import TYPE_CHECKING

from autoretry.core.config import DEFAULT_FAIL_ON_EXHAUSTION, DEFAULT_MAX_ATTEMPTS, RetryPolicy
from autoretry.core.location import capture_source_location
from autoretry.retry.controller import RetryController

if TYPE_CHECKING:
    from collections.abc import Callable

    from autoretry.core.location import SourceLocation
    from autoretry.reporting.base import BaseAssertionSink, BaseReporter
    from autoretry.retry.controller import RetryOutcome


def auto_retry(
    action: Callable[[], object],
    success_check: Callable[[], bool | None],
    reset: Callable[[], object] | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    description: str | None = None,
    fail_on_exhaustion: bool = DEFAULT_FAIL_ON_EXHAUSTION,
    source_location: SourceLocation | None = None,
    reporter: BaseReporter | None = None,
    assertion_sink: BaseAssertionSink | None = None,
    *,
    stacklevel: int = 1,
) -> RetryOutcome:
    """Run an action until its success check passes or retries run out.

    Useful when a step is flaky because the state it depends on becomes
    true asynchronously. The returned ``attempts_used`` records how flaky
    the step was: an action that only succeeds after a few retries may
    point at a real bug even though the run passed.

    Args:
        action: The possibly flaky action.
        success_check: Decides after each action whether it worked.
            ``None`` or an exception counts as an unsuccessful attempt.
        reset: Optional steps run between a failed attempt and its retry.
        max_attempts: Number of retries after the first try. Must be >= 0.
        description: Optional description used in activity names and the
            failure message.
        fail_on_exhaustion: If ``True``, running out of retries fails
            through the assertion sink. If ``False``, it is only reported.
        source_location: File and line the failure is attributed to.
            Defaults to the line that called ``auto_retry``.
        reporter: Receives every phase as a named activity. Defaults to a
            ``LoggingReporter``.
        assertion_sink: Receives the hard failure. Defaults to a
            ``RaisingAssertionSink``.
        stacklevel: How many frames above the direct caller the default
            source location is taken from. Wrappers around ``auto_retry``
            pass ``2`` to attribute failures to their own caller.

    Returns:
        The outcome of the retry loop.

    Raises:
        RetryExhaustedError: If the budget is exhausted, ``fail_on_exhaustion``
            is ``True`` and the default assertion sink is used.
        ValueError: If max_attempts is negative.

    Example:
        ```pycon
        >>> from autoretry import auto_retry
        >>> taps = []
        >>> outcome = auto_retry(
        ...     action=lambda: taps.append("tap"),
        ...     success_check=lambda: len(taps) == 3,
        ...     max_attempts=5,
        ...     description="Count To Three",
        ... )
        >>> outcome.attempts_used
        2
        >>> outcome = auto_retry(
        ...     action=lambda: None,
        ...     success_check=lambda: False,
        ...     max_attempts=0,
        ...     fail_on_exhaustion=False,
        ... )
        >>> outcome.succeeded
        False

        ```
    """
    if source_location is None:
        source_location = capture_source_location(stacklevel=stacklevel)
    policy = RetryPolicy(
        max_attempts=max_attempts,
        fail_on_exhaustion=fail_on_exhaustion,
        description=description,
        source_location=source_location,
    )
    controller = RetryController(reporter=reporter, assertion_sink=assertion_sink)
    return controller.run(action=action, success_check=success_check, reset=reset, policy=policy)
