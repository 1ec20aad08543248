r"""Retry controller for flaky, timing-sensitive actions.

The controller runs an action, then a success check, and repeats both
(with optional reset steps in between) until the check passes or the
retry budget runs out. It never sleeps, times out or backs off on its
own: pacing belongs to the action and reset callables.
"""

from __future__ import annotations

__all__ = ["RetryController", "RetryOutcome", "evaluate_success"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from autoretry.core.config import RetryPolicy
from autoretry.reporting.reporter import LoggingReporter
from autoretry.reporting.sink import RaisingAssertionSink
from autoretry.retry.manager import ActivityManager

if TYPE_CHECKING:
    from collections.abc import Callable

    from autoretry.reporting.base import BaseAssertionSink, BaseReporter

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryOutcome:
    """Result of a retry loop.

    Attributes:
        attempts_used: The number of retries consumed. 0 means the action
            succeeded on the first try. Never exceeds ``max_attempts``.
        succeeded: Whether the success check passed.
        max_attempts: The retry budget of the loop.
        description: The description of the action, if any.

    Example:
        ```pycon
        >>> from autoretry.retry import RetryOutcome
        >>> outcome = RetryOutcome(attempts_used=1, succeeded=True, max_attempts=3)
        >>> outcome.attempts_remaining
        2
        >>> bool(outcome)
        True

        ```
    """

    attempts_used: int
    succeeded: bool
    max_attempts: int
    description: str | None = None

    @property
    def attempts_remaining(self) -> int:
        """The number of retries left unused."""
        return self.max_attempts - self.attempts_used

    @property
    def total_attempts(self) -> int:
        """The number of times the action ran."""
        return self.attempts_used + 1

    def __bool__(self) -> bool:
        return self.succeeded


def evaluate_success(success_check: Callable[[], bool | None]) -> bool:
    """Evaluate a success check, treating any non-answer as failure.

    ``None``, any exception raised by the check, and a result whose truth
    value cannot be determined count as an unsuccessful attempt. Other
    values are coerced with ``bool``.

    Args:
        success_check: The success check to evaluate.

    Returns:
        ``True`` if the check passed.

    Example:
        ```pycon
        >>> from autoretry.retry import evaluate_success
        >>> evaluate_success(lambda: True)
        True
        >>> evaluate_success(lambda: None)
        False
        >>> evaluate_success(lambda: 1 / 0)
        False

        ```
    """
    try:
        result = success_check()
        return result is not None and bool(result)
    except Exception:
        logger.warning("Success check raised, counting the attempt as unsuccessful", exc_info=True)
        return False


class RetryController:
    """Runs an action until its success check passes or the budget is
    exhausted.

    The controller only holds its collaborators, never the state of a
    run, so a single instance can be shared, nested inside one of its own
    actions, or called repeatedly.

    Args:
        reporter: Receives every phase of the loop as a named activity.
            Defaults to a ``LoggingReporter``.
        assertion_sink: Receives the hard failure when the budget is
            exhausted and the policy asks to fail. Defaults to a
            ``RaisingAssertionSink``.

    Example:
        ```pycon
        >>> from autoretry.core import RetryPolicy
        >>> from autoretry.retry import RetryController
        >>> counter = {"value": 0}
        >>> def increment():
        ...     counter["value"] += 1
        ...
        >>> outcome = RetryController().run(
        ...     action=increment,
        ...     success_check=lambda: counter["value"] == 3,
        ...     policy=RetryPolicy(max_attempts=5, description="Count To Three"),
        ... )
        >>> outcome.attempts_used
        2
        >>> counter["value"]
        3

        ```
    """

    def __init__(
        self,
        reporter: BaseReporter | None = None,
        assertion_sink: BaseAssertionSink | None = None,
    ) -> None:
        self.reporter = reporter if reporter is not None else LoggingReporter()
        self.assertion_sink = (
            assertion_sink if assertion_sink is not None else RaisingAssertionSink()
        )

    def run(
        self,
        action: Callable[[], object],
        success_check: Callable[[], bool | None],
        reset: Callable[[], object] | None = None,
        policy: RetryPolicy | None = None,
    ) -> RetryOutcome:
        """Run the retry loop.

        Args:
            action: The possibly flaky action. Exceptions it raises
                propagate to the caller.
            success_check: Evaluated after every action. ``None`` or an
                exception counts as an unsuccessful attempt.
            reset: Optional steps run after each failed attempt that will
                be retried. Never run after the last attempt.
            policy: The retry budget and failure policy. Defaults to
                ``RetryPolicy()``.

        Returns:
            The outcome of the loop. When the budget is exhausted and
            ``policy.fail_on_exhaustion`` is true, the outcome is only
            returned if the assertion sink does not raise.
        """
        policy = policy if policy is not None else RetryPolicy()
        activities = ActivityManager(self.reporter, policy)

        succeeded = False
        attempt = 0
        for attempt in range(policy.max_attempts + 1):
            activities.action(attempt, action)
            succeeded = activities.check(attempt, lambda: evaluate_success(success_check))
            if succeeded:
                break

            logger.debug(
                f"{policy.description or 'Action'} unsuccessful on attempt "
                f"{attempt + 1}/{policy.total_attempts}"
            )
            activities.status(attempt)
            if reset is not None and attempt < policy.max_attempts:
                activities.reset(attempt, reset)

        outcome = RetryOutcome(
            attempts_used=attempt,
            succeeded=succeeded,
            max_attempts=policy.max_attempts,
            description=policy.description,
        )

        if succeeded:
            if attempt > 0:
                logger.debug(
                    f"{policy.description or 'Action'} succeeded after {attempt} retries"
                )
            activities.summary(attempt)
            return outcome

        message = activities.exhausted()
        if policy.fail_on_exhaustion:
            self.assertion_sink.assert_true(False, message, policy.source_location)
        return outcome
