r"""Activity manager for reporting the phases of a retry loop.

This module provides the ActivityManager class that turns each phase of
a retry loop into a named activity on the configured reporter.
"""

from __future__ import annotations

__all__ = ["ActivityManager"]

from typing import TYPE_CHECKING, TypeVar

from autoretry.retry.messages import (
    action_name,
    check_name,
    failure_message,
    reset_name,
    status_name,
    success_summary,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from autoretry.core.config import RetryPolicy
    from autoretry.reporting.base import BaseReporter

T = TypeVar("T")


class ActivityManager:
    """Reports the phases of one retry loop.

    Attributes:
        reporter: The reporter activities are sent to.
        policy: The policy of the retry loop being reported.
    """

    def __init__(self, reporter: BaseReporter, policy: RetryPolicy) -> None:
        """Initialize activity manager.

        Args:
            reporter: The reporter activities are sent to.
            policy: The policy of the retry loop being reported.
        """
        self.reporter = reporter
        self.policy = policy

    def action(self, attempt: int, body: Callable[[], T]) -> T:
        """Run the action of an attempt as an activity.

        Args:
            attempt: Current attempt index (0-indexed).
            body: The action.

        Returns:
            Whatever the action returns.
        """
        name = action_name(attempt, self.policy.max_attempts, self.policy.description)
        return self.reporter.report_activity(name, body)

    def check(self, attempt: int, body: Callable[[], bool]) -> bool:
        """Run the success check of an attempt as an activity.

        Args:
            attempt: Current attempt index (0-indexed).
            body: The already-coerced success check.

        Returns:
            The result of the success check.
        """
        name = check_name(attempt, self.policy.max_attempts, self.policy.description)
        return self.reporter.report_activity(name, body)

    def status(self, attempt: int) -> None:
        """Report that an attempt was unsuccessful.

        Args:
            attempt: Current attempt index (0-indexed).
        """
        self.reporter.report_event(
            status_name(attempt, self.policy.max_attempts, self.policy.description)
        )

    def reset(self, attempt: int, body: Callable[[], object]) -> None:
        """Run the reset steps after a failed attempt as an activity.

        Args:
            attempt: Index of the attempt that just failed (0-indexed).
            body: The reset steps.
        """
        name = reset_name(attempt, self.policy.max_attempts, self.policy.description)
        self.reporter.report_activity(name, body)

    def exhausted(self) -> str:
        """Report that the retry budget is exhausted.

        Returns:
            The reported failure message.
        """
        message = failure_message(
            self.policy.max_attempts,
            self.policy.description,
            fail_on_exhaustion=self.policy.fail_on_exhaustion,
        )
        self.reporter.report_event(message)
        return message

    def summary(self, attempts_used: int) -> None:
        """Report that the action succeeded.

        Args:
            attempts_used: The number of retries consumed.
        """
        self.reporter.report_event(success_summary(attempts_used, self.policy.description))
