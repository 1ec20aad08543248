r"""Abstract base classes for the reporting boundary.

A retry loop talks to the outside world through two collaborators: a
reporter that names and records every phase of the loop, and an
assertion sink that receives the final pass/fail determination when an
exhausted budget must fail the surrounding run.
"""

from __future__ import annotations

__all__ = ["BaseAssertionSink", "BaseReporter"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from autoretry.core.location import SourceLocation

T = TypeVar("T")


class BaseReporter(ABC):
    """Abstract base class for activity reporters.

    A reporter wraps the execution of a block in a named activity so that
    external tooling can see each step of a retry loop individually.
    """

    @abstractmethod
    def report_activity(self, name: str, body: Callable[[], T]) -> T:
        """Run ``body`` as a named activity.

        Args:
            name: The name of the activity.
            body: The block to run. Exceptions it raises must propagate.

        Returns:
            Whatever ``body`` returns.
        """

    def report_event(self, name: str) -> None:
        """Report an activity with an empty body.

        Args:
            name: The name of the event.
        """
        self.report_activity(name, _noop)


class BaseAssertionSink(ABC):
    """Abstract base class for assertion sinks.

    The sink is only called when a retry budget is exhausted and the
    policy asks for a hard failure.
    """

    @abstractmethod
    def assert_true(
        self, condition: bool, message: str, location: SourceLocation | None = None
    ) -> None:
        """Record a failure if ``condition`` is false.

        Args:
            condition: The asserted condition.
            message: The failure message.
            location: The source location the failure is attributed to.
        """


def _noop() -> None:
    return None
