r"""Exceptions raised when a retried action never succeeds."""

from __future__ import annotations

__all__ = ["RetryExhaustedError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autoretry.core.location import SourceLocation


class RetryExhaustedError(AssertionError):
    """Exception raised when the retry budget is exhausted.

    It subclasses ``AssertionError`` so that pytest and unittest record
    it as a test failure rather than an error.

    Args:
        message: A descriptive error message.
        location: The source location the failure is attributed to.

    Example:
        ```pycon
        >>> from autoretry.exceptions import RetryExhaustedError
        >>> raise RetryExhaustedError("Auto Retry failed 3 times")
        Traceback (most recent call last):
            ...
        autoretry.exceptions.RetryExhaustedError: Auto Retry failed 3 times

        ```
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.message} ({self.location})"
