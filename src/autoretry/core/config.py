r"""Retry policy dataclass and defaults.

This module provides configuration constants and the immutable
``RetryPolicy`` built for each retry loop.
"""

from __future__ import annotations

__all__ = ["DEFAULT_FAIL_ON_EXHAUSTION", "DEFAULT_MAX_ATTEMPTS", "RetryPolicy"]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from autoretry.core.validation import validate_retry_params

if TYPE_CHECKING:
    from autoretry.core.location import SourceLocation


# Default number of retries after the first try
# Total attempts = max_attempts + 1 (initial attempt)
DEFAULT_MAX_ATTEMPTS = 3

# Exhausting the budget is a hard failure unless told otherwise
DEFAULT_FAIL_ON_EXHAUSTION = True


@dataclass(frozen=True)
class RetryPolicy:
    """Retry budget and failure policy for one retry loop.

    Args:
        max_attempts: Number of retries after the first try. Must be >= 0.
        fail_on_exhaustion: If ``True``, running out of retries is reported
            to the assertion sink as a hard failure. If ``False``, it is only
            reported as an informational activity.
        description: Optional description of the action, used in activity
            names and failure messages.
        source_location: Optional file and line the failure is attributed to.

    Example:
        ```pycon
        >>> from autoretry.core import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_attempts
        3
        >>> policy.total_attempts
        4
        >>> policy = RetryPolicy(max_attempts=5, description="Count To Three")
        >>> policy.merge(max_attempts=0).max_attempts
        0
        >>> policy.max_attempts  # Original unchanged
        5

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    fail_on_exhaustion: bool = DEFAULT_FAIL_ON_EXHAUSTION
    description: str | None = None
    source_location: SourceLocation | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(
            max_attempts=self.max_attempts,
            description=self.description,
            source_location=self.source_location,
        )

    @property
    def total_attempts(self) -> int:
        """The maximum number of times the action can run."""
        return self.max_attempts + 1

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied, so ``description`` and
        ``source_location`` cannot be cleared through this method.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new validated RetryPolicy instance with overrides applied.

        Example:
            ```pycon
            >>> from autoretry.core import RetryPolicy
            >>> policy = RetryPolicy(description="Launch app")
            >>> policy.merge(fail_on_exhaustion=False).fail_on_exhaustion
            False
            >>> policy.merge(description=None).description
            'Launch app'

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
