r"""Parameter validation utilities for retry policies.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before a retry loop is started.
"""

from __future__ import annotations

__all__ = ["validate_retry_params"]

from autoretry.core.location import SourceLocation


def validate_retry_params(
    max_attempts: int,
    description: str | None = None,
    source_location: SourceLocation | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Maximum number of retries after the first try.
            Must be an integer >= 0. A value of 0 means the action is
            tried exactly once.
        description: Optional description of the action. Must be a
            string if provided.
        source_location: Optional source location used for failure
            attribution. Must be a ``SourceLocation`` if provided.

    Raises:
        ValueError: If max_attempts is not a non-negative integer, or if
            description or source_location have the wrong type.

    Example:
        ```pycon
        >>> from autoretry.core import validate_retry_params
        >>> validate_retry_params(max_attempts=3)
        >>> validate_retry_params(max_attempts=0, description="Tap login")
        >>> validate_retry_params(max_attempts=-1)  # doctest: +SKIP

        ```
    """
    # bool is a subclass of int but max_attempts=True is always a mistake
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        msg = f"max_attempts must be an int, got {type(max_attempts).__name__}"
        raise ValueError(msg)
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)
    if description is not None and not isinstance(description, str):
        msg = f"description must be a str or None, got {type(description).__name__}"
        raise ValueError(msg)
    if source_location is not None and not isinstance(source_location, SourceLocation):
        msg = (
            "source_location must be a SourceLocation or None, "
            f"got {type(source_location).__name__}"
        )
        raise ValueError(msg)
