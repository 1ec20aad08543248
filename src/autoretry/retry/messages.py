r"""Activity names and diagnostic messages for retry loops.

Every phase of a retry loop is reported as an activity whose name tells a
reader which attempt it belongs to and how many retries are left. Retries
are prefixed with ``RETRY_MARKER`` so they stand out in a test report;
the first attempt is not.
"""

from __future__ import annotations

__all__ = [
    "RETRY_MARKER",
    "action_name",
    "check_name",
    "failure_message",
    "reset_name",
    "status_name",
    "success_summary",
]

RETRY_MARKER = "♻️♻️♻️"

_DEFAULT_DESCRIPTION = "Action"


def _describe(description: str | None) -> str:
    return description if description else _DEFAULT_DESCRIPTION


def _progress(attempt: int, max_attempts: int) -> str:
    return f" Retry attempt: {attempt}. Attempts remaining: {max_attempts - attempt}."


def _tag(attempt: int, icon: str, label: str) -> str:
    if attempt == 0:
        return ""
    return f"{RETRY_MARKER}{icon} [{label}: {attempt}] "


def action_name(attempt: int, max_attempts: int, description: str | None = None) -> str:
    """Return the name of the activity running the action.

    Args:
        attempt: The current attempt index (0 for the first try).
        max_attempts: The retry budget.
        description: Optional description of the action.

    Returns:
        The activity name.

    Example:
        ```pycon
        >>> from autoretry.retry.messages import action_name
        >>> action_name(0, 3, "Tap login")
        'Tap login. Retry attempt: 0. Attempts remaining: 3.'
        >>> action_name(2, 3, "Tap login").endswith(
        ...     "[NEW RETRY ACTION: 2] Tap login. Retry attempt: 2. Attempts remaining: 1."
        ... )
        True

        ```
    """
    tag = _tag(attempt, "▶️", "NEW RETRY ACTION")
    return f"{tag}{_describe(description)}.{_progress(attempt, max_attempts)}"


def check_name(attempt: int, max_attempts: int, description: str | None = None) -> str:
    """Return the name of the activity evaluating the success check."""
    tag = _tag(attempt, "⏱", "SUCCESS CONDITION")
    return (
        f"{tag}Wait for success condition for action: {_describe(description)}."
        f"{_progress(attempt, max_attempts)}"
    )


def status_name(attempt: int, max_attempts: int, description: str | None = None) -> str:
    """Return the name of the event reporting an unsuccessful attempt.

    Example:
        ```pycon
        >>> from autoretry.retry.messages import status_name
        >>> status_name(3, 3).endswith("No more retries will be attempted.")
        True

        ```
    """
    remaining = max_attempts - attempt
    outcome = "Retrying." if remaining > 0 else "No more retries will be attempted."
    return (
        f"{RETRY_MARKER} [RETRY INFO: {attempt}] {_describe(description)} attempt unsuccessful. "
        f"Number of attempts: {attempt + 1}. Attempts remaining: {remaining}. {outcome}"
    )


def reset_name(attempt: int, max_attempts: int, description: str | None = None) -> str:
    """Return the name of the activity running the reset steps."""
    text = f"{RETRY_MARKER}⏪ [RESET STEPS: {attempt}] Run reset steps to retry action"
    if description:
        text += f": {description}"
    return f"{text}.{_progress(attempt, max_attempts)}"


def failure_message(
    max_attempts: int, description: str | None = None, fail_on_exhaustion: bool = True
) -> str:
    """Return the message reported when the retry budget is exhausted.

    Args:
        max_attempts: The retry budget.
        description: Optional description of the action.
        fail_on_exhaustion: Whether the failure fails the surrounding run.

    Returns:
        The failure message.

    Example:
        ```pycon
        >>> from autoretry.retry.messages import failure_message
        >>> failure_message(3, "Launch app").endswith("Failing test.")
        True
        >>> "Moving on" in failure_message(3, "Launch app", fail_on_exhaustion=False)
        True

        ```
    """
    text = (
        f"{RETRY_MARKER}❌ [FAIL] Auto Retry failed after {max_attempts + 1} attempts "
        f"({max_attempts} retries) for action: {_describe(description)}. "
        "No more retries will be attempted."
    )
    if fail_on_exhaustion:
        return f"{text} Failing test."
    return f"{text} Moving on to the next step without failing the test."


def success_summary(attempts_used: int, description: str | None = None) -> str:
    """Return the summary reported when the action succeeded.

    Example:
        ```pycon
        >>> from autoretry.retry.messages import success_summary
        >>> success_summary(0, "Launch app")
        'Launch app succeeded on the first attempt.'
        >>> success_summary(1).endswith("Action required 1 retry attempt before success.")
        True

        ```
    """
    if attempts_used == 0:
        return f"{_describe(description)} succeeded on the first attempt."
    noun = "attempt" if attempts_used == 1 else "attempts"
    return (
        f"{RETRY_MARKER} {_describe(description)} required {attempts_used} retry {noun} "
        "before success."
    )
