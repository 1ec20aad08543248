r"""Unit tests for the retry controller."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, call

import pytest

from autoretry.core import RetryPolicy, SourceLocation
from autoretry.exceptions import RetryExhaustedError
from autoretry.reporting import LoggingReporter, RaisingAssertionSink, RecordingReporter
from autoretry.retry import RetryController, RetryOutcome, evaluate_success
from autoretry.retry.messages import (
    action_name,
    check_name,
    failure_message,
    reset_name,
    status_name,
    success_summary,
)

if TYPE_CHECKING:
    from tests.conftest import Counter


######################################
#     Tests for RetryController      #
######################################


def test_retry_controller_defaults() -> None:
    """Test RetryController default collaborators."""
    controller = RetryController()

    assert isinstance(controller.reporter, LoggingReporter)
    assert isinstance(controller.assertion_sink, RaisingAssertionSink)


def test_retry_controller_custom_collaborators(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test RetryController keeps the given collaborators."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    assert controller.reporter is recording_reporter
    assert controller.assertion_sink is mock_sink


def test_run_succeeds_on_first_attempt(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test an action that works right away uses no retries."""
    action = Mock()
    reset = Mock()
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(action=action, success_check=lambda: True, reset=reset)

    assert outcome == RetryOutcome(attempts_used=0, succeeded=True, max_attempts=3)
    action.assert_called_once_with()
    reset.assert_not_called()
    mock_sink.assert_true.assert_not_called()


def test_run_counts_to_three(
    counter: Counter, recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test the counter scenario: success once the counter reaches 3."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(
        action=counter.increment,
        success_check=lambda: counter.value == 3,
        policy=RetryPolicy(max_attempts=5, description="Count To Three"),
    )

    assert outcome.succeeded
    assert outcome.attempts_used == 2
    assert counter.value == 3
    mock_sink.assert_true.assert_not_called()


@pytest.mark.parametrize(("max_attempts", "target"), [(0, 1), (1, 2), (3, 2), (3, 4), (5, 6)])
def test_run_converges_when_target_within_budget(
    counter: Counter,
    recording_reporter: RecordingReporter,
    mock_sink: Mock,
    max_attempts: int,
    target: int,
) -> None:
    """Test attempts_used is target - 1 when target <= max_attempts + 1."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(
        action=counter.increment,
        success_check=lambda: counter.value == target,
        policy=RetryPolicy(max_attempts=max_attempts),
    )

    assert outcome.succeeded
    assert outcome.attempts_used == target - 1
    assert counter.value == target


@pytest.mark.parametrize("max_attempts", [0, 1, 3, 5])
def test_run_exhausts_budget(
    counter: Counter, recording_reporter: RecordingReporter, mock_sink: Mock, max_attempts: int
) -> None:
    """Test a check that never passes uses the whole budget and fails once."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)
    policy = RetryPolicy(max_attempts=max_attempts, description="Never")

    outcome = controller.run(
        action=counter.increment, success_check=lambda: False, policy=policy
    )

    assert outcome == RetryOutcome(
        attempts_used=max_attempts, succeeded=False, max_attempts=max_attempts, description="Never"
    )
    assert counter.value == max_attempts + 1
    mock_sink.assert_true.assert_called_once_with(
        False, failure_message(max_attempts, "Never", fail_on_exhaustion=True), None
    )


def test_run_reset_never_runs_after_last_attempt(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test reset runs once per retried attempt, 5 times for a budget of 5."""
    action = Mock()
    reset = Mock()
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(
        action=action,
        success_check=lambda: False,
        reset=reset,
        policy=RetryPolicy(max_attempts=5),
    )

    assert outcome.attempts_used == 5
    assert action.call_count == 6
    assert reset.call_count == 5


def test_run_reset_runs_between_attempts(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test reset runs after each failed attempt, before the next action."""
    events = []
    results = iter([False, None, True])
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    def check() -> bool | None:
        events.append("check")
        return next(results)

    outcome = controller.run(
        action=lambda: events.append("action"),
        success_check=check,
        reset=lambda: events.append("reset"),
        policy=RetryPolicy(max_attempts=3),
    )

    assert outcome.attempts_used == 2
    assert events == [
        "action",
        "check",
        "reset",
        "action",
        "check",
        "reset",
        "action",
        "check",
    ]


def test_run_zero_budget_without_reset(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test max_attempts=0 tries once and never resets."""
    action = Mock()
    reset = Mock()
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(
        action=action,
        success_check=lambda: False,
        reset=reset,
        policy=RetryPolicy(max_attempts=0),
    )

    assert outcome.attempts_used == 0
    assert not outcome.succeeded
    action.assert_called_once_with()
    reset.assert_not_called()
    mock_sink.assert_true.assert_called_once()


def test_run_predicate_reevaluated_every_attempt(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test the success check runs once after every action."""
    check = Mock(side_effect=[False, False, False, True])
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(action=Mock(), success_check=check)

    assert outcome.attempts_used == 3
    assert check.call_count == 4


def test_run_none_counts_as_failure(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test a check returning None is an unsuccessful attempt."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(
        action=Mock(), success_check=lambda: None, policy=RetryPolicy(max_attempts=2)
    )

    assert not outcome.succeeded
    assert outcome.attempts_used == 2
    mock_sink.assert_true.assert_called_once()


def test_run_raising_check_counts_as_failure(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test a check that raises is retried rather than crashing the loop."""
    check = Mock(side_effect=[RuntimeError("element not found"), True])
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(action=Mock(), success_check=check)

    assert outcome.succeeded
    assert outcome.attempts_used == 1


def test_run_ambiguous_check_result_counts_as_failure(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test a check result without a truth value is retried rather than
    crashing the loop."""

    class Ambiguous:
        def __bool__(self) -> bool:
            msg = "truth value is ambiguous"
            raise ValueError(msg)

    check = Mock(side_effect=[Ambiguous(), True])
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    outcome = controller.run(
        action=Mock(), success_check=check, policy=RetryPolicy(max_attempts=2)
    )

    assert outcome.succeeded
    assert outcome.attempts_used == 1
    assert check.call_count == 2
    mock_sink.assert_true.assert_not_called()


def test_run_action_exception_propagates(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test exceptions raised by the action are not swallowed."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    with pytest.raises(RuntimeError, match="app crashed"):
        controller.run(action=Mock(side_effect=RuntimeError("app crashed")), success_check=Mock())

    mock_sink.assert_true.assert_not_called()


def test_run_reset_exception_propagates(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test exceptions raised by the reset steps are not swallowed."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    with pytest.raises(ValueError, match="cannot reset"):
        controller.run(
            action=Mock(),
            success_check=lambda: False,
            reset=Mock(side_effect=ValueError("cannot reset")),
        )


def test_run_soft_failure_does_not_assert(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test fail_on_exhaustion=False only reports the failure."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)
    policy = RetryPolicy(max_attempts=2, fail_on_exhaustion=False, description="Optional")

    outcome = controller.run(action=Mock(), success_check=lambda: False, policy=policy)

    assert outcome.attempts_used == 2
    assert not outcome.succeeded
    mock_sink.assert_true.assert_not_called()
    assert recording_reporter.names[-1] == failure_message(
        2, "Optional", fail_on_exhaustion=False
    )


def test_run_hard_failure_raises_with_default_sink(
    recording_reporter: RecordingReporter,
) -> None:
    """Test the default sink raises RetryExhaustedError with the location."""
    location = SourceLocation(file="tests/test_login.py", line=12)
    controller = RetryController(reporter=recording_reporter)

    with pytest.raises(RetryExhaustedError) as exc_info:
        controller.run(
            action=Mock(),
            success_check=lambda: False,
            policy=RetryPolicy(max_attempts=1, description="Log in", source_location=location),
        )

    assert exc_info.value.location == location
    assert exc_info.value.message == failure_message(1, "Log in")


def test_run_passes_source_location_to_sink(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test the assertion sink receives the policy source location."""
    location = SourceLocation(file="tests/test_launch.py", line=7)
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    controller.run(
        action=Mock(),
        success_check=lambda: False,
        policy=RetryPolicy(max_attempts=0, source_location=location),
    )

    assert mock_sink.assert_true.call_args == call(False, failure_message(0), location)


def test_run_reports_activities_in_order(
    recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test every phase of a retried run is reported as an activity."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)
    check = Mock(side_effect=[False, True])

    controller.run(
        action=Mock(),
        success_check=check,
        reset=Mock(),
        policy=RetryPolicy(max_attempts=2, description="Tap"),
    )

    assert recording_reporter.names == [
        action_name(0, 2, "Tap"),
        check_name(0, 2, "Tap"),
        status_name(0, 2, "Tap"),
        reset_name(0, 2, "Tap"),
        action_name(1, 2, "Tap"),
        check_name(1, 2, "Tap"),
        success_summary(1, "Tap"),
    ]


def test_run_reports_exhaustion(recording_reporter: RecordingReporter, mock_sink: Mock) -> None:
    """Test an exhausted run reports status and failure but no final reset."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    controller.run(
        action=Mock(),
        success_check=lambda: False,
        reset=Mock(),
        policy=RetryPolicy(max_attempts=1),
    )

    assert recording_reporter.names == [
        action_name(0, 1),
        check_name(0, 1),
        status_name(0, 1),
        reset_name(0, 1),
        action_name(1, 1),
        check_name(1, 1),
        status_name(1, 1),
        failure_message(1),
    ]


def test_run_callbacks_run_inside_activities(mock_sink: Mock) -> None:
    """Test the action and check run inside their reported activity."""
    reporter = RecordingReporter()
    controller = RetryController(reporter=reporter, assertion_sink=mock_sink)

    controller.run(
        action=lambda: reporter.report_event("Inside action"),
        success_check=lambda: reporter.report_event("Inside check") is None,
    )

    assert len(reporter.records) == 5
    assert [record.depth for record in reporter.records] == [0, 1, 0, 1, 0]
    assert reporter.names[1] == "Inside action"
    assert reporter.names[3] == "Inside check"


def test_run_controller_is_reusable(
    counter: Counter, recording_reporter: RecordingReporter, mock_sink: Mock
) -> None:
    """Test one controller can run several independent loops."""
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    first = controller.run(action=counter.increment, success_check=lambda: counter.value == 2)
    second = controller.run(action=counter.increment, success_check=lambda: counter.value == 3)

    assert first.attempts_used == 1
    assert second.attempts_used == 0


def test_run_nested(recording_reporter: RecordingReporter, mock_sink: Mock) -> None:
    """Test a controller can be re-entered from its own action."""
    inner_counter = {"value": 0}
    outer_counter = {"value": 0}
    controller = RetryController(reporter=recording_reporter, assertion_sink=mock_sink)

    def outer_action() -> None:
        controller.run(
            action=lambda: inner_counter.update(value=inner_counter["value"] + 1),
            success_check=lambda: inner_counter["value"] >= 2,
            policy=RetryPolicy(description="Inner"),
        )
        outer_counter["value"] += 1

    outcome = controller.run(
        action=outer_action,
        success_check=lambda: outer_counter["value"] == 2,
        policy=RetryPolicy(description="Outer"),
    )

    assert outcome.attempts_used == 1
    assert inner_counter["value"] == 3
    assert outer_counter["value"] == 2
    nested = [record for record in recording_reporter.records if record.depth == 1]
    assert nested[0].name == action_name(0, 3, "Inner")


#################################
#     Tests for RetryOutcome    #
#################################


def test_retry_outcome_properties() -> None:
    """Test RetryOutcome derived properties."""
    outcome = RetryOutcome(attempts_used=2, succeeded=True, max_attempts=5)

    assert outcome.attempts_remaining == 3
    assert outcome.total_attempts == 3
    assert outcome.description is None


def test_retry_outcome_bool() -> None:
    """Test RetryOutcome truthiness follows succeeded."""
    assert RetryOutcome(attempts_used=0, succeeded=True, max_attempts=3)
    assert not RetryOutcome(attempts_used=3, succeeded=False, max_attempts=3)


def test_retry_outcome_is_frozen() -> None:
    """Test RetryOutcome cannot be mutated."""
    outcome = RetryOutcome(attempts_used=0, succeeded=True, max_attempts=3)

    with pytest.raises(AttributeError):
        outcome.attempts_used = 1  # type: ignore[misc]


#####################################
#     Tests for evaluate_success    #
#####################################


@pytest.mark.parametrize(
    ("result", "expected"),
    [(True, True), (False, False), (None, False), (1, True), (0, False), ("", False)],
)
def test_evaluate_success(result: object, expected: bool) -> None:
    """Test success check results are coerced to a boolean."""
    assert evaluate_success(lambda: result) is expected


def test_evaluate_success_exception_is_failure(caplog: pytest.LogCaptureFixture) -> None:
    """Test an exception in the success check is logged and counts as
    failure."""
    with caplog.at_level("WARNING", logger="autoretry.retry.controller"):
        assert evaluate_success(Mock(side_effect=KeyError("missing"))) is False

    assert "Success check raised" in caplog.text
