"""
Tests for ordered sequences and their step error policy.
"""

import pytest

from actiontree.config import StepErrorPolicy
from actiontree.core.actions import RepeatAction, SendEmailAction, SendSmsAction, SequenceAction
from actiontree.core.context import ExecutionContext
from actiontree.core.errors import StepExecutionError


def _abc() -> SequenceAction:
    return SequenceAction(steps=(SendSmsAction(phone="A"), SendSmsAction(phone="B"), SendSmsAction(phone="C")))


class TestSequenceOrder:
    def test_empty_sequence(self, make_context, recorder):
        SequenceAction().execute(make_context())

        assert recorder.outbox == []

    def test_steps_run_in_order(self, make_context, recorder):
        _abc().execute(make_context())

        assert recorder.addresses() == ["A", "B", "C"]

    def test_mixed_channels(self, make_context, recorder):
        SequenceAction(
            steps=(SendEmailAction(sender="a", receiver="b"), SendSmsAction(phone="x"))
        ).execute(make_context())

        assert [n.channel for n in recorder.outbox] == ["email", "sms"]


class TestStepErrors:
    def test_failing_step_does_not_stop_later_steps(self, failing_notifier):
        notifier = failing_notifier(failing={"B"})
        context = ExecutionContext(notifier=notifier)

        _abc().execute(context)

        assert notifier.attempts == ["A", "B", "C"]
        assert [n.address_to for n in notifier.delivered] == ["A", "C"]
        assert len(context.recovered_errors) == 1
        error = context.recovered_errors[0]
        assert error.kind == "step"
        assert error.action == "send_sms(B)"
        assert "Step 1" in error.message
        assert "gateway rejected B" in error.message

    def test_failure_inside_loop_is_absorbed_per_step(self, failing_notifier):
        notifier = failing_notifier(failing={"B"})
        context = ExecutionContext(notifier=notifier)

        RepeatAction(count=2, body=_abc()).execute(context)

        assert notifier.attempts == ["A", "B", "C", "A", "B", "C"]
        assert len(context.recovered_errors) == 2

    def test_fail_fast_stops_at_first_failure(self, failing_notifier):
        notifier = failing_notifier(failing={"B"})
        context = ExecutionContext(notifier=notifier, step_error_policy=StepErrorPolicy.FAIL_FAST)

        with pytest.raises(StepExecutionError) as exc_info:
            _abc().execute(context)

        assert notifier.attempts == ["A", "B"]
        assert exc_info.value.index == 1
        assert isinstance(exc_info.value.cause, ConnectionError)

    def test_fail_fast_nested_error_is_not_rewrapped(self, failing_notifier):
        notifier = failing_notifier(failing={"B"})
        context = ExecutionContext(notifier=notifier, step_error_policy=StepErrorPolicy.FAIL_FAST)
        outer = SequenceAction(steps=(SendSmsAction(phone="X"), _abc()))

        with pytest.raises(StepExecutionError) as exc_info:
            outer.execute(context)

        assert exc_info.value.step == "send_sms(B)"
        assert isinstance(exc_info.value.cause, ConnectionError)
