"""
End-to-end tests for DecisionTreeService.
"""

import json
import logging

from actiontree.config import StepErrorPolicy, TreeServiceConfig
from actiontree.examples import CHRISTMAS_TREE, EMAIL_AND_SMS_TREE, OPTIONAL_MAILS_TREE
from actiontree.services import DecisionTreeService, RunResult


class TestScenarios:
    def test_christmas_tree_sends_one_sms(self, service, recorder):
        result = service.run(CHRISTMAS_TREE, {"date": "1.1.2025"})

        assert result == RunResult(status="success")
        assert [(n.channel, n.address_to) for n in recorder.outbox] == [("sms", "1234567890")]

    def test_christmas_tree_other_day_sends_nothing(self, service, recorder):
        result = service.run(CHRISTMAS_TREE, {"date": "2.1.2025"})

        assert result.ok
        assert recorder.outbox == []

    def test_email_then_sms(self, service, recorder):
        tree = {
            "type": "sequence",
            "actions": [
                {"type": "send_email", "params": {"sender": "a", "receiver": "b"}},
                {"type": "send_sms", "params": {"phone": "x"}},
            ],
        }

        result = service.run(tree)

        assert result.ok
        assert [(n.channel, n.address_to) for n in recorder.outbox] == [("email", "b"), ("sms", "x")]
        assert recorder.outbox[0].sender == "a"

    def test_email_and_sms_demo(self, service, recorder):
        assert service.run(EMAIL_AND_SMS_TREE).ok
        assert recorder.addresses() == ["b@example.com", "1234567890", "c@example.com"]

    def test_optional_mails_depends_on_context(self, service, recorder):
        assert service.run(OPTIONAL_MAILS_TREE, {"coin": "tails"}).ok
        assert recorder.outbox == []

        assert service.run(OPTIONAL_MAILS_TREE, {"coin": "heads"}).ok
        assert len(recorder.outbox) == 10

    def test_context_is_optional(self, service, recorder):
        result = service.run(CHRISTMAS_TREE)

        assert result.ok
        assert recorder.outbox == []


class TestFailures:
    def test_empty_node_is_malformed(self, service, recorder):
        result = service.run({})

        assert result.status == "error"
        assert result.error_type == "MalformedNodeError"
        assert "type" in result.message
        assert recorder.outbox == []

    def test_none_is_malformed(self, service):
        assert service.run(None).error_type == "MalformedNodeError"

    def test_unknown_type(self, service):
        result = service.run({"type": "bogus"})

        assert result.error_type == "UnknownActionTypeError"
        assert "bogus" in result.message

    def test_nested_structural_error_sends_nothing(self, service, recorder):
        tree = {
            "type": "sequence",
            "actions": [
                {"type": "send_sms", "params": {"phone": "1"}},
                {"type": "loop", "params": {"iterations": -2}, "action": {"type": "send_sms", "params": {"phone": "2"}}},
            ],
        }

        result = service.run(tree)

        assert result.error_type == "MalformedNodeError"
        assert recorder.outbox == []

    def test_failure_is_logged(self, service, caplog):
        with caplog.at_level(logging.ERROR, logger="actiontree"):
            service.run({"type": "bogus"})

        assert "Error processing decision tree" in caplog.text

    def test_unabsorbed_execution_error_is_reported(self, registry, failing_notifier):
        service = DecisionTreeService(registry=registry, notifier=failing_notifier(failing={"1"}))

        result = service.run({"type": "send_sms", "params": {"phone": "1"}})

        assert result.status == "error"
        assert result.error_type == "ConnectionError"


class TestRecoveredErrors:
    def test_bad_expression_still_succeeds(self, service, recorder):
        tree = {
            "type": "condition",
            "params": {"expression": "syntaxError("},
            "trueAction": {"type": "send_sms", "params": {"phone": "yes"}},
            "falseAction": {"type": "send_sms", "params": {"phone": "no"}},
        }

        result = service.run(tree, {"date": "1.1.2025"})

        assert result == RunResult(status="success")
        assert recorder.addresses() == ["no"]

    def test_failing_step_still_succeeds(self, registry, failing_notifier):
        notifier = failing_notifier(failing={"B"})
        service = DecisionTreeService(registry=registry, notifier=notifier)

        result = service.run(
            {"type": "sequence", "actions": [{"type": "send_sms", "params": {"phone": p}} for p in "ABC"]}
        )

        assert result.ok
        assert notifier.attempts == ["A", "B", "C"]

    def test_fail_fast_config_reports_failure(self, registry, failing_notifier):
        notifier = failing_notifier(failing={"B"})
        config = TreeServiceConfig(step_error_policy=StepErrorPolicy.FAIL_FAST)
        service = DecisionTreeService(registry=registry, notifier=notifier, config=config)

        result = service.run(
            {"type": "sequence", "actions": [{"type": "send_sms", "params": {"phone": p}} for p in "ABC"]}
        )

        assert result.error_type == "StepExecutionError"
        assert notifier.attempts == ["A", "B"]


class TestRunJson:
    def test_runs_json_text(self, service, recorder):
        result = service.run_json(json.dumps(CHRISTMAS_TREE), {"date": "1.1.2025"})

        assert result.ok
        assert recorder.addresses() == ["1234567890"]

    def test_invalid_json(self, service):
        result = service.run_json("{not json")

        assert result.error_type == "MalformedNodeError"
        assert "Invalid JSON" in result.message


class TestDefaults:
    def test_uses_global_registry(self):
        service = DecisionTreeService()

        assert service.build({"type": "send_sms", "params": {"phone": "1"}}).to_node()["type"] == "send_sms"

    def test_default_notifier_logs(self, caplog):
        with caplog.at_level(logging.INFO, logger="actiontree"):
            result = DecisionTreeService().run({"type": "send_sms", "params": {"phone": "555"}})

        assert result.ok
        assert "Sending SMS to 555" in caplog.text
