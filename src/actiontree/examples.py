"""Built-in demonstration trees, also used by the test suite."""

from __future__ import annotations

from typing import Any, Dict

CHRISTMAS_TREE: Dict[str, Any] = {
    "type": "condition",
    "params": {"expression": "date === '1.1.2025'"},
    "trueAction": {"type": "send_sms", "params": {"phone": "1234567890"}},
    "falseAction": {"type": "sequence", "actions": []},
}

EMAIL_AND_SMS_TREE: Dict[str, Any] = {
    "type": "sequence",
    "actions": [
        {"type": "send_email", "params": {"sender": "a@example.com", "receiver": "b@example.com"}},
        {"type": "send_sms", "params": {"phone": "1234567890"}},
        {"type": "send_email", "params": {"sender": "a@example.com", "receiver": "c@example.com"}},
    ],
}

# The coin flip is read from the context; expressions have no random source.
OPTIONAL_MAILS_TREE: Dict[str, Any] = {
    "type": "loop",
    "params": {"iterations": 10},
    "action": {
        "type": "condition",
        "params": {"expression": "coin === 'heads'"},
        "trueAction": {"type": "send_sms", "params": {"phone": "1234567890"}},
        "falseAction": {"type": "sequence", "actions": []},
    },
}

DEMO_TREES: Dict[str, Dict[str, Any]] = {
    "christmas": CHRISTMAS_TREE,
    "email_and_sms": EMAIL_AND_SMS_TREE,
    "optional_mails": OPTIONAL_MAILS_TREE,
}

DEMO_CONTEXTS: Dict[str, Dict[str, Any]] = {
    "christmas": {"date": "1.1.2025"},
    "email_and_sms": {},
    "optional_mails": {"coin": "heads"},
}


__all__ = [
    "CHRISTMAS_TREE",
    "DEMO_CONTEXTS",
    "DEMO_TREES",
    "EMAIL_AND_SMS_TREE",
    "OPTIONAL_MAILS_TREE",
]
