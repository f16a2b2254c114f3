import pytest

from calculator.engine import CalculatorEngine, Notice
from calculator.intents import Intent, IntentKind, handle_intent, intent_for_button, intent_for_key


@pytest.mark.parametrize(
    "label, expected",
    [
        ("7", Intent(IntentKind.NUMBER, "7")),
        (".", Intent(IntentKind.NUMBER, ".")),
        ("+", Intent(IntentKind.OPERATION, "+")),
        ("×", Intent(IntentKind.OPERATION, "*")),
        ("÷", Intent(IntentKind.OPERATION, "/")),
        ("=", Intent(IntentKind.COMPUTE)),
        ("AC", Intent(IntentKind.CLEAR)),
        ("DEL", Intent(IntentKind.DELETE)),
    ],
)
def test_intent_for_button(label, expected):
    assert intent_for_button(label) == expected


def test_intent_for_unknown_button():
    assert intent_for_button("%") is None


@pytest.mark.parametrize(
    "key, shift, expected",
    [
        ("5", False, Intent(IntentKind.NUMBER, "5")),
        ("Numpad 5", False, Intent(IntentKind.NUMBER, "5")),
        ("Numpad Decimal", False, Intent(IntentKind.NUMBER, ".")),
        ("-", False, Intent(IntentKind.OPERATION, "-")),
        ("Numpad Multiply", False, Intent(IntentKind.OPERATION, "*")),
        ("/", False, Intent(IntentKind.OPERATION, "/")),
        ("8", True, Intent(IntentKind.OPERATION, "*")),
        ("=", True, Intent(IntentKind.OPERATION, "+")),
        ("=", False, Intent(IntentKind.COMPUTE)),
        ("Enter", False, Intent(IntentKind.COMPUTE)),
        ("Numpad Enter", False, Intent(IntentKind.COMPUTE)),
        ("Backspace", False, Intent(IntentKind.DELETE)),
        ("Escape", False, Intent(IntentKind.CLEAR)),
    ],
)
def test_intent_for_key(key, shift, expected):
    assert intent_for_key(key, shift=shift) == expected


@pytest.mark.parametrize("key", ["A", "F1", "Tab", "Arrow Left"])
def test_intent_for_unknown_key(key):
    assert intent_for_key(key) is None


class TestHandleIntent:

    def setup_method(self):
        self.notices = []
        self.engine = CalculatorEngine(notify=self.notices.append)

    def dispatch_keys(self, *keys):
        for key in keys:
            handle_intent(self.engine, intent_for_key(key))

    def test_keyboard_session(self):
        self.dispatch_keys("1", "2", "+", "3", "Enter")
        assert self.engine.current_operand == "15"
        assert self.engine.history[0].expression == "12 + 3"

    def test_delete_and_clear(self):
        self.dispatch_keys("4", "5", "Backspace")
        assert self.engine.current_operand == "4"
        self.dispatch_keys("*", "2", "Escape")
        assert self.engine.current_operand == "0"
        assert self.engine.operation is None

    def test_recall_and_clear_history(self):
        self.dispatch_keys("2", "*", "2", "1", "Enter", "Escape")
        entry = self.engine.history[0]
        handle_intent(self.engine, Intent(IntentKind.RECALL, entry=entry))
        assert self.engine.current_operand == "42"
        assert self.engine.ready_to_reset is True

        handle_intent(self.engine, Intent(IntentKind.CLEAR_HISTORY))
        assert self.engine.history == ()
        assert self.notices == [Notice.RESULT_RECALLED, Notice.HISTORY_CLEARED]

    def test_recall_without_entry_is_ignored(self):
        self.dispatch_keys("7")
        handle_intent(self.engine, Intent(IntentKind.RECALL))
        assert self.engine.current_operand == "7"
        assert self.notices == []
