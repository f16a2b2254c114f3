from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from calculator.engine import NUMBER_TOKENS, CalculatorEngine, HistoryEntry


class IntentKind(Enum):
    NUMBER = auto()
    OPERATION = auto()
    COMPUTE = auto()
    CLEAR = auto()
    DELETE = auto()
    RECALL = auto()
    CLEAR_HISTORY = auto()


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    value: str = ""
    entry: Optional[HistoryEntry] = None


# 画面上の演算子ボタンの表記 -> 内部の演算子
BUTTON_OPERATORS = {
    "+": "+",
    "-": "-",
    "×": "*",
    "÷": "/",
    "*": "*",
    "/": "/",
}

# キーボードのキー名 -> 入力トークン
KEY_ALIASES = {
    "Period": ".",
    "Numpad Decimal": ".",
    "Numpad Add": "+",
    "Numpad Subtract": "-",
    "Minus": "-",
    "Numpad Multiply": "*",
    "Numpad Divide": "/",
    "Slash": "/",
    "Equal": "=",
    "Numpad Equal": "=",
    "Numpad Enter": "Enter",
}

# Shiftと組み合わせたときに演算子になるキー (US配列)
SHIFTED_KEYS = {
    "=": "+",
    "8": "*",
}


#ボタンの表記を操作に変換
def intent_for_button(label: str) -> Optional[Intent]:
    if len(label) == 1 and label in NUMBER_TOKENS:
        return Intent(IntentKind.NUMBER, label)
    if label in BUTTON_OPERATORS:
        return Intent(IntentKind.OPERATION, BUTTON_OPERATORS[label])
    return {
        "=": Intent(IntentKind.COMPUTE),
        "AC": Intent(IntentKind.CLEAR),
        "DEL": Intent(IntentKind.DELETE),
    }.get(label)


#キー入力を操作に変換
def intent_for_key(key: str, shift: bool = False) -> Optional[Intent]:
    key = KEY_ALIASES.get(key, key)
    if key.startswith("Numpad "):
        key = key[len("Numpad "):]
    if shift and key in SHIFTED_KEYS:
        key = SHIFTED_KEYS[key]

    if len(key) == 1 and key in NUMBER_TOKENS:
        return Intent(IntentKind.NUMBER, key)
    if key in ("+", "-", "*", "/"):
        return Intent(IntentKind.OPERATION, key)
    return {
        "Enter": Intent(IntentKind.COMPUTE),
        "=": Intent(IntentKind.COMPUTE),
        "Backspace": Intent(IntentKind.DELETE),
        "Escape": Intent(IntentKind.CLEAR),
    }.get(key)


def handle_intent(engine: CalculatorEngine, intent: Intent) -> None:
    """操作を対応するエンジンのメソッドへ振り分ける"""
    if intent.kind is IntentKind.RECALL:
        if intent.entry is not None:
            engine.recall(intent.entry)
        return

    handlers = {
        IntentKind.NUMBER: lambda: engine.append_number(intent.value),
        IntentKind.OPERATION: lambda: engine.choose_operation(intent.value),
        IntentKind.COMPUTE: engine.compute,
        IntentKind.CLEAR: engine.clear,
        IntentKind.DELETE: engine.delete,
        IntentKind.CLEAR_HISTORY: engine.clear_history,
    }
    handlers[intent.kind]()
