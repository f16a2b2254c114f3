import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from calculator.config import PRECISION

logger = logging.getLogger(__name__)

NUMBER_TOKENS = "0123456789."

# 先頭から読める数値部分 (例: "3." -> 3, "1e+21" -> 1e21)
_NUMBER_PATTERN = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class Operation(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return {"*": "×", "/": "÷"}.get(self.value, self.value)


class Notice(Enum):
    DIVIDE_BY_ZERO = "0で割ることはできません"
    RESULT_RECALLED = "結果を呼び出しました"
    HISTORY_CLEARED = "履歴を消去しました"

    @property
    def message(self) -> str:
        return self.value


@dataclass
class EditingState:
    current_operand: str = "0"
    previous_operand: str = ""
    operation: Optional[Operation] = None
    ready_to_reset: bool = False


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: float


#浮動小数点の誤差を丸める
def round_to_epsilon(value: float, precision: int = PRECISION) -> float:
    if not math.isfinite(value):
        return value
    factor = 10 ** precision
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


#文字列の先頭を数値として読む (読めなければNone)
def parse_number(text: str) -> Optional[float]:
    match = _NUMBER_PATTERN.match(text.strip())
    if match is None:
        return None
    return float(match.group().replace("Infinity", "inf"))


#数値を適切な形式で文字列に変換
def format_number(num: float) -> str:
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if num.is_integer() and abs(num) < 1e21:
        return str(int(num))
    if abs(num) >= 1e21:
        return repr(num)
    return format(Decimal(repr(num)), "f")


def get_display_number(value: Union[str, float]) -> str:
    """表示用に整数部を桁区切りし、小数部はそのまま付け足す"""
    text = value if isinstance(value, str) else format_number(value)
    integer_part, dot, decimal_part = text.partition(".")
    integer_value = parse_number(integer_part)

    if integer_value is None:
        integer_display = ""
    elif math.isinf(integer_value):
        integer_display = "∞" if integer_value > 0 else "-∞"
    else:
        integer_display = f"{integer_value:,.0f}"

    if dot:
        return f"{integer_display}.{decimal_part}"
    return integer_display


#電卓の状態と計算ロジック
class CalculatorEngine:
    def __init__(
        self,
        notify: Optional[Callable[[Notice], None]] = None,
        precision: int = PRECISION,
    ):
        self.notify = notify
        self.precision = precision
        self._history: List[HistoryEntry] = []
        self._state = EditingState()

    @property
    def current_operand(self) -> str:
        return self._state.current_operand

    @property
    def previous_operand(self) -> str:
        return self._state.previous_operand

    @property
    def operation(self) -> Optional[Operation]:
        return self._state.operation

    @property
    def ready_to_reset(self) -> bool:
        return self._state.ready_to_reset

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def current_display(self) -> str:
        return get_display_number(self._state.current_operand)

    @property
    def previous_display(self) -> str:
        if self._state.operation is None:
            return ""
        previous = get_display_number(self._state.previous_operand)
        return f"{previous} {self._state.operation.symbol}"

    #入力状態をリセット (履歴は残す)
    def clear(self) -> None:
        self._state = EditingState()

    #末尾の一文字を削除
    def delete(self) -> None:
        state = self._state
        if state.ready_to_reset:
            state.current_operand = "0"
            state.ready_to_reset = False
            return
        if state.current_operand == "0":
            return

        state.current_operand = state.current_operand[:-1]
        if state.current_operand in ("", "-"):
            state.current_operand = "0"

    #数字または小数点を入力
    def append_number(self, token: str) -> None:
        if len(token) != 1 or token not in NUMBER_TOKENS:
            logger.debug("Ignoring number token %r", token)
            return

        state = self._state
        if state.ready_to_reset:
            state.current_operand = ""
            state.ready_to_reset = False

        if token == "." and "." in state.current_operand:
            return
        if token == "0" and state.current_operand == "0":
            return
        if state.current_operand == "0" and token != ".":
            state.current_operand = token
            return

        state.current_operand += token

    #演算子を選択 (保留中の計算があれば先に計算する)
    def choose_operation(self, op: Union[str, Operation]) -> None:
        try:
            operation = Operation(op)
        except ValueError:
            logger.debug("Ignoring operator token %r", op)
            return

        if self._state.current_operand == "":
            return
        if self._state.previous_operand != "":
            self.compute()

        state = self._state
        state.operation = operation
        state.previous_operand = state.current_operand
        state.current_operand = ""

    #四則演算を計算
    def compute(self) -> None:
        state = self._state
        prev = parse_number(state.previous_operand)
        current = parse_number(state.current_operand)
        if prev is None or current is None:
            return
        if state.operation is None:
            return

        if state.operation is Operation.DIVIDE and current == 0:
            logger.warning("Division by zero blocked: %s / %s", state.previous_operand, state.current_operand)
            self._state = EditingState(ready_to_reset=state.ready_to_reset)
            self._emit(Notice.DIVIDE_BY_ZERO)
            return

        result = {
            Operation.ADD: lambda: prev + current,
            Operation.SUBTRACT: lambda: prev - current,
            Operation.MULTIPLY: lambda: prev * current,
            Operation.DIVIDE: lambda: prev / current,
        }[state.operation]()
        result = round_to_epsilon(result, self.precision)

        self._add_to_history(prev, state.operation, current, result)

        state.current_operand = format_number(result)
        state.operation = None
        state.previous_operand = ""
        state.ready_to_reset = True

    #履歴の結果を呼び出す
    def recall(self, entry: HistoryEntry) -> None:
        self._state.current_operand = format_number(entry.result)
        self._state.ready_to_reset = True
        logger.info("Recalled %s = %s", entry.expression, self._state.current_operand)
        self._emit(Notice.RESULT_RECALLED)

    #履歴を全て削除
    def clear_history(self) -> None:
        self._history = []
        logger.info("History cleared")
        self._emit(Notice.HISTORY_CLEARED)

    def _add_to_history(self, prev: float, operation: Operation, current: float, result: float) -> None:
        expression = f"{format_number(prev)} {operation.symbol} {format_number(current)}"
        entry = HistoryEntry(expression=expression, result=result)
        self._history.insert(0, entry)
        logger.info("Computed %s = %s", expression, format_number(result))

    def _emit(self, notice: Notice) -> None:
        if self.notify is not None:
            self.notify(notice)
