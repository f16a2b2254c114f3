from calculator.engine import (
    CalculatorEngine,
    EditingState,
    HistoryEntry,
    Notice,
    Operation,
    format_number,
    get_display_number,
    parse_number,
    round_to_epsilon,
)
from calculator.intents import Intent, IntentKind, handle_intent, intent_for_button, intent_for_key
