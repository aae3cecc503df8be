"""Mini README: Calculator engine for quick financial arithmetic.

The package bundles the sequential (no precedence) evaluator, the display
formatting helpers, the keypad binding table and the per-session registry
used by the web interface.
"""

from .evaluator import CalculatorState, Operator, SequentialEvaluator, evaluate
from .formatting import format_display, number_to_text
from .keypad import KEYPAD, QUICK_ACTIONS, press
from .sessions import CalculatorSessions

__all__ = [
    "CalculatorSessions",
    "CalculatorState",
    "KEYPAD",
    "Operator",
    "QUICK_ACTIONS",
    "SequentialEvaluator",
    "evaluate",
    "format_display",
    "number_to_text",
    "press",
]
