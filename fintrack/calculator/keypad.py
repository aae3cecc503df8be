"""Mini README: Keypad layout binding button labels to evaluator actions.

Structure:
    * KeypadButton - label, action and style hint for one button.
    * KEYPAD - the four-column grid in display order.
    * QUICK_ACTIONS - percentage and markup shortcuts shown below the grid.
    * press - dispatch a label to a ``SequentialEvaluator``.

The dashboard template renders buttons straight from these tables, so the
grid order here is the order users see.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..logging_utils import get_logger
from .evaluator import CalculatorState, Operator, SequentialEvaluator

LOGGER = get_logger(__name__)

Action = Callable[[SequentialEvaluator], CalculatorState]


@dataclass(frozen=True, slots=True)
class KeypadButton:
    """A single button rendered on the calculator."""

    label: str
    action: Action
    style: str = "digit"
    wide: bool = False


def _digit(value: int) -> KeypadButton:
    return KeypadButton(
        label=str(value),
        action=lambda evaluator: evaluator.input_digit(value),
        wide=value == 0,
    )


def _operator(operator: Operator) -> KeypadButton:
    return KeypadButton(
        label=operator.symbol,
        action=lambda evaluator: evaluator.apply_operator(operator),
        style="operator",
    )


KEYPAD: Tuple[KeypadButton, ...] = (
    KeypadButton("C", SequentialEvaluator.clear, style="clear", wide=True),
    KeypadButton("⌫", SequentialEvaluator.backspace, style="control"),
    _operator(Operator.DIVIDE),
    _digit(7),
    _digit(8),
    _digit(9),
    _operator(Operator.MULTIPLY),
    _digit(4),
    _digit(5),
    _digit(6),
    _operator(Operator.SUBTRACT),
    _digit(1),
    _digit(2),
    _digit(3),
    _operator(Operator.ADD),
    _digit(0),
    KeypadButton(".", SequentialEvaluator.input_decimal_point),
    KeypadButton("=", SequentialEvaluator.evaluate_equals, style="equals"),
)

QUICK_ACTIONS: Tuple[KeypadButton, ...] = (
    KeypadButton("10%", SequentialEvaluator.apply_percentage_of_value, style="quick"),
    KeypadButton("+10%", lambda evaluator: evaluator.apply_markup(), style="quick"),
)

# Keyboard-friendly spellings accepted in addition to the printed labels.
_ALIASES: Dict[str, str] = {
    "clear": "C",
    "c": "C",
    "backspace": "⌫",
    "equals": "=",
    "percent": "10%",
    "markup": "+10%",
}

_BUTTONS: Dict[str, KeypadButton] = {
    button.label: button for button in (*KEYPAD, *QUICK_ACTIONS)
}


def labels() -> List[str]:
    """Return every label ``press`` understands, in display order."""

    return [button.label for button in (*KEYPAD, *QUICK_ACTIONS)]


def press(evaluator: SequentialEvaluator, label: str) -> CalculatorState:
    """Run the action bound to ``label`` on ``evaluator``."""

    key = _ALIASES.get(label.strip().lower(), label.strip())
    button = _BUTTONS.get(key)
    if button is None:
        raise KeyError(f"Unknown calculator key '{label}'")
    LOGGER.debug("Pressed calculator key %s", key)
    return button.action(evaluator)
