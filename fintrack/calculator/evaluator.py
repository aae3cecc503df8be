"""Mini README: Sequential expression evaluator behind the calculator tab.

Structure:
    * Operator - the four arithmetic operators and their keypad symbols.
    * CalculatorState - immutable bundle of display, accumulator, pending
      operator and the awaiting-new-operand flag.
    * evaluate - pure IEEE-754 binary arithmetic.
    * input_digit / input_decimal_point / backspace / clear / apply_operator /
      evaluate_equals / apply_percentage_of_value / apply_markup - pure state
      transitions ``CalculatorState -> CalculatorState``.
    * SequentialEvaluator - the single owned handle a UI session drives.

Operators chain left to right with no precedence: entering a new operator
immediately collapses the pending one, so ``2 + 3 * 4 =`` shows ``20``.
Division by zero is not trapped; the infinite or NaN result flows into the
display as ``Infinity``/``NaN``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

import numpy as np

from ..logging_utils import get_logger
from .formatting import format_display, number_to_text, parse_display, scale_display

LOGGER = get_logger(__name__)

PERCENTAGE_FACTOR = Decimal("0.10")
DEFAULT_MARKUP_RATE = Decimal("0.10")


class Operator(str, Enum):
    """Binary operators available on the keypad."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_str(cls, value: str) -> "Operator":
        """Accept either the operator name or its keypad symbol."""

        normalised = str(value).strip().lower()
        for operator, symbol in _SYMBOLS.items():
            if normalised == symbol:
                return operator
        try:
            return cls(normalised)
        except ValueError as error:
            raise ValueError(f"Unsupported operator: {value}") from error


_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "*",
    Operator.DIVIDE: "/",
}


@dataclass(frozen=True, slots=True)
class CalculatorState:
    """Complete calculator state for one session."""

    display: str = "0"
    accumulator: Optional[float] = None
    pending_operator: Optional[Operator] = None
    awaiting_operand: bool = False

    @property
    def current_value(self) -> float:
        return parse_display(self.display)

    def pending_expression(self) -> str:
        """Text shown under the display while an operator waits for its operand."""

        if self.accumulator is None or self.pending_operator is None:
            return ""
        return f"{format_display(number_to_text(self.accumulator))} {self.pending_operator.symbol}"

    def as_dict(self) -> Dict[str, object]:
        """Export the state with JSON-safe values."""

        return {
            "display": self.display,
            "formatted_display": format_display(self.display),
            "expression": self.pending_expression(),
            "accumulator": None if self.accumulator is None else number_to_text(self.accumulator),
            "pending_operator": self.pending_operator.value if self.pending_operator else None,
            "awaiting_operand": self.awaiting_operand,
        }


INITIAL_STATE = CalculatorState()


def evaluate(a: float, b: float, operator: Operator) -> float:
    """Apply ``operator`` to ``a`` and ``b`` with IEEE-754 semantics."""

    left = np.float64(a)
    right = np.float64(b)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if operator is Operator.ADD:
            result = left + right
        elif operator is Operator.SUBTRACT:
            result = left - right
        elif operator is Operator.MULTIPLY:
            result = left * right
        elif operator is Operator.DIVIDE:
            result = left / right
        else:
            raise ValueError(f"Unsupported operator: {operator}")
    return float(result)


def _coerce_digit(digit: Union[int, str]) -> str:
    if isinstance(digit, bool):
        raise ValueError(f"Digit must be between 0 and 9, got {digit!r}")
    text = str(digit).strip()
    if len(text) != 1 or text not in "0123456789":
        raise ValueError(f"Digit must be between 0 and 9, got {digit!r}")
    return text


def input_digit(state: CalculatorState, digit: Union[int, str]) -> CalculatorState:
    """Start a new operand or extend the current one with ``digit``."""

    text = _coerce_digit(digit)
    if state.awaiting_operand:
        return replace(state, display=text, awaiting_operand=False)
    if state.display == "0":
        return replace(state, display=text)
    return replace(state, display=state.display + text)


def input_decimal_point(state: CalculatorState) -> CalculatorState:
    if state.awaiting_operand:
        return replace(state, display="0.", awaiting_operand=False)
    if "." in state.display:
        return state
    return replace(state, display=state.display + ".")


def backspace(state: CalculatorState) -> CalculatorState:
    if len(state.display) > 1:
        return replace(state, display=state.display[:-1])
    return replace(state, display="0")


def clear(state: Optional[CalculatorState] = None) -> CalculatorState:
    return INITIAL_STATE


def apply_operator(state: CalculatorState, operator: Operator) -> CalculatorState:
    """Seed the chain or collapse the pending operator, then queue ``operator``."""

    current = state.current_value
    if state.accumulator is None or state.pending_operator is None:
        return replace(
            state,
            accumulator=current,
            pending_operator=operator,
            awaiting_operand=True,
        )

    result = evaluate(state.accumulator, current, state.pending_operator)
    return CalculatorState(
        display=number_to_text(result),
        accumulator=result,
        pending_operator=operator,
        awaiting_operand=True,
    )


def evaluate_equals(state: CalculatorState) -> CalculatorState:
    """Finish the chain; a no-op when nothing is pending."""

    if state.accumulator is None or state.pending_operator is None:
        return state
    result = evaluate(state.accumulator, state.current_value, state.pending_operator)
    return CalculatorState(display=number_to_text(result), awaiting_operand=True)


def apply_percentage_of_value(state: CalculatorState) -> CalculatorState:
    """Replace the display with 10% of its value."""

    return replace(
        state,
        display=scale_display(state.display, PERCENTAGE_FACTOR),
        awaiting_operand=True,
    )


def apply_markup(
    state: CalculatorState, rate: Union[Decimal, float, str] = DEFAULT_MARKUP_RATE
) -> CalculatorState:
    """Replace the display with its value marked up by ``rate`` (0.10 is +10%)."""

    factor = Decimal(1) + Decimal(str(rate))
    return replace(
        state,
        display=scale_display(state.display, factor),
        awaiting_operand=True,
    )


class SequentialEvaluator:
    """Owned handle holding one session's calculator state."""

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        self._state = state or INITIAL_STATE

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def display(self) -> str:
        return self._state.display

    def _transition(self, action: str, new_state: CalculatorState) -> CalculatorState:
        LOGGER.debug("Calculator %s: %s -> %s", action, self._state, new_state)
        self._state = new_state
        return new_state

    def input_digit(self, digit: Union[int, str]) -> CalculatorState:
        return self._transition("digit", input_digit(self._state, digit))

    def input_decimal_point(self) -> CalculatorState:
        return self._transition("decimal", input_decimal_point(self._state))

    def backspace(self) -> CalculatorState:
        return self._transition("backspace", backspace(self._state))

    def clear(self) -> CalculatorState:
        return self._transition("clear", clear(self._state))

    def apply_operator(self, operator: Union[Operator, str]) -> CalculatorState:
        if not isinstance(operator, Operator):
            operator = Operator.from_str(operator)
        return self._transition("operator", apply_operator(self._state, operator))

    def evaluate_equals(self) -> CalculatorState:
        return self._transition("equals", evaluate_equals(self._state))

    def apply_percentage_of_value(self) -> CalculatorState:
        return self._transition("percentage", apply_percentage_of_value(self._state))

    def apply_markup(self, rate: Union[Decimal, float, str] = DEFAULT_MARKUP_RATE) -> CalculatorState:
        return self._transition("markup", apply_markup(self._state, rate))

    evaluate = staticmethod(evaluate)
