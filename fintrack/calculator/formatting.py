"""Mini README: Conversions between calculator numbers and display text.

Structure:
    * parse_display - lenient numeral parser used by every calculator operation.
    * number_to_text - renders floats the way the browser calculator shows them.
    * scale_display - exact decimal scaling used by the quick-action buttons.
    * format_display - presentation helper adding thousands separators.

The display buffer is always kept as text so partial numerals such as
``"5."`` survive between keystrokes. Parsing takes the longest numeric prefix
(``"12.5x"`` reads as 12.5) and anything without one reads as NaN, which
keeps every operation total.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional

GROUPING_THRESHOLD = 1000
MAX_FRACTION_DIGITS = 8

_NUMERIC_PREFIX = re.compile(
    r"^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def numeric_prefix(text: str) -> Optional[str]:
    """Return the leading numeral of ``text`` or ``None`` when there is none."""

    match = _NUMERIC_PREFIX.match(text)
    if not match:
        return None
    # An incomplete exponent such as "1e+" leaves just the mantissa.
    return match.group(0).strip()


def parse_display(text: str) -> float:
    """Parse display text into a float, returning NaN for non-numerals."""

    prefix = numeric_prefix(text)
    if prefix is None:
        return math.nan
    return float(prefix)


def number_to_text(value: float) -> str:
    """Render ``value`` as calculator display text.

    Integral values drop their fractional part (``20`` rather than ``20.0``),
    values from 1e-6 up to 1e21 are written positionally and everything else
    uses a compact exponent such as ``1e+21`` or ``1.5e-7``.
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    mantissa, _, exponent = repr(value).partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    power = int(exponent)
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def scale_display(text: str, factor: Decimal) -> str:
    """Multiply the numeral in ``text`` by ``factor`` without binary rounding."""

    prefix = numeric_prefix(text)
    if prefix is None:
        return "NaN"
    with localcontext() as context:
        context.prec = 50
        context.traps[InvalidOperation] = False
        result = Decimal(prefix) * factor
    return number_to_text(float(result))


def format_display(text: str) -> str:
    """Group thousands for large numerals; return everything else unchanged."""

    value = parse_display(text)
    if not math.isfinite(value) or abs(value) < GROUPING_THRESHOLD:
        return text

    with localcontext() as context:
        context.prec = 400
        rounded = Decimal(repr(value)).quantize(
            Decimal(1).scaleb(-MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP
        )
    grouped = f"{rounded:,f}"
    if "." in grouped:
        grouped = grouped.rstrip("0").rstrip(".")
    return grouped
