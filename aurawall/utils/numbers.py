# aurawall/utils/numbers.py
from __future__ import annotations

import math
from decimal import Decimal


def js_round(value: float) -> int:
    """Round half toward +infinity (Python's round() is half-to-even)."""
    return math.floor(value + 0.5)


def fmt_num(value: float) -> str:
    """
    Format a number the way ECMAScript's Number#toString does, so emitted
    markup is byte-identical to what browser-side renderers produce:
      - integral values print without a fractional part (540, not 540.0)
      - shortest round-trip digits otherwise
      - exponent notation only below 1e-6 or from 1e21 upwards
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    mantissa, exp_text = text.split("e")
    exponent = int(exp_text)
    if -7 < exponent < 21:
        # Python switches to exponent form earlier than JS does
        return format(Decimal(text), "f")
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"
