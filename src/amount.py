"""
Monetary amounts.

Amounts are plain ``Decimal`` values, never floats. Inputs are limited to
PRECISION fractional digits so every balance built from them is exactly
representable in the report. Arithmetic goes through a context that traps
inexact results instead of rounding.
"""
import re
from decimal import Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow

from errors import MalformedAmount

PRECISION = 4
QUANTUM = Decimal(1).scaleb(-PRECISION)

# 20 integer digits + PRECISION fractional digits
MAX_DIGITS = 24

ZERO = Decimal(0).quantize(QUANTUM)

_CONTEXT = Context(prec=60, traps=[InvalidOperation, Inexact, Overflow, DivisionByZero])

_AMOUNT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_amount(text: str) -> Decimal:
    """Parse decimal text into an amount, raising MalformedAmount on bad input."""
    raw = text.strip()
    if not _AMOUNT_PATTERN.fullmatch(raw):
        raise MalformedAmount(text)

    value = Decimal(raw)
    if value < 0:
        raise MalformedAmount(text, "amount must not be negative")

    try:
        value = value.quantize(QUANTUM, context=_CONTEXT)
    except Inexact:
        raise MalformedAmount(text, f"more than {PRECISION} decimal places") from None
    except InvalidOperation:
        raise MalformedAmount(text, "amount too large") from None

    if len(value.as_tuple().digits) > MAX_DIGITS:
        raise MalformedAmount(text, "amount too large")

    # "-0" parses as a negative zero
    return value.copy_abs()


def add(a: Decimal, b: Decimal) -> Decimal:
    return _CONTEXT.add(a, b)


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return _CONTEXT.subtract(a, b)


def format_amount(value: Decimal) -> str:
    """Render with exactly PRECISION fractional digits, e.g. ``1.5000``."""
    return f"{value.quantize(QUANTUM, context=_CONTEXT):f}"
