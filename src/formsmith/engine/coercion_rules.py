"""
Explicit value conversions used by the rule, validation and DTO engines.

Field values arrive from a browser form, so comparisons follow the form
runtime's coercion rules: loose equality between numbers and numeric
strings, ``Number()``-style numeric parsing and string-truthiness for
checkboxes. Each rule is spelled out per value variant here instead of being
left to implicit conversions.

A missing value (``None``) behaves like ``undefined``: it is NaN as a number,
the empty string as text and falsy.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from dateutil import parser as date_parser

from formsmith.core.ir.values import (
    BoolValue,
    DateValue,
    FieldValue,
    ListValue,
    NumberValue,
    TextValue,
    wrap,
)

INVALID_DATE = "Invalid Date"

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_LITERAL = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_RADIX = {"x": 16, "o": 8, "b": 2}
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Supplies the parts a partial date string ("March 5", "5pm") leaves out
_PARTIAL_DATE_DEFAULT = datetime(2001, 1, 1)


# =============================================================================
# Emptiness and truthiness
# =============================================================================


def is_empty(raw: Any) -> bool:
    """Empty means missing or the empty string; ``0`` and ``False`` are values."""
    return raw is None or (isinstance(raw, str) and raw == "")


def is_truthy(value: FieldValue | None) -> bool:
    """Boolean conversion: non-empty strings (including "false") are true."""
    if value is None:
        return False
    if isinstance(value, BoolValue):
        return value.flag
    if isinstance(value, NumberValue):
        return not (value.number == 0 or math.isnan(value.number))
    if isinstance(value, TextValue):
        return value.text != ""
    # Dates and lists are objects, always truthy
    return True


# =============================================================================
# Numbers
# =============================================================================


def parse_number_text(text: str) -> float:
    """
    Parse a string the way ``Number(string)`` does.

    Examples:
        >>> parse_number_text(" 12 ")
        12.0
        >>> parse_number_text("")
        0.0
        >>> parse_number_text("0x1F")
        31.0
        >>> math.isnan(parse_number_text("12abc"))
        True
    """
    stripped = text.strip()
    if stripped == "":
        return 0.0
    if stripped in ("Infinity", "+Infinity"):
        return math.inf
    if stripped == "-Infinity":
        return -math.inf
    radix = _RADIX_LITERAL.fullmatch(stripped)
    if radix:
        try:
            return float(int(radix.group(2), _RADIX[radix.group(1).lower()]))
        except ValueError:
            return math.nan
    if _DECIMAL_LITERAL.fullmatch(stripped):
        return float(stripped)
    return math.nan


def to_number(value: FieldValue | None) -> float:
    """Numeric conversion; anything unparsable becomes NaN."""
    if value is None:
        return math.nan
    if isinstance(value, NumberValue):
        return value.number
    if isinstance(value, BoolValue):
        return 1.0 if value.flag else 0.0
    if isinstance(value, TextValue):
        return parse_number_text(value.text)
    if isinstance(value, DateValue):
        return float(_epoch_millis(_as_utc(value.moment)))
    # Lists convert through their joined text: [] -> 0, [5] -> 5, [1, 2] -> NaN
    return parse_number_text(to_text(value))


def format_number(number: float) -> str:
    """
    Render a number the way the form runtime prints it.

    Examples:
        >>> format_number(5.0)
        '5'
        >>> format_number(0.5)
        '0.5'
        >>> format_number(1e-7)
        '1e-7'
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))

    sign = "-" if number < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    k = len(digits)
    n = k + exponent

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


# =============================================================================
# Text
# =============================================================================


def to_text(value: FieldValue | None) -> str:
    """
    String conversion used by CONTAINS and pattern checks.

    A missing value converts to the empty string rather than "undefined", so
    CONTAINS never matches a field that has no value.
    """
    if value is None:
        return ""
    if isinstance(value, TextValue):
        return value.text
    if isinstance(value, NumberValue):
        return format_number(value.number)
    if isinstance(value, BoolValue):
        return "true" if value.flag else "false"
    if isinstance(value, DateValue):
        return value.moment.isoformat()
    return ",".join(to_text(item) for item in value.items)


# =============================================================================
# Equality
# =============================================================================


def loose_equals(left: FieldValue | None, right: FieldValue | None) -> bool:
    """
    Loose equality between two values.

    Rules:
    - missing equals only missing
    - same variant: value comparison (NaN never equals itself)
    - number vs text: the text is parsed as a number
    - booleans compare as 1/0
    - lists and dates compare through their text against primitives
    """
    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, NumberValue) and isinstance(right, NumberValue):
        return left.number == right.number
    if type(left) is type(right):
        return left == right

    if isinstance(left, BoolValue):
        return loose_equals(NumberValue(to_number(left)), right)
    if isinstance(right, BoolValue):
        return loose_equals(left, NumberValue(to_number(right)))

    if isinstance(left, NumberValue) and isinstance(right, TextValue):
        return left.number == parse_number_text(right.text)
    if isinstance(left, TextValue) and isinstance(right, NumberValue):
        return parse_number_text(left.text) == right.number

    left_is_object = isinstance(left, (ListValue, DateValue))
    right_is_object = isinstance(right, (ListValue, DateValue))
    if left_is_object and right_is_object:
        return False
    if left_is_object:
        return loose_equals(TextValue(to_text(left)), right)
    if right_is_object:
        return loose_equals(left, TextValue(to_text(right)))
    return False


# =============================================================================
# Dates
# =============================================================================


def _as_utc(moment: date | datetime) -> datetime:
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)
    return datetime(moment.year, moment.month, moment.day, tzinfo=timezone.utc)


def _epoch_millis(moment: datetime) -> int:
    delta = moment - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def _parse_date_text(text: str) -> datetime | None:
    stripped = text.strip()
    try:
        return datetime.fromisoformat(stripped.replace("Z", "+00:00"))
    except ValueError:
        pass
    try:
        return date_parser.parse(stripped, default=_PARTIAL_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None


def to_iso_timestamp(raw: Any) -> str:
    """
    Convert a raw value to ``YYYY-MM-DDTHH:MM:SS.sssZ`` in UTC.

    Numbers are epoch milliseconds; naive date-times are taken as UTC.
    Partial date strings take their missing parts from 2001-01-01, so the
    result never depends on the current date.
    Anything that cannot be read as a date yields ``"Invalid Date"``.

    Examples:
        >>> to_iso_timestamp("2024-03-01")
        '2024-03-01T00:00:00.000Z'
        >>> to_iso_timestamp("not a date")
        'Invalid Date'
    """
    value = wrap(raw)
    moment: datetime | None
    try:
        if isinstance(value, DateValue):
            moment = _as_utc(value.moment)
        elif isinstance(value, TextValue):
            parsed = _parse_date_text(value.text)
            moment = _as_utc(parsed) if parsed is not None else None
        else:
            millis = to_number(value)
            if math.isnan(millis) or math.isinf(millis):
                return INVALID_DATE
            moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE

    if moment is None:
        return INVALID_DATE
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )
