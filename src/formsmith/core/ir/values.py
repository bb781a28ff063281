"""
Tagged field values.

Raw UI values (strings from inputs, booleans from checkboxes, lists from
multi-selects) are classified into one of five variants before the engine
compares or converts them. The conversions themselves live in
``formsmith.engine.coercion_rules``.

``None`` is not wrapped: it stands for a missing value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class TextValue:
    text: str


@dataclass(frozen=True)
class NumberValue:
    number: float


@dataclass(frozen=True)
class BoolValue:
    flag: bool


@dataclass(frozen=True)
class DateValue:
    moment: date | datetime


@dataclass(frozen=True)
class ListValue:
    items: tuple[FieldValue | None, ...]


FieldValue = Union[TextValue, NumberValue, BoolValue, DateValue, ListValue]


def wrap(raw: Any) -> FieldValue | None:
    """
    Classify a raw Python value into a tagged variant.

    Examples:
        >>> wrap("5")
        TextValue(text='5')
        >>> wrap(5)
        NumberValue(number=5.0)
        >>> wrap(None) is None
        True
    """
    if raw is None:
        return None
    if isinstance(raw, (TextValue, NumberValue, BoolValue, DateValue, ListValue)):
        return raw
    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, (int, float, Decimal)):
        return NumberValue(float(raw))
    if isinstance(raw, str):
        return TextValue(raw)
    if isinstance(raw, (date, datetime)):
        return DateValue(raw)
    if isinstance(raw, (list, tuple, set, frozenset)):
        return ListValue(tuple(wrap(item) for item in raw))
    return TextValue(str(raw))
