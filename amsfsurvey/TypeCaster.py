'''
See COPYRIGHT.md for copyright information.

Coercion of entered answers to the value representation of each field type.

Malformed scalar input never raises, it casts to None (absent). Decimal types use
decimal.Decimal so monetary amounts keep their exact entered value.
'''
from __future__ import annotations

import datetime
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

import isodate
import regex as re

from amsfsurvey.ModelSurvey import ValueType
from amsfsurvey.SurveyErrors import DuplicateCategoryKeyError

MAX_INPUT_LENGTH = 100

integerPattern = re.compile(r"^[+-]?[0-9]+$")


def _scalarText(value: str) -> str | None:
    if len(value) > MAX_INPUT_LENGTH:
        return None
    text = value.strip()
    return text or None


def castInteger(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() and value == value.to_integral_value() else None
    if not isinstance(value, str):
        return None
    text = _scalarText(value)
    if text is None or not integerPattern.match(text):
        return None
    return int(text)


def castDecimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = _scalarText(value)
        if text is None:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    return result if result.is_finite() else None


def castDate(value: Any) -> datetime.date | None:
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        return None
    text = _scalarText(value)
    if text is None:
        return None
    try:
        return isodate.parse_date(text)
    except (isodate.ISO8601Error, ValueError):
        return None


def castText(value: Any) -> str | None:
    # boolean and enum values are checked against their enumeration by the Validator, not here
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    if not text.strip():
        return None
    return text


CASTERS = {
    ValueType.INTEGER: castInteger,
    ValueType.MONETARY: castDecimal,
    ValueType.DECIMAL: castDecimal,
    ValueType.PERCENTAGE: castDecimal,
    ValueType.DATE: castDate,
    ValueType.BOOLEAN: castText,
    ValueType.ENUM: castText,
    ValueType.STRING: castText,
}


def castScalar(value: Any, valueType: ValueType) -> Any:
    return CASTERS[valueType](value)


def castDimensional(values: Mapping[Any, Any], valueType: ValueType) -> dict[str, Any]:
    """Casts a category breakdown such as {"fr": "5"} to {"FR": 5}.

    Raises DuplicateCategoryKeyError if two keys differ only by case, such as "fr" and "FR".
    """
    result: dict[str, Any] = {}
    originalKeys: dict[str, Any] = {}
    for key, value in values.items():
        normalizedKey = str(key).strip().upper()
        if normalizedKey in originalKeys:
            raise DuplicateCategoryKeyError(normalizedKey)
        originalKeys[normalizedKey] = key
        result[normalizedKey] = castScalar(value, valueType)
    return result


def castValue(value: Any, valueType: ValueType, dimensional: bool = False) -> Any:
    if dimensional and isinstance(value, Mapping):
        return castDimensional(value, valueType)
    return castScalar(value, valueType)
