'''
See COPYRIGHT.md for copyright information.

Checks a submission before it is generated: presence of visible answers, enumeration
membership, percentage range and category key shape. Each visible field is visited once.
'''
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

import regex as re

from amsfsurvey.ModelSurvey import Field, ValueType
from amsfsurvey.Submission import Submission

PERCENTAGE_RANGE = (Decimal(0), Decimal(100))

categoryKeyPattern = re.compile(r"^[A-Z]{2}$")


class Level(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True)
class Validation:
    level: Level
    code: str
    fieldId: str
    msg: str
    args: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def error(code: str, fieldId: str, msg: str, **kwargs: Any) -> Validation:
        return Validation(level=Level.ERROR, code=code, fieldId=fieldId, msg=msg, args=kwargs)

    @staticmethod
    def warning(code: str, fieldId: str, msg: str, **kwargs: Any) -> Validation:
        return Validation(level=Level.WARNING, code=code, fieldId=fieldId, msg=msg, args=kwargs)

    @property
    def message(self) -> str:
        return self.msg % self.args if self.args else self.msg

    def __str__(self) -> str:
        return "[{0}] {1}: {2}".format(self.level.value.lower(), self.fieldId, self.message)


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[Validation, ...] = ()
    warnings: tuple[Validation, ...] = ()

    @property
    def isValid(self) -> bool:
        return not self.errors

    @property
    def isComplete(self) -> bool:
        return not any(e.code == "presence" for e in self.errors)

    @property
    def errorCount(self) -> int:
        return len(self.errors)

    @property
    def warningCount(self) -> int:
        return len(self.warnings)

    def errorsFor(self, fieldId: str) -> tuple[Validation, ...]:
        normalizedId = str(fieldId).lower()
        return tuple(e for e in self.errors if e.fieldId == normalizedId)


def validate(submission: Submission) -> ValidationResult:
    answers = submission.answers
    results: list[Validation] = []
    for field_ in submission.questionnaire.fields:
        if not field_.visible(answers):
            continue
        value = answers.get(field_.normalizedId)
        results.extend(validatePresence(field_, value))
        if value is None:
            continue
        values = value.values() if isinstance(value, Mapping) else (value,)
        for v in values:
            if v is not None:
                results.extend(validateEnumeration(field_, v))
                results.extend(validateRange(field_, v))
        if isinstance(value, Mapping):
            results.extend(validateCategoryKeys(field_, value))
    return ValidationResult(
        errors=tuple(r for r in results if r.level is Level.ERROR),
        warnings=tuple(r for r in results if r.level is Level.WARNING))


def validatePresence(field_: Field, value: Any) -> list[Validation]:
    if value is None or (isinstance(value, Mapping) and not value):
        return [Validation.error("presence", field_.normalizedId,
                                 "%(label)s is required", label=field_.label)]
    return []


def validateEnumeration(field_: Field, value: Any) -> list[Validation]:
    if not field_.enumerationValues:
        return []
    if field_.isBoolean and field_.booleanLiteral(value) is not None:
        return []
    if value in field_.enumerationValues:
        return []
    return [Validation.error("enum", field_.normalizedId,
                             "%(label)s must be one of %(validValues)s, got %(value)s",
                             label=field_.label, validValues=", ".join(field_.enumerationValues), value=value)]


def validateRange(field_: Field, value: Any) -> list[Validation]:
    if field_.valueType is not ValueType.PERCENTAGE or not isinstance(value, Decimal):
        return []
    minimum, maximum = PERCENTAGE_RANGE
    if value < minimum:
        return [Validation.error("range", field_.normalizedId,
                                 "%(label)s must be at least %(min)s", label=field_.label, min=minimum)]
    if value > maximum:
        return [Validation.error("range", field_.normalizedId,
                                 "%(label)s must be at most %(max)s", label=field_.label, max=maximum)]
    return []


def validateCategoryKeys(field_: Field, value: Mapping[str, Any]) -> list[Validation]:
    return [Validation.warning("dimensionalKey", field_.normalizedId,
                               "%(label)s category %(key)s is not a two letter code", label=field_.label, key=key)
            for key in value
            if not categoryKeyPattern.match(key)]
