'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import datetime
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import isodate

from amsfsurvey import TypeCaster
from amsfsurvey.ModelSurvey import Field, Question, Questionnaire
from amsfsurvey.SurveyErrors import GeneratorError, InvalidAnswerError, UnknownFieldError


class Submission:
    """
    Answers of one reporting entity for one period, against a Questionnaire.

    Answers are keyed by normalizedId and only change through the casting setter, so
    every stored value already has the representation of its field type. Dimensional
    fields hold a mapping of upper case category key (such as a country code) to value.

    .. attribute:: entityId

       Identifier of the reporting entity, written to the instance context.

    .. attribute:: period

       Reporting period end date, a datetime.date or an ISO 8601 date string.
    """
    questionnaire: Questionnaire
    entityId: str
    _answers: dict[str, Any]

    def __init__(self, questionnaire: Questionnaire, entityId: str, period: datetime.date | str) -> None:
        self.questionnaire = questionnaire
        self.entityId = entityId
        self._period = period
        self._answers = {}

    @property
    def period(self) -> datetime.date:
        period = self._period
        if isinstance(period, datetime.datetime):
            return period.date()
        if isinstance(period, datetime.date):
            return period
        if isinstance(period, str):
            try:
                return isodate.parse_date(period.strip())
            except (isodate.ISO8601Error, ValueError) as err:
                raise GeneratorError("Submission period must be an ISO 8601 date, got {0!r}".format(period)) from err
        raise GeneratorError("Submission period must be a date, got {0}".format(type(period).__name__))

    @property
    def industry(self) -> str:
        return self.questionnaire.industry

    @property
    def year(self) -> int:
        return self.questionnaire.year

    def lookupField(self, fieldId: str) -> Field:
        field = self.questionnaire.field(fieldId)
        if field is None:
            raise UnknownFieldError(fieldId)
        return field

    def __getitem__(self, fieldId: str) -> Any:
        return self._answers.get(self.lookupField(fieldId).normalizedId)

    def __setitem__(self, fieldId: str, value: Any) -> None:
        self.setAnswer(fieldId, value)

    def setAnswer(self, fieldId: str, value: Any) -> None:
        field = self.lookupField(fieldId)
        if value is not None:
            if field.isDimensional and not isinstance(value, Mapping):
                raise InvalidAnswerError(field.wireId, "a category breakdown mapping is required, got {0}".format(type(value).__name__))
            if not field.isDimensional and isinstance(value, Mapping):
                raise InvalidAnswerError(field.wireId, "only dimensional fields accept a category breakdown")
            if field.isBoolean and isinstance(value, (bool, str)):
                value = field.booleanLiteral(value) or value
        self._answers[field.normalizedId] = TypeCaster.castValue(value, field.valueType, field.isDimensional)

    def update(self, answers: Mapping[str, Any]) -> None:
        for fieldId, value in answers.items():
            self.setAnswer(fieldId, value)

    @property
    def answers(self) -> Mapping[str, Any]:
        return MappingProxyType(dict(self._answers))

    def isAnswered(self, question: Question) -> bool:
        value = self._answers.get(question.normalizedId)
        if isinstance(value, Mapping):
            return bool(value)
        return value is not None

    def isVisible(self, fieldId: str) -> bool:
        return self.lookupField(fieldId).visible(self._answers)

    def visibleQuestions(self) -> list[Question]:
        return [question for question in self.questionnaire.questions if question.visible(self._answers)]

    def unansweredQuestions(self) -> list[Question]:
        return [question for question in self.visibleQuestions() if not self.isAnswered(question)]

    def isComplete(self) -> bool:
        return not self.unansweredQuestions()

    def completionPercentage(self) -> float:
        visible = self.visibleQuestions()
        if not visible:
            return 100.0
        answered = sum(1 for question in visible if self.isAnswered(question))
        return round(answered * 100.0 / len(visible), 1)
