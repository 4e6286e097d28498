'''
See COPYRIGHT.md for copyright information.

Immutable questionnaire model built by the taxonomy Loader.

A Field is one taxonomy concept. Questions wrap fields with their position in the
human authored structure (parts, sections, subsections). Fields are looked up by
normalizedId, the lower case form of the concept name, while instance documents use
wireId, the concept name exactly as the schema declares it.
'''
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from amsfsurvey import SurveyConst
from amsfsurvey.PythonUtil import FrozenDict
from amsfsurvey.SurveyErrors import DuplicateFieldError

DEFAULT_LOCALE = "fr"

LocaleTexts = FrozenDict[str, str]


class ValueType(Enum):
    INTEGER = "integer"
    MONETARY = "monetary"
    DECIMAL = "decimal"
    PERCENTAGE = "percentage"
    DATE = "date"
    BOOLEAN = "boolean"
    ENUM = "enum"
    STRING = "string"

    @property
    def isNumeric(self) -> bool:
        return self in NUMERIC_TYPES

    @property
    def isDecimal(self) -> bool:
        return self in DECIMAL_TYPES


DECIMAL_TYPES = frozenset((ValueType.MONETARY, ValueType.DECIMAL, ValueType.PERCENTAGE))
NUMERIC_TYPES = DECIMAL_TYPES | {ValueType.INTEGER}


def localeTexts(value: Union[str, Mapping[Any, Any], None], defaultLocale: str = DEFAULT_LOCALE) -> LocaleTexts:
    """Locale keyed texts from a plain string (stored under the default locale), a mapping, or None."""
    if value is None:
        return FrozenDict()
    if isinstance(value, Mapping):
        return FrozenDict({str(locale): str(text) for locale, text in value.items() if text is not None})
    return FrozenDict({defaultLocale: str(value)})


def resolveLocale(texts: Mapping[str, str], locale: str | None = None) -> str | None:
    # requested locale, then default locale, then first available
    if not texts:
        return None
    if locale is not None and locale in texts:
        return texts[locale]
    if DEFAULT_LOCALE in texts:
        return texts[DEFAULT_LOCALE]
    return next(iter(texts.values()))


@dataclass(frozen=True)
class Field:
    normalizedId: str
    wireId: str
    valueType: ValueType
    xbrlType: str
    label: str
    verboseLabel: str | None = None
    enumerationValues: tuple[str, ...] | None = None
    wireEnumerationValues: tuple[str, ...] | None = None
    isGate: bool = False
    isDimensional: bool = False
    visibilityRule: FrozenDict[str, str] = field(default_factory=FrozenDict)

    def __post_init__(self) -> None:
        if self.normalizedId != self.wireId.lower():
            raise ValueError("normalizedId {0} is not the lower case form of {1}".format(self.normalizedId, self.wireId))
        if self.normalizedId in self.visibilityRule:
            raise ValueError("Field {0} cannot control its own visibility".format(self.wireId))
        if not isinstance(self.visibilityRule, FrozenDict):
            object.__setattr__(self, "visibilityRule", FrozenDict(self.visibilityRule))

    @property
    def isNumeric(self) -> bool:
        return self.valueType.isNumeric

    @property
    def isDecimal(self) -> bool:
        return self.valueType.isDecimal

    @property
    def isBoolean(self) -> bool:
        return self.valueType is ValueType.BOOLEAN

    @property
    def isEnum(self) -> bool:
        return self.valueType is ValueType.ENUM

    def visible(self, answers: Mapping[str, Any]) -> bool:
        """True if every controlling answer (keyed by normalizedId) equals the literal this field requires."""
        return all(answers.get(controllingId) == requiredValue
                   for controllingId, requiredValue in self.visibilityRule.items())

    def booleanLiteral(self, value: Any) -> str | None:
        """The enumeration literal (such as "Oui") expressing value, or None if value expresses neither."""
        if not self.enumerationValues or value is None:
            return None
        if isinstance(value, str):
            token = value.strip().lower()
            for literal in self.enumerationValues:
                if literal.lower() == token:
                    return literal
            if token in SurveyConst.affirmativeTokens or token == "true":
                value = True
            elif token in SurveyConst.negativeTokens or token == "false":
                value = False
            else:
                return None
        if not isinstance(value, bool):
            return None
        tokens = SurveyConst.affirmativeTokens if value else SurveyConst.negativeTokens
        for literal in self.enumerationValues:
            if literal.lower() in tokens:
                return literal
        return None

    def wireLiteral(self, value: Any) -> Any:
        """The enumeration literal exactly as the schema declares it, for a decoded enumeration value."""
        if self.enumerationValues and self.wireEnumerationValues:
            for decoded, raw in zip(self.enumerationValues, self.wireEnumerationValues):
                if decoded == value:
                    return raw
        return value


@dataclass(frozen=True)
class Question:
    number: int
    field: Field
    instructionTexts: LocaleTexts = field(default_factory=FrozenDict)

    @property
    def normalizedId(self) -> str:
        return self.field.normalizedId

    @property
    def wireId(self) -> str:
        return self.field.wireId

    @property
    def label(self) -> str:
        return self.field.label

    @property
    def valueType(self) -> ValueType:
        return self.field.valueType

    @property
    def isGate(self) -> bool:
        return self.field.isGate

    @property
    def isDimensional(self) -> bool:
        return self.field.isDimensional

    @property
    def instructions(self) -> str | None:
        return resolveLocale(self.instructionTexts)

    def localizedInstructions(self, locale: str | None = None) -> str | None:
        return resolveLocale(self.instructionTexts, locale)

    def visible(self, answers: Mapping[str, Any]) -> bool:
        return self.field.visible(answers)


@dataclass(frozen=True)
class Subsection:
    number: int
    titles: LocaleTexts
    questions: tuple[Question, ...]
    instructionTexts: LocaleTexts = field(default_factory=FrozenDict)

    @property
    def title(self) -> str | None:
        return resolveLocale(self.titles)

    def localizedTitle(self, locale: str | None = None) -> str | None:
        return resolveLocale(self.titles, locale)

    @property
    def instructions(self) -> str | None:
        return resolveLocale(self.instructionTexts)

    @property
    def questionCount(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class Section:
    number: int
    titles: LocaleTexts
    subsections: tuple[Subsection, ...]

    @property
    def title(self) -> str | None:
        return resolveLocale(self.titles)

    def localizedTitle(self, locale: str | None = None) -> str | None:
        return resolveLocale(self.titles, locale)

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(question
                     for subsection in self.subsections
                     for question in subsection.questions)

    @property
    def questionCount(self) -> int:
        return sum(subsection.questionCount for subsection in self.subsections)


@dataclass(frozen=True)
class Part:
    names: LocaleTexts
    sections: tuple[Section, ...]

    @property
    def name(self) -> str | None:
        return resolveLocale(self.names)

    def localizedName(self, locale: str | None = None) -> str | None:
        return resolveLocale(self.names, locale)

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(question
                     for section in self.sections
                     for question in section.questions)


@dataclass(frozen=True)
class Questionnaire:
    """
    Survey structure of one industry and taxonomy year.

    Built once by the Loader and shared read-only by any number of Submissions.
    fieldIndex has exactly one entry per normalizedId in the structure.
    """
    industry: str
    year: int
    parts: tuple[Part, ...]
    wireNamespace: str | None
    schemaUrl: str | None = None
    wirePrefix: str = "strix"
    entityScheme: str = "https://amlcft.amsf.mc"
    dimensionName: str | None = None
    memberPrefix: str | None = None
    questionIndex: FrozenDict[str, Question] = field(init=False, repr=False, compare=False)
    fieldIndex: FrozenDict[str, Field] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        questionIndex: dict[str, Question] = {}
        for section in self.sections:
            for subsection in section.subsections:
                for question in subsection.questions:
                    if question.normalizedId in questionIndex:
                        raise DuplicateFieldError(question.normalizedId,
                                                  "{0}, {1}".format(section.title, subsection.title))
                    questionIndex[question.normalizedId] = question
        object.__setattr__(self, "questionIndex", FrozenDict(questionIndex))
        object.__setattr__(self, "fieldIndex", FrozenDict({normalizedId: question.field
                                                           for normalizedId, question in questionIndex.items()}))

    @property
    def sections(self) -> tuple[Section, ...]:
        return tuple(section for part in self.parts for section in part.sections)

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(self.questionIndex.values())

    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(self.fieldIndex.values())

    def question(self, fieldId: str) -> Question | None:
        return self.questionIndex.get(str(fieldId).lower())

    def field(self, fieldId: str) -> Field | None:
        return self.fieldIndex.get(str(fieldId).lower())

    @property
    def questionCount(self) -> int:
        return len(self.questionIndex)

    @property
    def sectionCount(self) -> int:
        return len(self.sections)

    @property
    def partCount(self) -> int:
        return len(self.parts)

    @property
    def gateQuestions(self) -> tuple[Question, ...]:
        return tuple(question for question in self.questions if question.isGate)

    @property
    def dimensionalFields(self) -> tuple[Field, ...]:
        return tuple(f for f in self.fields if f.isDimensional)
