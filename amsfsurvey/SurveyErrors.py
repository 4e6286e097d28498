'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

from typing import Any


class SurveyError(Exception):
    pass


class TaxonomyLoadError(SurveyError):
    pass


class MissingArtifact(TaxonomyLoadError):
    messageText = "Taxonomy file not found"

    def __init__(self, filePath: str) -> None:
        self.filePath = filePath
        super(MissingArtifact, self).__init__("{0}: {1}".format(self.messageText, filePath))


class MissingStructureArtifact(MissingArtifact):
    messageText = "Structure file not found"


class MalformedArtifact(TaxonomyLoadError):
    def __init__(self, filePath: str, parseError: Any = None) -> None:
        self.filePath = filePath
        self.parseError = parseError
        message = "Malformed taxonomy file: {0}".format(filePath)
        if parseError:
            message += " ({0})".format(parseError)
        super(MalformedArtifact, self).__init__(message)


class FieldCountExceeded(TaxonomyLoadError):
    def __init__(self, count: int, maximum: int) -> None:
        self.count = count
        self.maximum = maximum
        super(FieldCountExceeded, self).__init__(
            "Taxonomy exceeds maximum field count ({0} > {1})".format(count, maximum))


class UnknownFieldError(TaxonomyLoadError):
    """
    Raised when the structure references a field the schema does not declare,
    and when a submission is asked for a field its questionnaire lacks.
    """
    def __init__(self, fieldId: Any) -> None:
        self.fieldId = fieldId
        super(UnknownFieldError, self).__init__("Unknown field: {0}".format(fieldId))


class DuplicateFieldError(TaxonomyLoadError):
    def __init__(self, fieldId: str, location: str) -> None:
        self.fieldId = fieldId
        self.location = location
        super(DuplicateFieldError, self).__init__("Duplicate field '{0}' in {1}".format(fieldId, location))


class DuplicateCategoryKeyError(SurveyError):
    def __init__(self, key: str) -> None:
        self.key = key
        super(DuplicateCategoryKeyError, self).__init__(
            "Duplicate category key after normalization: {0}".format(key))


class InvalidAnswerError(SurveyError):
    def __init__(self, fieldId: str, reason: str) -> None:
        self.fieldId = fieldId
        self.reason = reason
        super(InvalidAnswerError, self).__init__("Invalid answer for {0}: {1}".format(fieldId, reason))


class GeneratorError(SurveyError):
    pass


class ConfigurationError(SurveyError):
    pass


class RegistryError(SurveyError):
    pass


class TaxonomyPathError(RegistryError):
    def __init__(self, industry: str, taxonomyPath: str) -> None:
        self.industry = industry
        self.taxonomyPath = taxonomyPath
        super(TaxonomyPathError, self).__init__(
            "Taxonomy path of {0} is not a directory: {1}".format(industry, taxonomyPath))


class DuplicateIndustryError(RegistryError):
    def __init__(self, industry: str) -> None:
        self.industry = industry
        super(DuplicateIndustryError, self).__init__("Industry already registered: {0}".format(industry))


class UnknownIndustryError(RegistryError):
    def __init__(self, industry: str) -> None:
        self.industry = industry
        super(UnknownIndustryError, self).__init__("Industry not registered: {0}".format(industry))


class UnsupportedYearError(RegistryError):
    def __init__(self, industry: str, year: int) -> None:
        self.industry = industry
        self.year = year
        super(UnsupportedYearError, self).__init__(
            "No {0} taxonomy for year {1}".format(industry, year))
