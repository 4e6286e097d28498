"""
See COPYRIGHT.md for copyright information.

AMSF survey questionnaires: loads a taxonomy directory into a Questionnaire, collects
answers in a Submission and writes them as an XBRL instance document.
"""
from amsfsurvey.Generator import generate
from amsfsurvey.ModelSurvey import Field, Part, Question, Questionnaire, Section, Subsection, ValueType
from amsfsurvey.Registry import (
    QuestionnaireCache,
    isRegistered,
    questionnaire,
    registerIndustry,
    registeredIndustries,
    reset,
    supportedYears,
)
from amsfsurvey.Submission import Submission
from amsfsurvey.SurveyErrors import (
    ConfigurationError,
    DuplicateCategoryKeyError,
    DuplicateFieldError,
    DuplicateIndustryError,
    FieldCountExceeded,
    GeneratorError,
    InvalidAnswerError,
    MalformedArtifact,
    MissingArtifact,
    MissingStructureArtifact,
    RegistryError,
    SurveyError,
    TaxonomyLoadError,
    TaxonomyPathError,
    UnknownFieldError,
    UnknownIndustryError,
    UnsupportedYearError,
)
from amsfsurvey.SurveyOptions import GeneratorOptions, TaxonomyOptions
from amsfsurvey.Validator import ValidationResult, validate
from amsfsurvey.taxonomy.Loader import Loader

__all__ = [
    "ConfigurationError",
    "DuplicateCategoryKeyError",
    "DuplicateFieldError",
    "DuplicateIndustryError",
    "Field",
    "FieldCountExceeded",
    "GeneratorError",
    "GeneratorOptions",
    "InvalidAnswerError",
    "Loader",
    "MalformedArtifact",
    "MissingArtifact",
    "MissingStructureArtifact",
    "Part",
    "Question",
    "Questionnaire",
    "QuestionnaireCache",
    "RegistryError",
    "Section",
    "Submission",
    "Subsection",
    "SurveyError",
    "TaxonomyLoadError",
    "TaxonomyOptions",
    "TaxonomyPathError",
    "UnknownFieldError",
    "UnknownIndustryError",
    "UnsupportedYearError",
    "ValidationResult",
    "ValueType",
    "generate",
    "isRegistered",
    "questionnaire",
    "registerIndustry",
    "registeredIndustries",
    "reset",
    "supportedYears",
    "validate",
]
