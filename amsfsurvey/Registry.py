'''
See COPYRIGHT.md for copyright information.

Industries and their taxonomy directories, and the cache of loaded questionnaires.

An industry directory holds one subdirectory per taxonomy year:

    taxonomies/aml/2024/...
    taxonomies/aml/2025/...

A questionnaire is loaded once per (industry, year) and shared by every caller.
'''
from __future__ import annotations

import os
from collections.abc import Callable, Hashable
from typing import Any

import regex as re

from amsfsurvey import SurveyLog
from amsfsurvey.ModelSurvey import Questionnaire
from amsfsurvey.SurveyErrors import (
    DuplicateIndustryError,
    TaxonomyPathError,
    UnknownIndustryError,
    UnsupportedYearError,
)
from amsfsurvey.taxonomy.Loader import Loader

yearDirectoryPattern = re.compile(r"^[0-9]{4}$")


class QuestionnaireCache:
    """Populate once cache, an entry once stored is never replaced. Not safe for concurrent first access."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}

    def get(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        if key not in self._entries:
            self._entries[key] = factory()
        return self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class Registry:
    def __init__(self) -> None:
        self.taxonomyPaths: dict[str, str] = {}
        self.cache = QuestionnaireCache()

    def registerIndustry(self, industry: str, taxonomyPath: str) -> None:
        if not os.path.isdir(taxonomyPath):
            raise TaxonomyPathError(industry, taxonomyPath)
        if industry in self.taxonomyPaths:
            raise DuplicateIndustryError(industry)
        self.taxonomyPaths[industry] = taxonomyPath
        SurveyLog.debug("amsfsurvey:industryRegistered",
                        "Registered industry %(industry)s",
                        artifact=taxonomyPath, industry=industry)

    def registeredIndustries(self) -> list[str]:
        return sorted(self.taxonomyPaths)

    def isRegistered(self, industry: str) -> bool:
        return industry in self.taxonomyPaths

    def taxonomyPath(self, industry: str) -> str:
        try:
            return self.taxonomyPaths[industry]
        except KeyError:
            raise UnknownIndustryError(industry) from None

    def supportedYears(self, industry: str) -> list[int]:
        taxonomyPath = self.taxonomyPath(industry)
        return sorted(int(name) for name in os.listdir(taxonomyPath)
                      if yearDirectoryPattern.match(name) and os.path.isdir(os.path.join(taxonomyPath, name)))

    def questionnaire(self, industry: str, year: int) -> Questionnaire:
        taxonomyPath = self.taxonomyPath(industry)
        year = int(year)
        if year not in self.supportedYears(industry):
            raise UnsupportedYearError(industry, year)
        yearPath = os.path.join(taxonomyPath, str(year))
        return self.cache.get((industry, year), lambda: Loader(yearPath).load(industry, year))

    def reset(self) -> None:
        self.taxonomyPaths.clear()
        self.cache.clear()


defaultRegistry = Registry()


def registerIndustry(industry: str, taxonomyPath: str) -> None:
    defaultRegistry.registerIndustry(industry, taxonomyPath)


def registeredIndustries() -> list[str]:
    return defaultRegistry.registeredIndustries()


def isRegistered(industry: str) -> bool:
    return defaultRegistry.isRegistered(industry)


def supportedYears(industry: str) -> list[int]:
    return defaultRegistry.supportedYears(industry)


def questionnaire(industry: str, year: int) -> Questionnaire:
    return defaultRegistry.questionnaire(industry, year)


def reset() -> None:
    defaultRegistry.reset()
