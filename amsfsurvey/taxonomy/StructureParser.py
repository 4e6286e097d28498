'''
See COPYRIGHT.md for copyright information.

Reads the human authored questionnaire structure (questionnaire_structure.yml):

    parts:
      - name: Inherent Risk
        sections:
          - title: General
            subsections:
              - title: Activity Status
                questions:
                  - field_id: tGATE
                    instructions: Answer Oui if ...

A top level "sections" list without parts is read as one unnamed part. Sections and
subsections are numbered by position. Question numbers restart at 1 in each section and
continue across its subsections. Titles, names and instructions may be plain strings or
mappings of locale to text.
'''
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from amsfsurvey.ModelSurvey import LocaleTexts, localeTexts
from amsfsurvey.PythonUtil import FrozenDict
from amsfsurvey.SurveyErrors import MalformedArtifact, MissingStructureArtifact
from amsfsurvey.SurveyOptions import TaxonomyOptions


@dataclass(frozen=True)
class QuestionData:
    number: int
    fieldId: str
    instructions: LocaleTexts


@dataclass(frozen=True)
class SubsectionData:
    number: int
    title: LocaleTexts
    instructions: LocaleTexts
    questions: tuple[QuestionData, ...]


@dataclass(frozen=True)
class SectionData:
    number: int
    title: LocaleTexts
    subsections: tuple[SubsectionData, ...]


@dataclass(frozen=True)
class PartData:
    name: LocaleTexts
    sections: tuple[SectionData, ...]


@dataclass(frozen=True)
class StructureData:
    parts: tuple[PartData, ...]

    @property
    def sections(self) -> tuple[SectionData, ...]:
        return tuple(section for part in self.parts for section in part.sections)


class StructureParser:
    def __init__(self, structurePath: str, options: TaxonomyOptions | None = None) -> None:
        self.structurePath = structurePath
        self.options = options or TaxonomyOptions()
        self.sectionCounter = 0

    def parse(self) -> StructureData:
        document = self.loadYaml()
        self.sectionCounter = 0
        if "parts" in document:
            parts = tuple(self.parsePart(partData, "parts[{0}]".format(i))
                          for i, partData in enumerate(self.listOf(document, "parts", "document")))
        else:
            parts = (PartData(FrozenDict(), self.parseSections(document, "document")),)
        return StructureData(parts=parts)

    def loadYaml(self) -> dict[str, Any]:
        if not os.path.isfile(self.structurePath):
            raise MissingStructureArtifact(self.structurePath)
        try:
            with open(self.structurePath, encoding="utf-8") as fh:
                document = yaml.safe_load(fh)
        except yaml.YAMLError as err:
            raise MalformedArtifact(self.structurePath, err) from err
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise MalformedArtifact(self.structurePath, "expected a mapping at the document root")
        return document

    def listOf(self, data: Any, key: str, location: str) -> list[Any]:
        if not isinstance(data, Mapping):
            raise MalformedArtifact(self.structurePath, "{0} must be a mapping".format(location))
        items = data.get(key)
        if items is None:
            return []
        if not isinstance(items, list):
            raise MalformedArtifact(self.structurePath, "{0}.{1} must be a list".format(location, key))
        return items

    def texts(self, value: Any) -> LocaleTexts:
        texts = localeTexts(value, self.options.defaultLocale)
        return FrozenDict({locale: text.strip() for locale, text in texts.items() if text.strip()})

    def parsePart(self, partData: Any, location: str) -> PartData:
        sections = self.parseSections(partData, location)
        return PartData(self.texts(partData.get("name")), sections)

    def parseSections(self, data: Any, location: str) -> tuple[SectionData, ...]:
        return tuple(self.parseSection(sectionData, "{0}.sections[{1}]".format(location, i))
                     for i, sectionData in enumerate(self.listOf(data, "sections", location)))

    def parseSection(self, sectionData: Any, location: str) -> SectionData:
        self.sectionCounter += 1
        questionCounter = 0
        subsections = []
        for i, subData in enumerate(self.listOf(sectionData, "subsections", location)):
            subLocation = "{0}.subsections[{1}]".format(location, i)
            questions = []
            for j, qData in enumerate(self.listOf(subData, "questions", subLocation)):
                questionCounter += 1
                questions.append(self.parseQuestion(qData, questionCounter, "{0}.questions[{1}]".format(subLocation, j)))
            subsections.append(SubsectionData(
                number=i + 1,
                title=self.texts(subData.get("title")),
                instructions=self.texts(subData.get("instructions")),
                questions=tuple(questions)))
        return SectionData(
            number=self.sectionCounter,
            title=self.texts(sectionData.get("title")),
            subsections=tuple(subsections))

    def parseQuestion(self, qData: Any, number: int, location: str) -> QuestionData:
        if not isinstance(qData, Mapping) or not qData.get("field_id"):
            raise MalformedArtifact(self.structurePath, "{0} has no field_id".format(location))
        return QuestionData(
            number=number,
            fieldId=str(qData["field_id"]).strip().lower(),
            instructions=self.texts(qData.get("instructions")))
