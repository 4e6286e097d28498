'''
See COPYRIGHT.md for copyright information.

Reads the definition linkbase (_def.xml) for fields reported per category, such as
per country, instead of as one value.

Fields of a dimensional abstract group (domain-member arcs from a locator matching
dimensionalAbstractPattern, e.g. strix_Abstract_aAC) are dimensional. The hypercube-dimension
arc names the dimension (strix_CountryDimension) and the first member of its domain
gives the member id prefix (strix_sdlFR gives sdl).
'''
from __future__ import annotations

import os
from dataclasses import dataclass, field

from amsfsurvey import SurveyConst, SurveyLog
from amsfsurvey.SurveyOptions import TaxonomyOptions
from amsfsurvey.XmlUtil import parseArtifact


@dataclass(frozen=True)
class DimensionData:
    dimensionalFields: frozenset[str] = field(default_factory=frozenset)
    dimensionName: str | None = None
    memberPrefix: str | None = None


class DimensionParser:
    def __init__(self, defPath: str | None, options: TaxonomyOptions | None = None) -> None:
        self.defPath = defPath
        self.options = options or TaxonomyOptions()

    def parse(self) -> DimensionData:
        if not self.defPath or not os.path.exists(self.defPath):
            return DimensionData()
        root = parseArtifact(self.defPath).getroot()
        arcsByRole: dict[str, list[tuple[str, str]]] = {}
        for arc in root.iter(SurveyConst.qnLinkDefinitionArc):
            fromLabel = arc.get(SurveyConst.xlinkFrom)
            toLabel = arc.get(SurveyConst.xlinkTo)
            if fromLabel and toLabel:
                arcsByRole.setdefault(arc.get(SurveyConst.xlinkArcrole, ""), []).append((fromLabel, toLabel))
        domainMembers = arcsByRole.get(SurveyConst.domainMember, [])
        data = DimensionData(
            dimensionalFields=self.dimensionalFields(domainMembers),
            dimensionName=self.dimensionName(arcsByRole.get(SurveyConst.hypercubeDimension, [])),
            memberPrefix=self.memberPrefix(arcsByRole.get(SurveyConst.dimensionDomain, []), domainMembers))
        SurveyLog.debug("amsfsurvey:dimensionsParsed",
                        "Definition linkbase declares %(count)s dimensional fields",
                        artifact=self.defPath, count=len(data.dimensionalFields))
        return data

    def bareId(self, locatorLabel: str) -> str | None:
        prefix = self.options.locatorPrefix
        if not locatorLabel.startswith(prefix) or len(locatorLabel) == len(prefix):
            return None
        return locatorLabel[len(prefix):]

    def dimensionalFields(self, domainMembers: list[tuple[str, str]]) -> frozenset[str]:
        fields = set()
        for fromLabel, toLabel in domainMembers:
            if not self.options.dimensionalAbstractRegex.search(fromLabel):
                continue
            fieldId = self.bareId(toLabel)
            if fieldId is None:
                SurveyLog.warning("amsfsurvey:dimensionLocatorSkipped",
                                  "Dimensional member locator %(locator)s does not start with %(prefix)s, skipped",
                                  artifact=self.defPath, locator=toLabel, prefix=self.options.locatorPrefix)
                continue
            fields.add(fieldId)
        return frozenset(fields)

    def dimensionName(self, hypercubeDimensions: list[tuple[str, str]]) -> str | None:
        for _hypercube, dimension in hypercubeDimensions:
            name = self.bareId(dimension)
            if name:
                return name
        return None

    def memberPrefix(self, dimensionDomains: list[tuple[str, str]], domainMembers: list[tuple[str, str]]) -> str | None:
        for _dimension, domain in dimensionDomains:
            for fromLabel, toLabel in domainMembers:
                if fromLabel != domain:
                    continue
                member = self.bareId(toLabel)
                if member is None:
                    continue
                prefix = self.options.memberSuffixRegex.sub("", member, count=1)
                if prefix and prefix != member:
                    return prefix
                SurveyLog.warning("amsfsurvey:dimensionMemberSkipped",
                                  "Domain member %(member)s does not end with a category code, skipped",
                                  artifact=self.defPath, member=member)
        return None
