'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

from dataclasses import dataclass

import regex as re
from lxml import etree

from amsfsurvey import SurveyConst, SurveyLog
from amsfsurvey.SurveyOptions import TaxonomyOptions
from amsfsurvey.XmlUtil import htmlText, innerText, parseArtifact

# locator hrefs are like strix_survey_2025.xsd#strix_aC1102, the fragment has a prefix_ before the concept name
hrefPrefixPattern = re.compile(r"^[^_]+_")


@dataclass
class LabelData:
    label: str = ""
    verboseLabel: str | None = None


class LabelParser:
    """
    Reads standard and verbose labels of a label linkbase (_lab.xml).

    Labels reach their concept through two steps: the label resource is the "to" of a
    labelArc whose "from" is a locator pointing at the concept. Label markup is reduced
    to plain text. Labels with other roles are ignored.
    """

    def __init__(self, labPath: str, options: TaxonomyOptions | None = None) -> None:
        self.labPath = labPath
        self.options = options or TaxonomyOptions()

    def parse(self) -> dict[str, LabelData]:
        root = parseArtifact(self.labPath).getroot()
        locators = self.extractLocators(root)
        arcs: dict[str, list[str]] = {}
        for arc in root.iter(SurveyConst.qnLinkLabelArc):
            fromLabel = arc.get(SurveyConst.xlinkFrom)
            toLabel = arc.get(SurveyConst.xlinkTo)
            if fromLabel and toLabel:
                arcs.setdefault(toLabel, []).append(fromLabel)

        labels: dict[str, LabelData] = {}
        for labelElt in root.iter(SurveyConst.qnLinkLabel):
            role = labelElt.get(SurveyConst.xlinkRole, SurveyConst.standardLabel)
            if role not in (SurveyConst.standardLabel, SurveyConst.verboseLabel):
                continue
            text = htmlText(innerText(labelElt))
            for fromLabel in arcs.get(labelElt.get(SurveyConst.xlinkLabel, ""), ()):
                wireId = locators.get(fromLabel)
                if wireId is None:
                    continue
                labelData = labels.setdefault(wireId, LabelData())
                if role == SurveyConst.standardLabel:
                    labelData.label = text
                else:
                    labelData.verboseLabel = text
        SurveyLog.debug("amsfsurvey:labelsParsed",
                        "Label linkbase labels %(count)s fields",
                        artifact=self.labPath, count=len(labels))
        return labels

    def extractLocators(self, root: etree._Element) -> dict[str, str]:
        locators: dict[str, str] = {}
        for loc in root.iter(SurveyConst.qnLinkLoc):
            href = loc.get(SurveyConst.xlinkHref)
            label = loc.get(SurveyConst.xlinkLabel)
            if not href or not label:
                continue
            fragment = href.rpartition("#")[2]
            wireId = hrefPrefixPattern.sub("", fragment, count=1)
            if wireId:
                locators[label] = wireId
        return locators
