'''
See COPYRIGHT.md for copyright information.

Writes a Submission as an XBRL instance document.

Facts are named by the wireId of their field, in the order of the questionnaire, and
only for visible fields. Dimensional fields emit one fact per category key, each in its
own context with an explicit member of the category dimension.
'''
from __future__ import annotations

import dataclasses
import datetime
import posixpath
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any
from urllib.parse import urlparse

from lxml import etree

from amsfsurvey import SurveyConst, SurveyLog
from amsfsurvey.ModelSurvey import Field, ValueType
from amsfsurvey.Submission import Submission
from amsfsurvey.SurveyErrors import GeneratorError
from amsfsurvey.SurveyOptions import GeneratorOptions

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
TWO_PLACES = Decimal("0.01")


def qname(namespace: str, localName: str) -> str:
    return "{{{0}}}{1}".format(namespace, localName)


def schemaHref(schemaUrl: str | None, wireNamespace: str) -> str:
    if schemaUrl:
        return schemaUrl
    basename = posixpath.basename(urlparse(wireNamespace).path.rstrip("/"))
    return basename + ".xsd" if basename else "taxonomy.xsd"


def formatValue(field: Field, value: Any) -> str:
    valueType = field.valueType
    if valueType is ValueType.INTEGER:
        return str(int(value))
    if valueType.isDecimal:
        try:
            number = Decimal(value)
            with localcontext() as ctx:
                # room for every integer digit plus two places
                ctx.prec = max(ctx.prec, number.adjusted() + 3)
                return "{0:f}".format(number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
        except (InvalidOperation, TypeError, ValueError) as err:
            raise GeneratorError("Field {0} holds a non-numeric value {1!r}".format(field.wireId, value)) from err
    if valueType is ValueType.DATE and isinstance(value, datetime.date):
        return value.isoformat()
    if valueType is ValueType.BOOLEAN:
        return field.booleanLiteral(value) or str(value)
    if valueType is ValueType.ENUM:
        return str(field.wireLiteral(value))
    return str(value)


class Generator:
    def __init__(self, submission: Submission, options: GeneratorOptions | None = None) -> None:
        self.submission = submission
        self.options = options or GeneratorOptions()
        questionnaire = submission.questionnaire
        if questionnaire is None:
            raise GeneratorError("Submission has no questionnaire")
        if not questionnaire.wireNamespace:
            raise GeneratorError("Questionnaire {0} {1} has no target namespace".format(
                questionnaire.industry, questionnaire.year))
        self.questionnaire = questionnaire
        self.wirePrefix = questionnaire.wirePrefix
        self.wireNamespace = questionnaire.wireNamespace
        self.dimensionName = questionnaire.dimensionName or SurveyConst.defaultDimensionName
        self.memberPrefix = questionnaire.memberPrefix or SurveyConst.defaultMemberPrefix
        self.monetaryUnitId = self.options.monetaryUnit

    def generate(self) -> str:
        period = self.submission.period
        nsmap = dict(SurveyConst.instanceNsmap)
        nsmap[self.wirePrefix] = self.wireNamespace
        self.root = etree.Element(qname(SurveyConst.xbrli, "xbrl"), nsmap=nsmap)
        etree.SubElement(self.root, qname(SurveyConst.link, "schemaRef"), {
            SurveyConst.xlinkType: "simple",
            SurveyConst.xlinkHref: schemaHref(self.questionnaire.schemaUrl, self.wireNamespace)})
        self.baseContextId = "ctx_{0}_{1}".format(self.submission.entityId, period.strftime("%Y%m%d"))
        self.lastContext = self.addContext(self.baseContextId)
        self.dimensionalContexts: dict[str, str] = {}
        self.addUnit(SurveyConst.pureUnitId, "xbrli:" + SurveyConst.pureUnitId)
        self.addUnit(self.monetaryUnitId, "iso4217:" + self.monetaryUnitId)

        answers = self.submission.answers
        factCount = 0
        for field in self.questionnaire.fields:
            if not field.visible(answers):
                continue
            factCount += self.addFacts(field, answers.get(field.normalizedId))
        SurveyLog.debug("amsfsurvey:instanceGenerated",
                        "Generated %(count)s facts for %(entity)s at %(period)s",
                        count=factCount, entity=self.submission.entityId, period=period.isoformat())
        return XML_DECLARATION + etree.tostring(self.root, encoding="unicode", pretty_print=self.options.pretty)

    def addContext(self, contextId: str, categoryKey: str | None = None) -> etree._Element:
        context = etree.Element(qname(SurveyConst.xbrli, "context"), id=contextId)
        entity = etree.SubElement(context, qname(SurveyConst.xbrli, "entity"))
        identifier = etree.SubElement(entity, qname(SurveyConst.xbrli, "identifier"),
                                      scheme=self.questionnaire.entityScheme)
        identifier.text = str(self.submission.entityId)
        if categoryKey is not None:
            segment = etree.SubElement(entity, qname(SurveyConst.xbrli, "segment"))
            member = etree.SubElement(segment, qname(SurveyConst.xbrldi, "explicitMember"),
                                      dimension="{0}:{1}".format(self.wirePrefix, self.dimensionName))
            member.text = "{0}:{1}{2}".format(self.wirePrefix, self.memberPrefix, categoryKey)
        periodElt = etree.SubElement(context, qname(SurveyConst.xbrli, "period"))
        etree.SubElement(periodElt, qname(SurveyConst.xbrli, "instant")).text = self.submission.period.isoformat()
        if categoryKey is None:
            self.root.append(context)
        else:
            # dimensional contexts follow the base context in order of first use
            self.lastContext.addnext(context)
        return context

    def contextFor(self, categoryKey: str) -> str:
        contextId = self.dimensionalContexts.get(categoryKey)
        if contextId is None:
            contextId = "{0}_{1}".format(self.baseContextId, categoryKey)
            self.lastContext = self.addContext(contextId, categoryKey)
            self.dimensionalContexts[categoryKey] = contextId
        return contextId

    def addUnit(self, unitId: str, measure: str) -> None:
        unit = etree.SubElement(self.root, qname(SurveyConst.xbrli, "unit"), id=unitId)
        etree.SubElement(unit, qname(SurveyConst.xbrli, "measure")).text = measure

    def addFacts(self, field: Field, value: Any) -> int:
        if field.isDimensional and isinstance(value, Mapping) and value:
            count = 0
            for categoryKey, categoryValue in value.items():
                if categoryValue is None and not self.options.includeEmpty:
                    continue
                self.addFact(field, categoryValue, self.contextFor(categoryKey))
                count += 1
            return count
        if field.isDimensional:
            # a dimensional concept is only reported in a member context
            return 0
        if value is None or isinstance(value, Mapping):
            if not self.options.includeEmpty:
                return 0
            value = None
        self.addFact(field, value, self.baseContextId)
        return 1

    def addFact(self, field: Field, value: Any, contextRef: str) -> None:
        fact = etree.SubElement(self.root, qname(self.wireNamespace, field.wireId), contextRef=contextRef)
        if field.isNumeric:
            # nil numeric facts keep their unitRef
            fact.set("unitRef", self.monetaryUnitId if field.valueType is ValueType.MONETARY else SurveyConst.pureUnitId)
        if value is None:
            fact.set(SurveyConst.xsiNil, "true")
            return
        if field.isNumeric:
            fact.set("decimals", "2" if field.isDecimal else "0")
        fact.text = formatValue(field, value)


def generate(submission: Submission, options: GeneratorOptions | None = None, **kwargs: Any) -> str:
    """
    Instance document of submission, as a string starting with the XML declaration.

    Keyword arguments override fields of options, for example generate(submission, pretty=True).
    """
    unknown = set(kwargs) - GeneratorOptions.names()
    if unknown:
        raise GeneratorError("Unknown generator options: {0}".format(", ".join(sorted(unknown))))
    options = dataclasses.replace(options or GeneratorOptions(), **kwargs)
    return Generator(submission, options).generate()
