'''
See COPYRIGHT.md for copyright information.

Reads concept declarations of a taxonomy schema (.xsd): value types, enumerations and
the target namespace used for facts of the instance document.

Two valued enumerations are boolean only when they are a recognized Yes/No pair
(Oui/Non, Yes/No in any case). Other two valued enumerations, such as Vrai/Faux or 1/0,
remain enumerations and never take part in gate translation.
'''
from __future__ import annotations

import html
from dataclasses import dataclass

from lxml import etree

from amsfsurvey import SurveyConst, SurveyLog
from amsfsurvey.ModelSurvey import ValueType
from amsfsurvey.SurveyErrors import FieldCountExceeded
from amsfsurvey.SurveyOptions import TaxonomyOptions
from amsfsurvey.XmlUtil import parseArtifact


@dataclass(frozen=True)
class SchemaField:
    wireId: str
    valueType: ValueType
    xbrlType: str
    enumerationValues: tuple[str, ...] | None = None
    wireEnumerationValues: tuple[str, ...] | None = None


@dataclass(frozen=True)
class SchemaData:
    targetNamespace: str | None
    fields: dict[str, SchemaField]


def valueTypeOf(xbrlType: str | None) -> ValueType:
    if xbrlType in SurveyConst.integerItemTypes:
        return ValueType.INTEGER
    if xbrlType in SurveyConst.monetaryItemTypes:
        return ValueType.MONETARY
    if xbrlType in SurveyConst.decimalItemTypes:
        return ValueType.DECIMAL
    if xbrlType in SurveyConst.percentageItemTypes:
        return ValueType.PERCENTAGE
    if xbrlType in SurveyConst.dateItemTypes:
        return ValueType.DATE
    if xbrlType in SurveyConst.booleanItemTypes:
        return ValueType.BOOLEAN
    return ValueType.STRING


def isBooleanEnumeration(values: tuple[str, ...]) -> bool:
    if len(values) != 2:
        return False
    return tuple(sorted(v.lower() for v in values)) in SurveyConst.booleanEnumerations


class SchemaParser:
    def __init__(self, xsdPath: str, options: TaxonomyOptions | None = None) -> None:
        self.xsdPath = xsdPath
        self.options = options or TaxonomyOptions()

    def parse(self) -> SchemaData:
        root = parseArtifact(self.xsdPath).getroot()
        elements = [elt for elt in root.iterchildren(SurveyConst.qnXsdElement)
                    if elt.get("name") and elt.get("abstract", "false").strip() != "true"]
        if len(elements) > self.options.maxFields:
            raise FieldCountExceeded(len(elements), self.options.maxFields)
        fields: dict[str, SchemaField] = {}
        for element in elements:
            schemaField = self.extractField(element)
            fields[schemaField.wireId] = schemaField
        SurveyLog.debug("amsfsurvey:schemaParsed",
                        "Schema declares %(count)s fields in namespace %(namespace)s",
                        artifact=self.xsdPath, count=len(fields), namespace=root.get("targetNamespace"))
        return SchemaData(targetNamespace=root.get("targetNamespace"), fields=fields)

    def extractField(self, element: etree._Element) -> SchemaField:
        wireId = element.get("name").strip()
        xbrlType = element.get("type") or self.inlineRestrictionBase(element)
        wireValues = tuple(enum.get("value", "")
                           for enum in element.iter(SurveyConst.qnXsdEnumeration))
        if wireValues:
            # schema literals may carry html entities, such as Par l&#39;entit&#233;
            decodedValues = tuple(html.unescape(value) for value in wireValues)
            valueType = ValueType.BOOLEAN if isBooleanEnumeration(decodedValues) else ValueType.ENUM
            return SchemaField(wireId, valueType, xbrlType or SurveyConst.stringItemType,
                               decodedValues, wireValues)
        return SchemaField(wireId, valueTypeOf(xbrlType), xbrlType or SurveyConst.stringItemType)

    def inlineRestrictionBase(self, element: etree._Element) -> str | None:
        for restriction in element.iter(SurveyConst.qnXsdRestriction):
            if restriction.get("base"):
                return restriction.get("base")
        return None
