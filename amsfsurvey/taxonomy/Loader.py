'''
See COPYRIGHT.md for copyright information.

Binds the artifacts of one taxonomy directory into an immutable Questionnaire.

The schema, label, definition and rule artifacts are parsed independently, merged into
Fields, and the questionnaire structure then places those Fields into parts, sections
and subsections. Any failure aborts the load, nothing partially built is returned.
'''
from __future__ import annotations

import glob
import os

from amsfsurvey import SurveyConst, SurveyLog
from amsfsurvey.ModelSurvey import Field, Part, Question, Questionnaire, Section, Subsection, resolveLocale
from amsfsurvey.SurveyErrors import DuplicateFieldError, MissingArtifact, UnknownFieldError
from amsfsurvey.SurveyOptions import TaxonomyOptions
from amsfsurvey.taxonomy.DimensionParser import DimensionData, DimensionParser
from amsfsurvey.taxonomy.LabelParser import LabelData, LabelParser
from amsfsurvey.taxonomy.RuleParser import RuleData, RuleParser
from amsfsurvey.taxonomy.SchemaParser import SchemaData, SchemaField, SchemaParser
from amsfsurvey.taxonomy.StructureParser import StructureData, StructureParser

STRUCTURE_FILE = "questionnaire_structure.yml"


def translateGateValue(controlling: SchemaField | None, requiredValue: str) -> str:
    """
    The controlling field's own enumeration literal for a rule's Yes or No value.

    A two valued enumeration provides the literal containing yes/oui (or no/non), so a
    rule written against "Yes" requires "Oui" of a French gate. Otherwise the rule value
    is kept as written.
    """
    token = requiredValue.lower()
    if token in SurveyConst.affirmativeTokens:
        tokens = SurveyConst.affirmativeTokens
    elif token in SurveyConst.negativeTokens:
        tokens = SurveyConst.negativeTokens
    else:
        return requiredValue
    if controlling is None or not controlling.enumerationValues or len(controlling.enumerationValues) != 2:
        return requiredValue
    for literal in controlling.enumerationValues:
        if any(t in literal.lower() for t in tokens):
            return literal
    return requiredValue


class Loader:
    """
    Loads the questionnaire of one taxonomy directory, such as taxonomies/aml/2025.

    Options default to the directory's taxonomy.yml, if any. The Loader keeps no state
    between loads; caching belongs to the Registry.
    """

    def __init__(self, taxonomyPath: str, options: TaxonomyOptions | None = None) -> None:
        self.taxonomyPath = taxonomyPath
        self.options = options if options is not None else TaxonomyOptions.fromTaxonomyDirectory(taxonomyPath)

    def findArtifact(self, pattern: str, required: bool = False) -> str | None:
        matches = sorted(glob.glob(os.path.join(glob.escape(self.taxonomyPath), pattern)))
        if not matches:
            if required:
                raise MissingArtifact(os.path.join(self.taxonomyPath, pattern))
            return None
        if len(matches) > 1:
            SurveyLog.warning("amsfsurvey:ambiguousArtifact",
                              "Several files match %(pattern)s, using %(file)s",
                              artifact=self.taxonomyPath, pattern=pattern, file=os.path.basename(matches[0]))
        return matches[0]

    def load(self, industry: str, year: int) -> Questionnaire:
        options = self.options
        xsdPath = self.findArtifact("*.xsd", required=True)
        labPath = self.findArtifact("*_lab.xml")
        defPath = self.findArtifact("*_def.xml")
        xulePath = self.findArtifact("*.xule")

        schemaData = SchemaParser(xsdPath, options).parse()
        labels = LabelParser(labPath, options).parse() if labPath else {}
        dimensionData = DimensionParser(defPath, options).parse()
        ruleData = RuleParser(xulePath, options).parse()

        fields = self.buildFields(schemaData, labels, dimensionData, ruleData)
        structure = StructureParser(os.path.join(self.taxonomyPath, STRUCTURE_FILE), options).parse()
        questionnaire = Questionnaire(
            industry=industry,
            year=int(year),
            parts=self.buildParts(structure, fields),
            wireNamespace=schemaData.targetNamespace,
            schemaUrl=options.schemaUrl,
            wirePrefix=options.wirePrefix,
            entityScheme=options.entityScheme,
            dimensionName=dimensionData.dimensionName,
            memberPrefix=dimensionData.memberPrefix)
        SurveyLog.info("amsfsurvey:questionnaireLoaded",
                       "Loaded %(industry)s %(year)s questionnaire: %(questions)s questions in %(sections)s sections",
                       artifact=self.taxonomyPath, industry=industry, year=year,
                       questions=questionnaire.questionCount, sections=questionnaire.sectionCount)
        return questionnaire

    def visibilityRules(self, schemaFields: dict[str, SchemaField], ruleData: RuleData) -> dict[str, dict[str, str]]:
        rules: dict[str, dict[str, str]] = {}
        for controlledWireId, gates in ruleData.dependencies.items():
            controlledId = controlledWireId.lower()
            for controllingWireId, requiredValue in gates.items():
                controllingId = controllingWireId.lower()
                if controllingId == controlledId:
                    SurveyLog.warning("amsfsurvey:selfReferencingRule",
                                      "Rule makes %(field)s depend on itself, dropped",
                                      artifact=self.taxonomyPath, field=controlledWireId)
                    continue
                missing = [wireId for wireId, normalizedId in ((controlledWireId, controlledId),
                                                               (controllingWireId, controllingId))
                           if normalizedId not in schemaFields]
                if missing:
                    SurveyLog.warning("amsfsurvey:ruleFieldUnknown",
                                      "Rule %(controlling)s-%(controlled)s names undeclared field %(missing)s, dropped",
                                      artifact=self.taxonomyPath, controlling=controllingWireId,
                                      controlled=controlledWireId, missing=", ".join(missing))
                    continue
                rules.setdefault(controlledId, {})[controllingId] = translateGateValue(
                    schemaFields[controllingId], requiredValue)
        return rules

    def buildFields(self, schemaData: SchemaData, labels: dict[str, LabelData],
                    dimensionData: DimensionData, ruleData: RuleData) -> dict[str, Field]:
        schemaFields: dict[str, SchemaField] = {}
        for wireId, schemaField in schemaData.fields.items():
            normalizedId = wireId.lower()
            if normalizedId in schemaFields:
                SurveyLog.warning("amsfsurvey:caseCollision",
                                  "Elements %(first)s and %(second)s differ only by case, %(second)s is used",
                                  artifact=self.taxonomyPath, first=schemaFields[normalizedId].wireId, second=wireId)
            schemaFields[normalizedId] = schemaField
        rules = self.visibilityRules(schemaFields, ruleData)
        gateIds = {controllingId for gates in rules.values() for controllingId in gates}
        dimensionalIds = {fieldId.lower() for fieldId in dimensionData.dimensionalFields}
        fields: dict[str, Field] = {}
        for normalizedId, schemaField in schemaFields.items():
            labelData = labels.get(schemaField.wireId) or LabelData()
            fields[normalizedId] = Field(
                normalizedId=normalizedId,
                wireId=schemaField.wireId,
                valueType=schemaField.valueType,
                xbrlType=schemaField.xbrlType,
                label=labelData.label or schemaField.wireId,
                verboseLabel=labelData.verboseLabel or None,
                enumerationValues=schemaField.enumerationValues,
                wireEnumerationValues=schemaField.wireEnumerationValues,
                isGate=normalizedId in gateIds,
                isDimensional=normalizedId in dimensionalIds,
                visibilityRule=rules.get(normalizedId, {}))
        return fields

    def buildParts(self, structure: StructureData, fields: dict[str, Field]) -> tuple[Part, ...]:
        seen: set[str] = set()
        parts = []
        for partData in structure.parts:
            sections = []
            for sectionData in partData.sections:
                subsections = []
                for subData in sectionData.subsections:
                    questions = []
                    for qData in subData.questions:
                        field = fields.get(qData.fieldId)
                        if field is None:
                            raise UnknownFieldError(qData.fieldId)
                        if qData.fieldId in seen:
                            raise DuplicateFieldError(qData.fieldId, "{0}, {1}".format(
                                resolveLocale(sectionData.title), resolveLocale(subData.title)))
                        seen.add(qData.fieldId)
                        questions.append(Question(qData.number, field, qData.instructions))
                    subsections.append(Subsection(subData.number, subData.title, tuple(questions), subData.instructions))
                sections.append(Section(sectionData.number, sectionData.title, tuple(subsections)))
            parts.append(Part(partData.name, tuple(sections)))
        return tuple(parts)
