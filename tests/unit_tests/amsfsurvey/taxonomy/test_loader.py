from __future__ import annotations

import os

import pytest

from amsfsurvey.ModelSurvey import ValueType
from amsfsurvey.SurveyErrors import (
    DuplicateFieldError,
    MissingArtifact,
    MissingStructureArtifact,
    TaxonomyLoadError,
    UnknownFieldError,
)
from amsfsurvey.SurveyOptions import TaxonomyOptions
from amsfsurvey.taxonomy.DimensionParser import DimensionData
from amsfsurvey.taxonomy.Loader import Loader, translateGateValue
from amsfsurvey.taxonomy.RuleParser import RuleData
from amsfsurvey.taxonomy.SchemaParser import SchemaData, SchemaField

STRUCTURE = """parts:
  - name: Test Part
    sections:
{0}
"""


def writeStructure(path: str, sections: str) -> None:
    with open(os.path.join(path, "questionnaire_structure.yml"), "w", encoding="utf-8") as fh:
        fh.write(STRUCTURE.format(sections))


def test_identity_and_metadata(questionnaire):
    assert questionnaire.industry == "test_industry"
    assert questionnaire.year == 2025
    assert questionnaire.wireNamespace == "https://test.example.com/test_industry_2025"
    assert questionnaire.schemaUrl == "http://example.com/test/taxonomy.xsd"
    assert questionnaire.wirePrefix == "strix"
    assert questionnaire.dimensionName == "CountryDimension"
    assert questionnaire.memberPrefix == "sdl"


def test_structure(questionnaire):
    assert questionnaire.parts[0].name == "Inherent Risk"
    assert [s.title for s in questionnaire.sections] == ["General", "Détails"]
    assert questionnaire.sections[1].localizedTitle("en") == "Details"
    assert [s.number for s in questionnaire.sections] == [1, 2]
    assert questionnaire.sections[0].subsections[0].title == "Activity Status"
    assert [q.number for q in questionnaire.sections[0].questions] == [1, 2, 3]
    assert questionnaire.questionCount == 9
    assert questionnaire.sectionCount == 2


def test_identifier_casing(questionnaire):
    for field in questionnaire.fields:
        assert field.wireId.lower() == field.normalizedId
    assert questionnaire.question("TgAtE").wireId == "tGATE"
    assert questionnaire.field("a1204s1").wireId == "a1204S1"


def test_fields(questionnaire):
    gate = questionnaire.field("tgate")
    assert gate.valueType is ValueType.BOOLEAN
    assert gate.enumerationValues == ("Oui", "Non")
    assert gate.label == "Avez-vous effectue des activites?"
    assert "Si non, veuillez expliquer pourquoi" in gate.verboseLabel
    t001 = questionnaire.field("t001")
    assert t001.xbrlType == "xbrli:integerItemType"
    assert t001.enumerationValues is None
    assert questionnaire.field("t002").label == "t002"
    assert questionnaire.field("t099") is None


def test_instructions(questionnaire):
    first, t001, t002 = questionnaire.sections[0].subsections[0].questions
    assert "Answer Yes if you performed" in first.instructions
    assert t001.instructions == "Nombre total de clients"
    assert t001.localizedInstructions("en") == "Total number of clients"
    assert t002.instructions is None
    assert questionnaire.sections[0].subsections[0].instructions == "Répondez pour l'exercice écoulé."


def test_gates(questionnaire):
    assert [q.wireId for q in questionnaire.gateQuestions] == ["tGATE"]
    # rules written against Yes require the schema literal Oui
    assert questionnaire.field("t001").visibilityRule == {"tgate": "Oui"}
    assert questionnaire.field("t003").visibilityRule == {"tgate": "Oui"}
    assert questionnaire.field("t002").visibilityRule == {}
    # the self referencing t002 rule is dropped, so t002 is no gate
    assert not questionnaire.field("t002").isGate
    for field in questionnaire.fields:
        assert field.normalizedId not in field.visibilityRule


def test_gate_rules_reference_gates(questionnaire):
    gateIds = {q.normalizedId for q in questionnaire.gateQuestions}
    for field in questionnaire.fields:
        assert set(field.visibilityRule) <= gateIds


def test_dimensional_fields(questionnaire):
    assert [f.wireId for f in questionnaire.dimensionalFields] == ["a1204S1"]
    assert questionnaire.question("a1204s1").isDimensional


def test_dropped_rules_logged(taxonomyPath, logBuffer):
    Loader(taxonomyPath).load("test_industry", 2025)
    codes = logBuffer.messageCodes
    assert "amsfsurvey:selfReferencingRule" in codes
    assert "amsfsurvey:ruleFieldUnknown" in codes
    assert codes[-1] == "amsfsurvey:questionnaireLoaded"
    lines = logBuffer.getLines()
    assert any("tMISSING" in line for line in lines)


@pytest.mark.parametrize("enumerationValues, requiredValue, expected", [
    (("Oui", "Non"), "Yes", "Oui"),
    (("Non", "Oui"), "Yes", "Oui"),
    (("Yes", "No"), "Yes", "Yes"),
    (("Oui", "Non"), "No", "Non"),
    (("Oui, toujours", "Non, jamais"), "Yes", "Oui, toujours"),
    (("Vrai", "Faux"), "Yes", "Yes"),
    (("Oui", "Non", "Parfois"), "Yes", "Yes"),
    (None, "Yes", "Yes"),
])
def test_translateGateValue(enumerationValues, requiredValue, expected):
    controlling = SchemaField("tGATE", ValueType.ENUM, "xbrli:stringItemType", enumerationValues)
    assert translateGateValue(controlling, requiredValue) == expected


def test_translateGateValue_unresolved_field():
    assert translateGateValue(None, "Yes") == "Yes"


def test_case_collision_logged(taxonomyPath, logBuffer):
    schemaData = SchemaData("https://test.example.com/t", {
        "aB": SchemaField("aB", ValueType.INTEGER, "xbrli:integerItemType"),
        "ab": SchemaField("ab", ValueType.STRING, "xbrli:stringItemType"),
    })
    fields = Loader(taxonomyPath).buildFields(schemaData, {}, DimensionData(), RuleData())
    assert list(fields) == ["ab"]
    assert fields["ab"].wireId == "ab"
    assert logBuffer.messageCodes == ["amsfsurvey:caseCollision"]
    assert "aB" in logBuffer.getLines()[0]


def test_options_override_taxonomy_config(taxonomyPath):
    questionnaire = Loader(taxonomyPath, TaxonomyOptions(wirePrefix="amsf")).load("test_industry", 2025)
    assert questionnaire.schemaUrl is None
    assert questionnaire.wirePrefix == "amsf"


def test_optional_artifacts(taxonomyCopy):
    for name in ("test_survey_lab.xml", "test_survey_def.xml", "test_survey.xule", "taxonomy.yml"):
        os.remove(os.path.join(taxonomyCopy, name))
    questionnaire = Loader(taxonomyCopy).load("test_industry", 2025)
    assert questionnaire.field("tgate").label == "tGATE"
    assert questionnaire.gateQuestions == ()
    assert questionnaire.dimensionalFields == ()
    assert questionnaire.dimensionName is None
    assert questionnaire.schemaUrl is None


def test_missing_schema(taxonomyCopy):
    os.remove(os.path.join(taxonomyCopy, "test_survey.xsd"))
    with pytest.raises(MissingArtifact, match=r"\*\.xsd"):
        Loader(taxonomyCopy).load("test_industry", 2025)


def test_missing_structure(taxonomyCopy):
    os.remove(os.path.join(taxonomyCopy, "questionnaire_structure.yml"))
    with pytest.raises(MissingStructureArtifact):
        Loader(taxonomyCopy).load("test_industry", 2025)


def test_ambiguous_artifact(taxonomyCopy, logBuffer):
    with open(os.path.join(taxonomyCopy, "test_survey.xsd"), encoding="utf-8") as fh:
        schema = fh.read()
    with open(os.path.join(taxonomyCopy, "z_other.xsd"), "w", encoding="utf-8") as fh:
        fh.write(schema.replace("test_industry_2025", "other"))
    questionnaire = Loader(taxonomyCopy).load("test_industry", 2025)
    assert questionnaire.wireNamespace == "https://test.example.com/test_industry_2025"
    assert "amsfsurvey:ambiguousArtifact" in logBuffer.messageCodes


def test_unknown_field(taxonomyCopy):
    writeStructure(taxonomyCopy, """      - title: Test
        subsections:
          - title: Sub
            questions:
              - field_id: nonexistent_field
""")
    with pytest.raises(UnknownFieldError, match="nonexistent_field"):
        Loader(taxonomyCopy).load("test", 2025)


def test_duplicate_field(taxonomyCopy):
    writeStructure(taxonomyCopy, """      - title: Section 1
        subsections:
          - title: Sub 1
            questions:
              - field_id: tgate
      - title: Section 2
        subsections:
          - title: Sub 2
            questions:
              - field_id: TGATE
""")
    with pytest.raises(DuplicateFieldError, match="tgate.*Section 2, Sub 2") as excinfo:
        Loader(taxonomyCopy).load("test", 2025)
    assert excinfo.value.location == "Section 2, Sub 2"


def test_load_errors_share_a_base(taxonomyCopy):
    os.remove(os.path.join(taxonomyCopy, "test_survey.xsd"))
    with pytest.raises(TaxonomyLoadError):
        Loader(taxonomyCopy).load("test", 2025)
