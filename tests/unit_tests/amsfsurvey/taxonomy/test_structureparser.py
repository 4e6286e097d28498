from __future__ import annotations

import os

import pytest

from amsfsurvey.SurveyErrors import MalformedArtifact, MissingStructureArtifact
from amsfsurvey.SurveyOptions import TaxonomyOptions
from amsfsurvey.taxonomy.StructureParser import StructureData, StructureParser


def parseYaml(tmp_path, content: str, options: TaxonomyOptions | None = None) -> StructureData:
    structurePath = tmp_path / "questionnaire_structure.yml"
    structurePath.write_text(content, encoding="utf-8")
    return StructureParser(str(structurePath), options).parse()


@pytest.fixture
def structure(taxonomyPath) -> StructureData:
    return StructureParser(os.path.join(taxonomyPath, "questionnaire_structure.yml")).parse()


def test_parts_and_sections(structure):
    assert len(structure.parts) == 1
    assert structure.parts[0].name == {"fr": "Inherent Risk"}
    assert [s.number for s in structure.sections] == [1, 2]
    assert structure.sections[1].title == {"fr": "Détails", "en": "Details"}


def test_question_numbers_restart_per_section(structure):
    first, second = structure.sections
    assert [q.number for sub in first.subsections for q in sub.questions] == [1, 2, 3]
    assert [q.number for sub in second.subsections for q in sub.questions] == [1, 2, 3, 4, 5, 6]
    assert [sub.number for sub in second.subsections] == [1, 2]


def test_field_ids_lowercased(structure):
    ids = [q.fieldId for s in structure.sections for sub in s.subsections for q in sub.questions]
    assert ids == ["tgate", "t001", "t002", "t003", "t004", "t007", "t005", "t006", "a1204s1"]


def test_instructions(structure):
    activity = structure.sections[0].subsections[0]
    assert activity.instructions == {"fr": "Répondez pour l'exercice écoulé.", "en": "Answer for the past year."}
    gate, t001, t002 = activity.questions
    assert gate.instructions == {"fr": "Answer Yes if you performed any activity during the reporting period."}
    assert t001.instructions["en"] == "Total number of clients"
    assert t002.instructions == {}
    # blank instructions are absent
    assert structure.sections[1].subsections[0].questions[1].instructions == {}


def test_sections_without_parts(tmp_path):
    structure = parseYaml(tmp_path, """
sections:
  - title: One
    subsections:
      - title: A
        questions:
          - field_id: a1
  - title: Two
    subsections:
      - title: B
        questions:
          - field_id: b1
          - field_id: b2
""")
    assert len(structure.parts) == 1
    assert structure.parts[0].name == {}
    assert [s.number for s in structure.sections] == [1, 2]
    assert [q.number for q in structure.sections[1].subsections[0].questions] == [1, 2]


def test_section_numbers_continue_across_parts(tmp_path):
    structure = parseYaml(tmp_path, """
parts:
  - name: First
    sections:
      - title: One
      - title: Two
  - name: Second
    sections:
      - title: Three
""")
    assert [[s.number for s in part.sections] for part in structure.parts] == [[1, 2], [3]]


def test_default_locale_option(tmp_path):
    structure = parseYaml(tmp_path, "sections:\n  - title: General\n", TaxonomyOptions(defaultLocale="en"))
    assert structure.sections[0].title == {"en": "General"}


def test_empty_document(tmp_path):
    structure = parseYaml(tmp_path, "")
    assert len(structure.parts) == 1
    assert structure.sections == ()


@pytest.mark.parametrize("content, match", [
    ("sections: [unclosed", None),
    ("- just\n- a list\n", "mapping"),
    ("sections: not a list\n", "must be a list"),
    ("sections:\n  - title: S\n    subsections:\n      - title: A\n        questions:\n          - instructions: none\n",
     r"sections\[0\]\.subsections\[0\]\.questions\[0\] has no field_id"),
])
def test_malformed(tmp_path, content, match):
    with pytest.raises(MalformedArtifact, match=match):
        parseYaml(tmp_path, content)


def test_missing(tmp_path):
    with pytest.raises(MissingStructureArtifact, match="Structure file not found"):
        StructureParser(str(tmp_path / "questionnaire_structure.yml")).parse()


def test_numbering_across_subsections(tmp_path):
    structure = parseYaml(tmp_path, """
sections:
  - title: One
    subsections:
      - title: A
        questions: [{field_id: a1}, {field_id: a2}]
      - title: B
        questions: [{field_id: b1}]
  - title: Two
    subsections:
      - title: C
        questions: [{field_id: c1}]
""")
    first, second = structure.sections
    assert [q.number for sub in first.subsections for q in sub.questions] == [1, 2, 3]
    assert [q.number for sub in second.subsections for q in sub.questions] == [1]
