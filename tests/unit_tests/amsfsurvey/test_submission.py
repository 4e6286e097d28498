from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from amsfsurvey.Submission import Submission
from amsfsurvey.SurveyErrors import DuplicateCategoryKeyError, GeneratorError, InvalidAnswerError, UnknownFieldError


@pytest.fixture
def submission(questionnaire) -> Submission:
    return Submission(questionnaire, "ENTITY001", "2025-12-31")


def test_period_parsing(questionnaire):
    assert Submission(questionnaire, "E", "2025-12-31").period == datetime.date(2025, 12, 31)
    assert Submission(questionnaire, "E", datetime.date(2024, 6, 30)).period == datetime.date(2024, 6, 30)
    assert Submission(questionnaire, "E", datetime.datetime(2024, 6, 30, 8)).period == datetime.date(2024, 6, 30)


@pytest.mark.parametrize("period", ["31/12/2025", "not a date", 20251231])
def test_invalid_period(questionnaire, period):
    submission = Submission(questionnaire, "E", period)
    with pytest.raises(GeneratorError):
        submission.period


def test_industry_and_year(submission):
    assert submission.industry == "test_industry"
    assert submission.year == 2025


def test_answers_are_cast(submission):
    submission["t001"] = "42"
    submission["T003"] = "1234.56"
    submission.setAnswer("t006", "2025-03-01")
    assert submission["t001"] == 42
    assert submission["t003"] == Decimal("1234.56")
    assert submission["t006"] == datetime.date(2025, 3, 1)


def test_invalid_scalar_becomes_absent(submission):
    submission["t001"] = "forty two"
    assert submission["t001"] is None


def test_unknown_field(submission):
    with pytest.raises(UnknownFieldError, match="t999"):
        submission["t999"] = 1
    with pytest.raises(UnknownFieldError):
        submission["t999"]
    # declared by the schema but not part of the questionnaire
    with pytest.raises(UnknownFieldError):
        submission["t099"] = "x"


@pytest.mark.parametrize("value, expected", [(True, "Oui"), (False, "Non"), ("Oui", "Oui"), ("oui", "Oui"), (" YES ", "Oui"), ("non", "Non"), ("peut-être", "peut-être")])
def test_boolean_answers_use_enumeration_literal(submission, value, expected):
    submission["tgate"] = value
    assert submission["tgate"] == expected


def test_dimensional_answers(submission):
    submission["a1204s1"] = {"fr": "10", "mc": 5}
    assert submission["a1204S1"] == {"FR": 10, "MC": 5}
    with pytest.raises(DuplicateCategoryKeyError):
        submission["a1204s1"] = {"fr": 1, "FR": 2}


def test_mapping_shape_is_checked(submission):
    with pytest.raises(InvalidAnswerError):
        submission["a1204s1"] = "10"
    with pytest.raises(InvalidAnswerError):
        submission["t001"] = {"FR": 1}
    submission["a1204s1"] = None
    assert submission["a1204s1"] is None


def test_answers_is_read_only_copy(submission):
    submission["t002"] = "text"
    answers = submission.answers
    with pytest.raises(TypeError):
        answers["t002"] = "changed"
    submission["t002"] = "other"
    assert answers["t002"] == "text"


def test_visibility_follows_gate(submission):
    assert not submission.isVisible("t001")
    submission["tgate"] = "Oui"
    assert submission.isVisible("t001")
    assert submission.isVisible("t003")
    submission["tgate"] = "Non"
    assert not submission.isVisible("t001")
    assert submission.isVisible("t002")


def test_completion(submission, questionnaire):
    # t001 and t003 are hidden until the gate answers Oui
    assert len(submission.visibleQuestions()) == questionnaire.questionCount - 2
    assert submission.completionPercentage() == 0.0
    submission["tgate"] = "Non"
    visibleCount = questionnaire.questionCount - 2
    assert submission.completionPercentage() == round(100.0 / visibleCount, 1)
    submission.update({"t002": "a", "t004": "Option A", "t007": "12.5", "t005": "Par un tiers", "t006": "2025-01-01"})
    assert not submission.isComplete()
    submission["a1204s1"] = {}
    assert [q.normalizedId for q in submission.unansweredQuestions()] == ["a1204s1"]
    submission["a1204s1"] = {"FR": 3}
    assert submission.isComplete()
    assert submission.completionPercentage() == 100.0


def test_hidden_answers_do_not_count(submission):
    submission["tgate"] = "Non"
    submission["t001"] = 5
    assert "t001" not in [q.normalizedId for q in submission.visibleQuestions()]
    assert "t001" not in [q.normalizedId for q in submission.unansweredQuestions()]


def test_gate_monotonicity(submission, questionnaire):
    submission["tgate"] = "Non"
    hidden = {q.normalizedId for q in questionnaire.questions} - {q.normalizedId for q in submission.visibleQuestions()}
    submission["tgate"] = "Oui"
    visible = {q.normalizedId for q in submission.visibleQuestions()}
    assert hidden == {"t001", "t003"}
    assert hidden <= visible
