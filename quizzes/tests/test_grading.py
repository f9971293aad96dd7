from __future__ import annotations

import pytest
from rest_framework.exceptions import ValidationError

from quizzes.models import Question
from quizzes.services import grade_answers, normalise_answers


def _questions():
    return [
        Question(order=0, text="Pick A", type="multiple-choice", options=["A", "B", "C"], correct_answer="A", points=1),
        Question(order=1, text="Sky", type="true-false", options=["True", "False"], correct_answer="True", points=2),
    ]


def test_all_correct_scores_full_points():
    score, graded = grade_answers(_questions(), ["A", "True"])
    assert score == 3
    assert [g.is_correct for g in graded] == [True, True]
    assert [g.points for g in graded] == [1, 2]


def test_wrong_answer_earns_nothing():
    score, graded = grade_answers(_questions(), ["B", "True"])
    assert score == 2
    first = graded[0]
    assert first.is_correct is False and first.points == 0
    assert first.student_answer == "B" and first.correct_answer == "A"


def test_comparison_is_exact():
    # Case and surrounding whitespace matter
    score, _ = grade_answers(_questions(), ["a", " True"])
    assert score == 0


def test_missing_points_count_as_one():
    qs = _questions()
    qs[1].points = None
    score, graded = grade_answers(qs, ["A", "True"])
    assert score == 2
    assert graded[1].points == 1


def test_fewer_answers_grades_prefix_only():
    score, graded = grade_answers(_questions(), ["A"])
    assert score == 1
    assert len(graded) == 1
    assert graded[0].question_index == 0


def test_more_answers_than_questions_rejected():
    with pytest.raises(ValidationError):
        grade_answers(_questions(), ["A", "True", "extra"])


def test_normalise_maps_null_to_empty_string():
    assert normalise_answers(["A", None]) == ["A", ""]


@pytest.mark.parametrize("bad", [None, [], "A", {"0": "A"}, 3])
def test_normalise_requires_a_list(bad):
    with pytest.raises(ValidationError) as err:
        normalise_answers(bad)
    assert "Answers array is required" in str(err.value.detail)


def test_normalise_rejects_non_string_entries():
    with pytest.raises(ValidationError) as err:
        normalise_answers(["A", 2])
    assert "Answer 2 must be a string." in str(err.value.detail)
