from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from quizzes.models import GradedAnswer, Submission


def _submit(api, quiz, body):
    return api.post(f"/api/quizzes/{quiz.id}/submit", body, format="json")


@pytest.mark.django_db
def test_submit_grades_and_returns_enriched_submission(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    r = _submit(api, quiz, {"answers": ["A", "True"]})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Quiz submitted successfully"
    sub = body["submission"]
    assert sub["score"] == 3
    assert sub["quiz"] == quiz.id
    assert sub["submittedAt"]
    assert sub["student"]["id"] == student.id
    assert sub["student"]["studentNumber"] == student.student_number
    assert sub["student"]["user"]["firstName"] == "Juan"
    assert sub["student"]["user"]["email"] == "student@ex.com"
    assert [a["isCorrect"] for a in sub["answers"]] == [True, True]


@pytest.mark.django_db
def test_wrong_answer_scores_partial(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    sub = _submit(api, quiz, {"answers": ["B", "True"]}).json()["submission"]
    assert sub["score"] == 2
    assert sub["answers"][0] == {"questionIndex": 0, "studentAnswer": "B", "correctAnswer": "A", "isCorrect": False, "points": 0}


@pytest.mark.django_db
def test_resubmitting_keeps_one_submission(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    first = _submit(api, quiz, {"answers": ["B", "False"]}).json()["submission"]
    second = _submit(api, quiz, {"answers": ["A", "True"]}).json()["submission"]
    assert first["id"] == second["id"]
    assert first["score"] == 0 and second["score"] == 3
    assert Submission.objects.filter(quiz=quiz, student=student).count() == 1


@pytest.mark.django_db
@pytest.mark.parametrize("body", [{}, {"answers": None}, {"answers": []}, {"answers": "A"}, {"answers": {"0": "A"}}])
def test_answers_must_be_an_array(api, student, make_quiz, body):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    r = _submit(api, quiz, body)
    assert r.status_code == 400
    assert r.json()["message"] == "Answers array is required"
    assert Submission.objects.count() == 0


@pytest.mark.django_db
def test_empty_resubmission_keeps_previous_grade(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    _submit(api, quiz, {"answers": ["A", "True"]})
    r = _submit(api, quiz, {"answers": []})
    assert r.status_code == 400
    assert r.json()["message"] == "Answers array is required"
    kept = Submission.objects.get(quiz=quiz, student=student)
    assert kept.score == 3
    assert kept.answers.count() == 2


@pytest.mark.django_db
def test_null_answers_count_as_unanswered(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    sub = _submit(api, quiz, {"answers": [None, "True"]}).json()["submission"]
    assert sub["score"] == 2
    assert sub["answers"][0]["studentAnswer"] == ""


@pytest.mark.django_db
def test_too_many_answers_rejected(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    r = _submit(api, quiz, {"answers": ["A", "True", "C"]})
    assert r.status_code == 400
    assert Submission.objects.count() == 0


@pytest.mark.django_db
def test_partial_answer_list_grades_answered_questions(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    sub = _submit(api, quiz, {"answers": ["A"]}).json()["submission"]
    assert sub["score"] == 1
    assert len(sub["answers"]) == 1


@pytest.mark.django_db
def test_submit_to_missing_quiz_is_404(api, student):
    api.force_authenticate(user=student.user)
    r = api.post("/api/quizzes/777/submit", {"answers": ["A"]}, format="json")
    assert r.status_code == 404
    assert r.json()["message"] == "Quiz not found"


@pytest.mark.django_db
def test_students_cannot_take_draft_or_expired_quizzes(api, student, make_quiz):
    draft = make_quiz(publish=False)
    expired = make_quiz(expires_at=timezone.now() - timedelta(hours=1))
    api.force_authenticate(user=student.user)
    r = _submit(api, draft, {"answers": ["A"]})
    assert r.status_code == 400 and r.json()["message"] == "Quiz is not published."
    r = _submit(api, expired, {"answers": ["A"]})
    assert r.status_code == 400 and r.json()["message"] == "Quiz has expired."
    assert Submission.objects.count() == 0


@pytest.mark.django_db
def test_student_cannot_submit_for_someone_else(api, student, make_student, make_quiz):
    quiz = make_quiz()
    other = make_student("other")
    api.force_authenticate(user=student.user)
    r = _submit(api, quiz, {"answers": ["A"], "studentId": other.id})
    assert r.status_code == 403
    assert Submission.objects.count() == 0


@pytest.mark.django_db
def test_instructor_submits_on_behalf_of_student(api, instructor, student, make_quiz):
    quiz = make_quiz(publish=False)
    api.force_authenticate(user=instructor)
    r = _submit(api, quiz, {"answers": ["A", "False"], "studentId": student.id})
    assert r.status_code == 200
    assert r.json()["submission"]["score"] == 1
    r = _submit(api, quiz, {"answers": ["A"], "studentId": 999})
    assert r.status_code == 404
    r = _submit(api, quiz, {"answers": ["A"]})
    assert r.status_code == 400
    assert r.json()["message"] == "studentId is required"


@pytest.mark.django_db
def test_student_reads_own_submission_only(api, student, make_student, make_quiz):
    quiz = make_quiz()
    other = make_student("other")
    api.force_authenticate(user=other.user)
    _submit(api, quiz, {"answers": ["A", "True"]})

    api.force_authenticate(user=student.user)
    _submit(api, quiz, {"answers": ["B", "True"]})
    own = api.get(f"/api/quizzes/{quiz.id}/submissions/{student.id}")
    assert own.status_code == 200
    assert own.json()["submission"]["score"] == 2
    theirs = api.get(f"/api/quizzes/{quiz.id}/submissions/{other.id}")
    assert theirs.status_code == 403


@pytest.mark.django_db
def test_missing_submission_is_404(api, instructor, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=instructor)
    r = api.get(f"/api/quizzes/{quiz.id}/submissions/{student.id}")
    assert r.status_code == 404
    assert r.json() == {"message": "Submission not found"}


@pytest.mark.django_db
def test_submission_list_is_newest_first_and_privileged(api, instructor, student, make_student, make_quiz):
    quiz = make_quiz()
    other = make_student("other")
    api.force_authenticate(user=student.user)
    _submit(api, quiz, {"answers": ["A"]})
    api.force_authenticate(user=other.user)
    _submit(api, quiz, {"answers": ["B"]})
    Submission.objects.filter(student=student).update(submitted_at=timezone.now() - timedelta(minutes=5))

    r = api.get(f"/api/quizzes/{quiz.id}/submissions")
    assert r.status_code == 403

    api.force_authenticate(user=instructor)
    r = api.get(f"/api/quizzes/{quiz.id}/submissions")
    assert r.status_code == 200
    subs = r.json()["submissions"]
    assert [s["student"]["id"] for s in subs] == [other.id, student.id]
    assert all(s["student"]["user"]["lastName"] == "Cruz" for s in subs)


@pytest.mark.django_db
def test_deleting_quiz_removes_submissions(api, instructor, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    _submit(api, quiz, {"answers": ["A", "True"]})

    api.force_authenticate(user=instructor)
    r = api.delete(f"/api/quizzes/{quiz.id}")
    assert r.status_code == 200
    assert r.json() == {"message": "Quiz deleted successfully", "deletedSubmissions": 1}
    assert Submission.objects.count() == 0
    assert GradedAnswer.objects.count() == 0
    assert api.get(f"/api/quizzes/{quiz.id}/submissions/{student.id}").status_code == 404
    assert api.get(f"/api/quizzes/{quiz.id}").status_code == 404
    assert api.delete(f"/api/quizzes/{quiz.id}").status_code == 404


@pytest.mark.django_db
def test_students_cannot_delete_quizzes(api, student, make_quiz):
    quiz = make_quiz()
    api.force_authenticate(user=student.user)
    assert api.delete(f"/api/quizzes/{quiz.id}").status_code == 403
