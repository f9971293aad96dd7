"""Quiz authoring, grading and submission storage.

Views call into this module with already-parsed input; everything that
touches more than one row runs inside a single transaction.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from django.db import OperationalError, transaction
from django.db.models import QuerySet
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from students.models import Student
from subjects.models import Subject, SubjectOffering
from .models import GradedAnswer, Question, QuestionType, Quiz, QuizStatus, Submission

logger = logging.getLogger(__name__)

TRUE_FALSE_OPTIONS = ["True", "False"]

# Quiz fields a full update (PUT) replaces; `questions` is handled separately
MUTABLE_FIELDS = ("title", "description", "duration", "total_points", "status", "expires_at")
# Optional fields a full update clears when the body leaves them out
RESET_ON_REPLACE = {"description": "", "expires_at": None}
# Tries at the submission upsert before a lock error reaches the caller
UPSERT_ATTEMPTS = 2


def _stored_points(q: dict[str, Any]) -> int:
    points = q.get("points")
    return 1 if points is None else points


def _build_questions(quiz: Quiz, questions: Sequence[dict[str, Any]]) -> list[Question]:
    return [
        Question(
            quiz=quiz,
            order=index,
            text=q["text"],
            type=q["type"],
            options=list(q["options"]),
            correct_answer=q["correct_answer"],
            points=_stored_points(q),
        )
        for index, q in enumerate(questions)
    ]


def _points_of(questions: Sequence[dict[str, Any]]) -> int:
    return sum(q.get("points") or 1 for q in questions)


@transaction.atomic
def create_quiz(subject: Subject, offering: SubjectOffering, data: dict[str, Any]) -> Quiz:
    """Store a new quiz in the draft state.

    `data` carries validated quiz fields plus a non-empty `questions`
    list. When `total_points` is not supplied it is derived from the
    question points.
    """
    questions = data["questions"]
    total = data.get("total_points")
    quiz = Quiz.objects.create(
        subject=subject,
        offering=offering,
        title=data["title"],
        description=data.get("description") or "",
        duration=data["duration"],
        total_points=_points_of(questions) if total is None else total,
        status=QuizStatus.DRAFT,
        expires_at=data.get("expires_at"),
    )
    Question.objects.bulk_create(_build_questions(quiz, questions))
    logger.info("Created quiz %s for offering %s with %d questions", quiz.pk, offering.pk, len(questions))
    return quiz


@transaction.atomic
def update_quiz(quiz: Quiz, data: dict[str, Any], *, partial: bool = False) -> Quiz:
    """Replace a quiz's mutable fields and, when given, its question set.

    A full update resets omitted optional fields (description, expiry) to
    their defaults; a partial update leaves them alone. Moving the quiz
    to `published` is subject to the readiness check.
    """
    questions = data.get("questions")
    for field in MUTABLE_FIELDS:
        if field in data:
            setattr(quiz, field, data[field])
        elif not partial and field in RESET_ON_REPLACE:
            setattr(quiz, field, RESET_ON_REPLACE[field])
    if questions is not None and "total_points" not in data:
        quiz.total_points = _points_of(questions)
    quiz.save()

    if questions is not None:
        Question.objects.filter(quiz=quiz).delete()
        Question.objects.bulk_create(_build_questions(quiz, questions))

    if quiz.is_published():
        readiness = quiz_readiness(quiz)
        if not readiness["ready"]:
            raise ValidationError({"message": "Quiz is not ready to publish.", "issues": readiness["issues"]})
    logger.info("Updated quiz %s (partial=%s, questions replaced=%s)", quiz.pk, partial, questions is not None)
    return quiz


def quiz_readiness(quiz: Quiz) -> dict[str, Any]:
    """Evaluate whether a quiz is ready for students to take.

    Conditions:
    - At least one question
    - Each correct answer is one of the question's options
    - Multiple-choice questions have at least two options
    - True/false questions offer exactly "True" and "False"
    - The stored total equals the sum of question points (zero counts as one)
    Returns: { 'ready': bool, 'issues': [str] }
    """
    issues: list[str] = []
    questions = list(Question.objects.filter(quiz=quiz).order_by("order", "id"))
    if not questions:
        issues.append("Quiz has no questions.")
    for q in questions:
        label = f"Question {q.order + 1}"
        if q.correct_answer not in q.options:
            issues.append(f"{label}: correct answer must be one of the options.")
        if q.type == QuestionType.MULTIPLE_CHOICE and len(q.options) < 2:
            issues.append(f"{label}: must have at least two options.")
        if q.type == QuestionType.TRUE_FALSE and sorted(q.options) != sorted(TRUE_FALSE_OPTIONS):
            issues.append(f"{label}: true/false options must be True and False.")
    expected = sum(q.points or 1 for q in questions)
    if questions and quiz.total_points != expected:
        issues.append(f"Total points ({quiz.total_points}) do not match the question points ({expected}).")
    return {"ready": len(issues) == 0, "issues": issues}


@transaction.atomic
def publish_quiz(quiz: Quiz) -> Quiz:
    readiness = quiz_readiness(quiz)
    if not readiness["ready"]:
        raise ValidationError({"message": "Quiz is not ready to publish.", "issues": readiness["issues"]})
    if not quiz.is_published():
        quiz.status = QuizStatus.PUBLISHED
        quiz.save(update_fields=["status", "updated_at"])
        logger.info("Published quiz %s", quiz.pk)
    return quiz


def unpublish_quiz(quiz: Quiz) -> Quiz:
    if quiz.is_published():
        quiz.status = QuizStatus.DRAFT
        quiz.save(update_fields=["status", "updated_at"])
        logger.info("Moved quiz %s back to draft", quiz.pk)
    return quiz


@transaction.atomic
def delete_quiz(quiz: Quiz) -> int:
    """Delete a quiz together with every submission made against it.

    Both steps share one transaction: if removing the quiz fails, the
    submissions are restored. Returns the number of submissions removed.
    """
    quiz_id = quiz.pk
    _, per_model = Submission.objects.filter(quiz=quiz).delete()
    count = per_model.get(Submission._meta.label, 0)
    quiz.delete()
    logger.info("Deleted quiz %s and %d submissions", quiz_id, count)
    return count


def normalise_answers(answers: Any) -> list[str]:
    """Check the shape of a submitted answer list.

    The list must be non-empty and each entry a string; `None` marks an
    unanswered question and is stored as the empty string.
    """
    if not isinstance(answers, list) or not answers:
        raise ValidationError("Answers array is required")
    cleaned: list[str] = []
    for index, answer in enumerate(answers):
        if answer is None:
            cleaned.append("")
        elif isinstance(answer, str):
            cleaned.append(answer)
        else:
            raise ValidationError(f"Answer {index + 1} must be a string.")
    return cleaned


def grade_answers(questions: Sequence[Question], answers: Sequence[str]) -> tuple[int, list[GradedAnswer]]:
    """Grade answers against questions by position.

    - answers[i] is compared with questions[i].correct_answer by exact
      string equality
    - a correct answer earns the question's points, otherwise zero
    - fewer answers than questions grades only the answered prefix;
      more answers than questions is rejected

    Returns the score and unsaved GradedAnswer rows.
    """
    if len(answers) > len(questions):
        raise ValidationError(
            f"Submission has {len(answers)} answers but the quiz has {len(questions)} questions."
        )
    score = 0
    graded: list[GradedAnswer] = []
    for index, answer in enumerate(answers):
        question = questions[index]
        points = question.points or 1
        ok = answer == question.correct_answer
        if ok:
            score += points
        graded.append(
            GradedAnswer(
                question_index=index,
                student_answer=answer,
                correct_answer=question.correct_answer,
                is_correct=ok,
                points=points if ok else 0,
            )
        )
    return score, graded


@transaction.atomic
def _store_submission(quiz: Quiz, student: Student, score: int, graded: list[GradedAnswer]) -> tuple[Submission, bool]:
    submission, created = Submission.objects.update_or_create(
        quiz=quiz,
        student=student,
        defaults={"score": score, "submitted_at": timezone.now()},
    )
    if not created:
        submission.answers.all().delete()
    for row in graded:
        row.submission = submission
    GradedAnswer.objects.bulk_create(graded)
    return submission, created


def submit_answers(quiz: Quiz, student: Student, answers: Any, *, enforce_lifecycle: bool = True) -> tuple[Submission, bool]:
    """Grade a student's answers and store them as their submission.

    A student has at most one submission per quiz: resubmitting
    overwrites answers, score and timestamp of the existing row and keeps
    its id. The lookup and write run as one `update_or_create` backed by
    the (quiz, student) unique constraint, so concurrent submits end in a
    single row. A write refused with a lock error is retried once.

    With `enforce_lifecycle`, draft and expired quizzes are rejected.
    Returns (submission, created).
    """
    cleaned = normalise_answers(answers)
    if enforce_lifecycle:
        if not quiz.is_published():
            raise ValidationError("Quiz is not published.")
        if quiz.is_expired():
            raise ValidationError("Quiz has expired.")
    questions = list(quiz.questions.all())
    score, graded = grade_answers(questions, cleaned)

    for attempt in range(UPSERT_ATTEMPTS):
        try:
            submission, created = _store_submission(quiz, student, score, graded)
            break
        except OperationalError:
            # SQLite refuses a second concurrent writer with "database is locked"
            if attempt + 1 == UPSERT_ATTEMPTS:
                raise
            logger.warning("Retrying submission for quiz %s by student %s after a locked write", quiz.pk, student.pk)

    logger.info(
        "%s submission %s for quiz %s by student %s: score %d",
        "Created" if created else "Replaced",
        submission.pk,
        quiz.pk,
        student.pk,
        score,
    )
    return submission, created


def submissions_for(quiz_id) -> QuerySet[Submission]:
    """Submissions of a quiz with everything the enriched view needs."""
    return (
        Submission.objects.filter(quiz_id=quiz_id)
        .select_related("student__user__profile")
        .prefetch_related("answers")
        .order_by("-submitted_at", "-id")
    )


def get_submission(quiz_id, student_id) -> Submission:
    submission = submissions_for(quiz_id).filter(student_id=student_id).first()
    if submission is None:
        raise NotFound("Submission not found")
    return submission
