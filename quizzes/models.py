from __future__ import annotations

from django.db import models
from django.utils import timezone

from students.models import Student
from subjects.models import Subject, SubjectOffering


class QuizStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"


class QuestionType(models.TextChoices):
    MULTIPLE_CHOICE = "multiple-choice", "Multiple choice"
    TRUE_FALSE = "true-false", "True/False"


class Quiz(models.Model):
    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name="quizzes")
    offering = models.ForeignKey(SubjectOffering, on_delete=models.CASCADE, related_name="quizzes")
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    # Minutes allowed once a student starts the quiz
    duration = models.PositiveIntegerField()
    total_points = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=16, choices=QuizStatus.choices, default=QuizStatus.DRAFT)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    def is_published(self) -> bool:
        return self.status == QuizStatus.PUBLISHED

    def is_expired(self) -> bool:
        if not self.expires_at:
            return False
        return timezone.now() >= self.expires_at


class Question(models.Model):
    """One question of a quiz.

    Questions are addressed by `order`, their zero-based position in the
    quiz. Submitted answers are aligned with them by that position.
    """

    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="questions")
    order = models.PositiveSmallIntegerField(default=0)
    text = models.TextField()
    type = models.CharField(max_length=20, choices=QuestionType.choices)
    options = models.JSONField(default=list)
    correct_answer = models.CharField(max_length=500)
    points = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["order", "id"]
        unique_together = ("quiz", "order")

    def __str__(self) -> str:
        return f"Q{self.order}: {self.text[:40]}"


class Submission(models.Model):
    """A student's graded attempt; at most one per (quiz, student).

    `quiz` is protected: removing a quiz goes through
    `quizzes.services.delete_quiz`, which clears submissions first.
    """

    quiz = models.ForeignKey(Quiz, on_delete=models.PROTECT, related_name="submissions")
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="quiz_submissions")
    score = models.PositiveIntegerField(default=0)
    submitted_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-submitted_at"]
        constraints = [
            models.UniqueConstraint(fields=["quiz", "student"], name="unique_submission_per_student"),
        ]

    def __str__(self) -> str:
        return f"Submission by {self.student_id} on {self.quiz_id}: {self.score}"


class GradedAnswer(models.Model):
    submission = models.ForeignKey(Submission, on_delete=models.CASCADE, related_name="answers")
    question_index = models.PositiveSmallIntegerField()
    student_answer = models.TextField(blank=True)
    # Snapshot taken at grading time; later quiz edits do not regrade
    correct_answer = models.CharField(max_length=500)
    is_correct = models.BooleanField(default=False)
    points = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["question_index"]
        unique_together = ("submission", "question_index")

    def __str__(self) -> str:  # pragma: no cover
        return f"#{self.question_index} ({'✓' if self.is_correct else ' '})"
