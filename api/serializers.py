"""Serializers for the REST API.

Field names follow the JSON the frontend already speaks (camelCase).
Correct answers are part of a quiz payload only when the serializer
context sets `include_answers`; views set it from the caller's role, so
the single-quiz, list and authoring responses share one rule.
"""
from __future__ import annotations

from collections.abc import Mapping

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.settings import api_settings

from quizzes.models import GradedAnswer, Question, QuestionType, Quiz, QuizStatus, Submission
from students.models import Student
from subjects.models import Subject, SubjectOffering

User = get_user_model()

REQUIRED_QUESTION_KEYS = ("question", "type", "options", "correctAnswer")


def _reject(message: str):
    raise serializers.ValidationError({api_settings.NON_FIELD_ERRORS_KEY: [message]})


def check_question_payloads(questions) -> None:
    """Reject a missing/empty question list or a question missing a required key."""
    if not isinstance(questions, list) or not questions:
        _reject("Questions are required")
    for q in questions:
        if not isinstance(q, Mapping) or not all(q.get(key) for key in REQUIRED_QUESTION_KEYS):
            _reject("Each question must have: question, type, options, and correctAnswer")


class QuestionSerializer(serializers.ModelSerializer):
    question = serializers.CharField(source="text", trim_whitespace=False)
    type = serializers.ChoiceField(choices=QuestionType.choices)
    options = serializers.ListField(
        child=serializers.CharField(max_length=500, trim_whitespace=False),
        allow_empty=False,
    )
    correctAnswer = serializers.CharField(source="correct_answer", max_length=500, trim_whitespace=False)
    points = serializers.IntegerField(min_value=0, required=False, default=1)

    class Meta:
        model = Question
        fields = ("question", "type", "options", "correctAnswer", "points")

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self.context.get("include_answers", False):
            data.pop("correctAnswer", None)
        return data


class QuizSerializer(serializers.ModelSerializer):
    """Read shape of a quiz."""

    totalPoints = serializers.IntegerField(source="total_points", read_only=True)
    expiresAt = serializers.DateTimeField(source="expires_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    questions = QuestionSerializer(many=True, read_only=True)

    class Meta:
        model = Quiz
        fields = (
            "id",
            "subject",
            "offering",
            "title",
            "description",
            "duration",
            "totalPoints",
            "questions",
            "status",
            "expiresAt",
            "createdAt",
            "updatedAt",
        )
        read_only_fields = fields


class QuizWriteSerializer(serializers.Serializer):
    """Input for creating and updating quizzes.

    `status` is ignored on create (new quizzes start as drafts).
    """

    title = serializers.CharField(max_length=200, trim_whitespace=False)
    description = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    duration = serializers.IntegerField(min_value=1)
    totalPoints = serializers.IntegerField(source="total_points", min_value=0, required=False)
    status = serializers.ChoiceField(choices=QuizStatus.choices, required=False)
    expiresAt = serializers.DateTimeField(source="expires_at", required=False, allow_null=True)
    questions = QuestionSerializer(many=True)

    def to_internal_value(self, data):
        if isinstance(data, Mapping) and (not self.partial or "questions" in data):
            check_question_payloads(data.get("questions"))
        return super().to_internal_value(data)


class PersonSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)

    class Meta:
        model = User
        fields = ("id", "firstName", "lastName", "email")
        read_only_fields = fields


class StudentSerializer(serializers.ModelSerializer):
    studentNumber = serializers.CharField(source="student_number", read_only=True)
    yearLevel = serializers.CharField(source="year_level", read_only=True)
    user = PersonSerializer(read_only=True)

    class Meta:
        model = Student
        fields = ("id", "studentNumber", "program", "yearLevel", "section", "status", "user")
        read_only_fields = fields


class StudentSummarySerializer(StudentSerializer):
    """The student attributes shown next to a submission."""

    class Meta(StudentSerializer.Meta):
        fields = ("id", "studentNumber", "program", "yearLevel", "user")
        read_only_fields = fields


class GradedAnswerSerializer(serializers.ModelSerializer):
    questionIndex = serializers.IntegerField(source="question_index")
    studentAnswer = serializers.CharField(source="student_answer")
    correctAnswer = serializers.CharField(source="correct_answer")
    isCorrect = serializers.BooleanField(source="is_correct")

    class Meta:
        model = GradedAnswer
        fields = ("questionIndex", "studentAnswer", "correctAnswer", "isCorrect", "points")
        read_only_fields = fields


class SubmissionSerializer(serializers.ModelSerializer):
    student = StudentSummarySerializer(read_only=True)
    answers = GradedAnswerSerializer(many=True, read_only=True)
    submittedAt = serializers.DateTimeField(source="submitted_at", read_only=True)

    class Meta:
        model = Submission
        fields = ("id", "quiz", "student", "answers", "score", "submittedAt")
        read_only_fields = fields


class SubjectOfferingSerializer(serializers.ModelSerializer):
    schoolYear = serializers.CharField(source="school_year")
    isOpen = serializers.BooleanField(source="is_open")

    class Meta:
        model = SubjectOffering
        fields = ("id", "schoolYear", "semester", "instructor", "room", "capacity", "isOpen")
        read_only_fields = fields


class SubjectSerializer(serializers.ModelSerializer):
    yearLevel = serializers.CharField(source="year_level")
    offerings = SubjectOfferingSerializer(many=True, read_only=True)

    class Meta:
        model = Subject
        fields = ("id", "code", "name", "description", "units", "program", "yearLevel", "offerings")
        read_only_fields = fields
