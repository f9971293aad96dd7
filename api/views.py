"""REST API views: quiz authoring, taking and grading.

Subject and student resources are read-only viewsets; quiz endpoints
are function views because their URLs do not follow one resource
prefix.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.models import is_privileged
from quizzes import services
from quizzes.models import Quiz
from students.models import Student
from subjects.models import Subject, SubjectOffering
from .permissions import IsPrivileged, IsPrivilegedOrReadOnly
from .serializers import (
    QuizSerializer,
    QuizWriteSerializer,
    StudentSerializer,
    SubjectSerializer,
    SubmissionSerializer,
)


def _payload(request) -> dict:
    return request.data if isinstance(request.data, dict) else {}


def _quiz_context(request) -> dict:
    return {"request": request, "include_answers": is_privileged(request.user)}


def _get_quiz(quiz_id: int) -> Quiz:
    quiz = Quiz.objects.prefetch_related("questions").filter(pk=quiz_id).first()
    if quiz is None:
        raise NotFound("Quiz not found")
    return quiz


def _own_student(user) -> Student | None:
    return Student.objects.filter(user=user).first()


def _submitting_student(request, payload: dict) -> Student:
    """Resolve whose answers are being submitted.

    Students submit for themselves (a `studentId` naming someone else is
    refused); instructors and admins submit on behalf of `studentId`.
    """
    student_id = payload.get("studentId")
    own = _own_student(request.user)
    if is_privileged(request.user):
        if student_id in (None, ""):
            if own is None:
                raise ValidationError("studentId is required")
            return own
        student = Student.objects.filter(pk=student_id).first() if str(student_id).isdigit() else None
        if student is None:
            raise NotFound("Student not found")
        return student
    if own is None:
        raise PermissionDenied("Only students can submit quizzes.")
    if student_id not in (None, "") and str(student_id) != str(own.pk):
        raise PermissionDenied("Students may only submit their own answers.")
    return own


class SubjectViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Subject.objects.prefetch_related("offerings").all()
    serializer_class = SubjectSerializer
    filterset_fields = ["program", "year_level"]
    search_fields = ["code", "name"]
    ordering_fields = ["code", "name", "created_at"]


class StudentViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = StudentSerializer
    filterset_fields = ["program", "year_level", "status"]
    search_fields = ["student_number", "user__first_name", "user__last_name", "user__email"]
    ordering_fields = ["student_number", "created_at"]

    def get_queryset(self):
        # Instructors/admins: every record; students: their own only
        base = Student.objects.select_related("user").order_by("student_number")
        if is_privileged(self.request.user):
            return base
        return base.filter(user=self.request.user)


@api_view(["POST"])
@permission_classes([IsPrivileged])
def create_quiz(request, subject_id: int, offering_id: int):
    """Create a draft quiz for one offering of a subject."""
    subject = get_object_or_404(Subject, pk=subject_id)
    offering = SubjectOffering.objects.filter(pk=offering_id, subject=subject).first()
    if offering is None:
        raise NotFound("Subject offering not found")
    serializer = QuizWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    quiz = services.create_quiz(subject, offering, serializer.validated_data)
    data = QuizSerializer(_get_quiz(quiz.pk), context=_quiz_context(request)).data
    return Response({"message": "Quiz created successfully", "quiz": data}, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def offering_quizzes(request, offering_id: int):
    """All quizzes of an offering, newest first."""
    quizzes = Quiz.objects.filter(offering_id=offering_id).prefetch_related("questions").order_by("-created_at", "-id")
    data = QuizSerializer(quizzes, many=True, context=_quiz_context(request)).data
    return Response({"quizzes": data})


@api_view(["GET", "PUT", "PATCH", "DELETE"])
@permission_classes([IsPrivilegedOrReadOnly])
def quiz_detail(request, quiz_id: int):
    quiz = _get_quiz(quiz_id)
    if request.method == "GET":
        return Response({"quiz": QuizSerializer(quiz, context=_quiz_context(request)).data})
    if request.method == "DELETE":
        removed = services.delete_quiz(quiz)
        return Response({"message": "Quiz deleted successfully", "deletedSubmissions": removed})

    partial = request.method == "PATCH"
    serializer = QuizWriteSerializer(data=request.data, partial=partial)
    serializer.is_valid(raise_exception=True)
    services.update_quiz(quiz, serializer.validated_data, partial=partial)
    data = QuizSerializer(_get_quiz(quiz_id), context=_quiz_context(request)).data
    return Response({"message": "Quiz updated successfully", "quiz": data})


@api_view(["POST"])
@permission_classes([IsPrivileged])
def publish_quiz(request, quiz_id: int):
    quiz = services.publish_quiz(_get_quiz(quiz_id))
    return Response({"message": "Quiz published", "quiz": QuizSerializer(quiz, context=_quiz_context(request)).data})


@api_view(["POST"])
@permission_classes([IsPrivileged])
def unpublish_quiz(request, quiz_id: int):
    quiz = services.unpublish_quiz(_get_quiz(quiz_id))
    return Response({"message": "Quiz moved to draft", "quiz": QuizSerializer(quiz, context=_quiz_context(request)).data})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def submit_quiz(request, quiz_id: int):
    """Grade and store a student's answers (resubmitting replaces them)."""
    payload = _payload(request)
    answers = services.normalise_answers(payload.get("answers"))
    quiz = _get_quiz(quiz_id)
    student = _submitting_student(request, payload)
    submission, _ = services.submit_answers(
        quiz,
        student,
        answers,
        enforce_lifecycle=not is_privileged(request.user),
    )
    data = SubmissionSerializer(services.get_submission(quiz.pk, student.pk)).data
    return Response({"message": "Quiz submitted successfully", "submission": data})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def student_submission(request, quiz_id: int, student_id: int):
    """One student's graded submission; students may only read their own."""
    if not is_privileged(request.user):
        own = _own_student(request.user)
        if own is None or own.pk != student_id:
            raise PermissionDenied("You can only view your own submission.")
    submission = services.get_submission(quiz_id, student_id)
    return Response({"submission": SubmissionSerializer(submission).data})


@api_view(["GET"])
@permission_classes([IsPrivileged])
def quiz_submissions(request, quiz_id: int):
    """Every submission of a quiz, newest first."""
    submissions = services.submissions_for(quiz_id)
    return Response({"submissions": SubmissionSerializer(submissions, many=True).data})
