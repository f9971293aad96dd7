from django.contrib import admin

from .models import GradedAnswer, Question, Quiz, Submission


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0


class GradedAnswerInline(admin.TabularInline):
    model = GradedAnswer
    extra = 0
    readonly_fields = ("question_index", "student_answer", "correct_answer", "is_correct", "points")


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ("title", "subject", "offering", "status", "total_points", "expires_at", "created_at")
    list_filter = ("status", "subject")
    search_fields = ("title", "subject__code", "subject__name")
    inlines = [QuestionInline]


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("quiz", "student", "score", "submitted_at")
    list_filter = ("quiz",)
    search_fields = ("student__student_number", "student__user__username")
    inlines = [GradedAnswerInline]
