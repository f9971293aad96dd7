from django.contrib import admin

from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("student_number", "user", "program", "year_level", "status")
    list_filter = ("program", "year_level", "status")
    search_fields = ("student_number", "user__username", "user__last_name", "user__email")
