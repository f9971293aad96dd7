from django.contrib import admin

from .models import Subject, SubjectOffering


class SubjectOfferingInline(admin.TabularInline):
    model = SubjectOffering
    extra = 0


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "units", "program", "year_level")
    list_filter = ("program", "year_level")
    search_fields = ("code", "name")
    inlines = [SubjectOfferingInline]


@admin.register(SubjectOffering)
class SubjectOfferingAdmin(admin.ModelAdmin):
    list_display = ("subject", "school_year", "semester", "instructor", "is_open")
    list_filter = ("school_year", "semester", "is_open")
    search_fields = ("subject__code", "subject__name")
