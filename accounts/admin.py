from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "assigned_program", "created_at")
    list_filter = ("role",)
    search_fields = ("user__username", "user__email", "user__last_name")
