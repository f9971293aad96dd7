"""Custom permissions for the REST API."""
from __future__ import annotations

from rest_framework.permissions import BasePermission, SAFE_METHODS

from accounts.models import is_privileged


class IsPrivileged(BasePermission):
    """Instructors and admins only."""

    message = "Only instructors and admins may do this."

    def has_permission(self, request, view):
        return is_privileged(request.user)


class IsPrivilegedOrReadOnly(BasePermission):
    message = "Only instructors and admins may change quizzes."

    def has_permission(self, request, view):  # noqa: D401
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return is_privileged(request.user)
