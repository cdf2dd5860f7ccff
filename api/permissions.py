"""Custom permissions for REST API v1."""
from __future__ import annotations

from rest_framework.permissions import BasePermission


class IsStudent(BasePermission):
    """Authenticated user with a student profile."""

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "profile", None) is not None)
