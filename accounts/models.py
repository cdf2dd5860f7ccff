"""Accounts models: student profiles.

A student is a Django auth `User` (names, e-mail, credential hash) plus a
one-to-one `StudentProfile` holding the academic fields. The e-mail is
stored lowercased and doubles as the username.
"""
from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_AGE = 17
MAX_AGE = 25


class StudentProfile(models.Model):
    """Academic details linked to a Django auth user."""

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    major = models.CharField(max_length=100)
    age = models.PositiveSmallIntegerField(validators=[MinValueValidator(MIN_AGE), MaxValueValidator(MAX_AGE)])

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover (string repr convenience)
        return f"Profile<{self.user.email}:{self.major}>"
