"""Courses and enrolments models.

`Enrolment` is the single record of who takes which course; both "my
courses" and a course's roster are read from it.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models


class Course(models.Model):
    """A course section students can ask questions in."""

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=200)
    section = models.CharField(max_length=10)
    department = models.CharField(max_length=100)
    instructor_name = models.CharField(max_length=100)
    instructor_email = models.EmailField()
    term = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["code"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} {self.name}"


class Enrolment(models.Model):
    """Link a student to a course."""

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="enrolments")
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="enrolments")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("course", "student")
        ordering = ["course_id", "student_id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_id}->{self.course_id}"
