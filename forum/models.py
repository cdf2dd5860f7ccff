"""Forum models: questions asked in a course and the responses to them."""
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Case, CharField, Value, When
from django.db.models.functions import Concat

from courses.models import Course

ANONYMOUS = "Anonymous"


class PostQuerySet(models.QuerySet):
    def with_poster_name(self):
        """Annotate `poster_name`, masked for anonymous posts.

        Computed per read and never stored, so a renamed student shows up
        under the new name everywhere.
        """
        return self.annotate(
            poster_name=Case(
                When(is_anonymous=True, then=Value(ANONYMOUS)),
                default=Concat("poster__first_name", Value(" "), "poster__last_name"),
                output_field=CharField(),
            )
        )


class Question(models.Model):
    """A question posted by a student in a course.

    `is_resolved` toggles between open and resolved at the poster's
    discretion; there is no terminal state.
    """

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="questions")
    poster = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="questions")
    title = models.CharField(max_length=200)
    content = models.TextField(max_length=2000)
    is_anonymous = models.BooleanField(default=False)
    is_resolved = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["course", "created_at"], name="forum_q_course_created")]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.course_id}:{self.title[:30]}"


class Response(models.Model):
    """A reply to a question. `is_helpful` is set by the question's poster."""

    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="responses")
    poster = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="responses")
    content = models.TextField(max_length=1500)
    is_anonymous = models.BooleanField(default=False)
    is_helpful = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.question_id}:{self.poster_id}:{self.content[:20]}"
