"""Question store.

Pure reads and writes; ownership is checked by `forum.services` before
any mutation reaches this module.
"""
from __future__ import annotations

from typing import Any, Optional

from django.contrib.auth.models import User
from django.utils import timezone

from core.errors import NotFound
from core.validation import check_update_keys, parse_id, validate_bool, validate_string
from courses.models import Course
from .models import Question

TITLE_MAX = 200
CONTENT_MAX = 2000
UPDATABLE_FIELDS = ("title", "content", "is_resolved")

# sort option -> (is_resolved filter, ordering)
SORTS = {
    "newest": (None, ("-created_at", "-id")),
    "oldest": (None, ("created_at", "id")),
    "answered": (True, ("-created_at", "-id")),
    "unanswered": (False, ("-created_at", "-id")),
}
DEFAULT_SORT = "newest"


def create_question(course_id: Any, poster_id: Any, title: Any, content: Any, is_anonymous: Any = False) -> Question:
    course_pk = parse_id(course_id, "course")
    poster_pk = parse_id(poster_id, "poster")
    title = validate_string(title, "Title", 1, TITLE_MAX)
    content = validate_string(content, "Content", 1, CONTENT_MAX)
    is_anonymous = validate_bool(is_anonymous, "is_anonymous")
    if not Course.objects.filter(pk=course_pk).exists():
        raise NotFound("Course not found")
    if not User.objects.filter(pk=poster_pk).exists():
        raise NotFound("Student not found")
    question = Question.objects.create(
        course_id=course_pk,
        poster_id=poster_pk,
        title=title,
        content=content,
        is_anonymous=is_anonymous,
        is_resolved=False,
    )
    return get_question(question.pk)


def get_question(question_id: Any) -> Optional[Question]:
    pk = parse_id(question_id, "question")
    return Question.objects.with_poster_name().filter(pk=pk).first()


def list_for_course(course_id: Any, sort: str = DEFAULT_SORT) -> list[Question]:
    """Questions of a course; unknown sort options fall back to newest first."""
    pk = parse_id(course_id, "course")
    resolved, ordering = SORTS.get(sort, SORTS[DEFAULT_SORT])
    qs = Question.objects.with_poster_name().filter(course_id=pk)
    if resolved is not None:
        qs = qs.filter(is_resolved=resolved)
    return list(qs.order_by(*ordering))


def update_question(question_id: Any, updates: dict) -> Question:
    pk = parse_id(question_id, "question")
    check_update_keys(updates, UPDATABLE_FIELDS)
    fields: dict[str, Any] = {}
    for key, value in updates.items():
        if key == "title":
            fields[key] = validate_string(value, "Title", 1, TITLE_MAX)
        elif key == "content":
            fields[key] = validate_string(value, "Content", 1, CONTENT_MAX)
        elif key == "is_resolved":
            fields[key] = validate_bool(value, "is_resolved")
    fields["updated_at"] = timezone.now()
    if not Question.objects.filter(pk=pk).update(**fields):
        raise NotFound("Question not found")
    return get_question(pk)


def delete_question(question_id: Any) -> int:
    """Delete one question. Dependents must already be gone (see services)."""
    pk = parse_id(question_id, "question")
    _, per_model = Question.objects.filter(pk=pk).delete()
    deleted = per_model.get(Question._meta.label, 0)
    if not deleted:
        raise NotFound("Question not found")
    return deleted
