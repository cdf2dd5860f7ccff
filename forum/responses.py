"""Response store. Authorization lives in `forum.services`."""
from __future__ import annotations

from typing import Any, Optional

from django.contrib.auth.models import User
from django.utils import timezone

from core.errors import NotFound
from core.validation import check_update_keys, parse_id, validate_bool, validate_string
from .models import Question, Response

CONTENT_MAX = 1500
UPDATABLE_FIELDS = ("content", "is_helpful")

SORTS = {
    "newest": ("-created_at", "-id"),
    "oldest": ("created_at", "id"),
}
DEFAULT_SORT = "newest"


def create_response(question_id: Any, poster_id: Any, content: Any, is_anonymous: Any = False) -> Response:
    """Insert a response. Notifying the question poster is the caller's job."""
    question_pk = parse_id(question_id, "question")
    poster_pk = parse_id(poster_id, "poster")
    content = validate_string(content, "Content", 1, CONTENT_MAX)
    is_anonymous = validate_bool(is_anonymous, "is_anonymous")
    if not Question.objects.filter(pk=question_pk).exists():
        raise NotFound("Question not found")
    if not User.objects.filter(pk=poster_pk).exists():
        raise NotFound("Student not found")
    response = Response.objects.create(
        question_id=question_pk,
        poster_id=poster_pk,
        content=content,
        is_anonymous=is_anonymous,
        is_helpful=False,
    )
    return get_response(response.pk)


def get_response(response_id: Any) -> Optional[Response]:
    pk = parse_id(response_id, "response")
    return Response.objects.with_poster_name().filter(pk=pk).first()


def list_for_question(question_id: Any, sort: str = DEFAULT_SORT) -> list[Response]:
    pk = parse_id(question_id, "question")
    ordering = SORTS.get(sort, SORTS[DEFAULT_SORT])
    return list(Response.objects.with_poster_name().filter(question_id=pk).order_by(*ordering))


def update_response(response_id: Any, updates: dict) -> Response:
    pk = parse_id(response_id, "response")
    check_update_keys(updates, UPDATABLE_FIELDS)
    fields: dict[str, Any] = {}
    for key, value in updates.items():
        if key == "content":
            fields[key] = validate_string(value, "Content", 1, CONTENT_MAX)
        elif key == "is_helpful":
            fields[key] = validate_bool(value, "is_helpful")
    fields["updated_at"] = timezone.now()
    if not Response.objects.filter(pk=pk).update(**fields):
        raise NotFound("Response not found")
    return get_response(pk)


def delete_response(response_id: Any) -> int:
    pk = parse_id(response_id, "response")
    deleted, _ = Response.objects.filter(pk=pk).delete()
    if not deleted:
        raise NotFound("Response not found")
    return deleted


def delete_for_question(question_id: Any) -> int:
    """Bulk delete for the question cascade; no ownership check."""
    pk = parse_id(question_id, "question")
    deleted, _ = Response.objects.filter(question_id=pk).delete()
    return deleted
