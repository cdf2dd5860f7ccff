"""Course registry: course lookups, enrolment and activity counters."""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Iterable, Optional

from django.conf import settings
from django.contrib.auth.models import User
from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from core.errors import Conflict, InvalidInput, NotFound
from core.validation import check_update_keys, parse_id, parse_ids, validate_int_range, validate_string
from forum.models import Question
from .models import Course, Enrolment

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "name",
    "section",
    "department",
    "instructor_name",
    "instructor_email",
    "term",
    "enrolled_student_ids",
)

# (label, min, max) per writable text column
_TEXT_FIELDS = {
    "code": ("Course code", 1, 20),
    "name": ("Course name", 1, 200),
    "section": ("Section", 1, 10),
    "department": ("Department", 1, 100),
    "instructor_name": ("Instructor name", 1, 100),
    "instructor_email": ("Instructor email", 3, 254),
    "term": ("Term", 1, 50),
}


def get_course(course_id: Any) -> Optional[Course]:
    return Course.objects.filter(pk=parse_id(course_id, "course")).first()


def get_course_by_code(code: Any) -> Optional[Course]:
    return Course.objects.filter(code=validate_string(code, "Course code", 1, 20)).first()


def list_for_student(student_id: Any) -> list[Course]:
    """Courses whose roster contains the student."""
    pk = parse_id(student_id, "student")
    return list(Course.objects.filter(enrolments__student_id=pk).order_by("code"))


def is_enrolled(student_id: Any, course_id: Any) -> bool:
    return Enrolment.objects.filter(
        student_id=parse_id(student_id, "student"), course_id=parse_id(course_id, "course")
    ).exists()


def count_recent_questions(course_ids: Iterable[Any], window_hours: Optional[int] = None) -> dict[int, int]:
    """Count questions created in the trailing window, per course, in one query.

    Courses without recent questions are absent from the result.
    """
    ids = parse_ids(course_ids, "course")
    if window_hours is None:
        window_hours = settings.COURSEHUB_RECENT_WINDOW_HOURS
    hours = validate_int_range(window_hours, "Window", 1, 24 * 365)
    if not ids:
        return {}
    since = timezone.now() - timedelta(hours=hours)
    rows = (
        Question.objects.filter(course_id__in=ids, created_at__gte=since)
        .values("course_id")
        .annotate(total=Count("id"))
        .order_by()
    )
    return {row["course_id"]: row["total"] for row in rows}


def _clean_student_ids(values: Any) -> list[int]:
    student_ids = parse_ids(values, "student")
    found = set(User.objects.filter(pk__in=student_ids, profile__isnull=False).values_list("pk", flat=True))
    for sid in student_ids:
        if sid not in found:
            raise InvalidInput(f"Invalid student ID: {sid}")
    return list(dict.fromkeys(student_ids))


def _set_roster(course: Course, student_ids: list[int]) -> None:
    Enrolment.objects.filter(course=course).exclude(student_id__in=student_ids).delete()
    existing = set(Enrolment.objects.filter(course=course).values_list("student_id", flat=True))
    Enrolment.objects.bulk_create([Enrolment(course=course, student_id=sid) for sid in student_ids if sid not in existing])


def create_course(data: dict) -> Course:
    fields = {key: validate_string(data.get(key), label, lo, hi) for key, (label, lo, hi) in _TEXT_FIELDS.items()}
    student_ids = _clean_student_ids(data.get("enrolled_student_ids") or [])
    try:
        with transaction.atomic():
            if Course.objects.filter(code=fields["code"]).exists():
                raise Conflict("A course with this code already exists")
            course = Course.objects.create(**fields)
            _set_roster(course, student_ids)
    except IntegrityError:
        raise Conflict("A course with this code already exists") from None
    logger.info("Created course %s (%s)", course.pk, course.code)
    return course


def update_course(course_id: Any, updates: dict) -> Course:
    pk = parse_id(course_id, "course")
    check_update_keys(updates, UPDATABLE_FIELDS)
    fields = {}
    student_ids = None
    for key, value in updates.items():
        if key == "enrolled_student_ids":
            student_ids = _clean_student_ids(value)
        else:
            label, lo, hi = _TEXT_FIELDS[key]
            fields[key] = validate_string(value, label, lo, hi)
    with transaction.atomic():
        course = Course.objects.select_for_update().filter(pk=pk).first()
        if course is None:
            raise NotFound("Course not found")
        if fields:
            Course.objects.filter(pk=pk).update(**fields)
        if student_ids is not None:
            _set_roster(course, student_ids)
    return Course.objects.get(pk=pk)


def enrol_student(course_id: Any, student_id: Any) -> bool:
    """Enrol a student (idempotent). Returns True when a row was created."""
    course = get_course(course_id)
    if course is None:
        raise NotFound("Course not found")
    sid = _clean_student_ids([student_id])[0]
    _, created = Enrolment.objects.get_or_create(course=course, student_id=sid)
    return created
