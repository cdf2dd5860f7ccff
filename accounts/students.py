"""Identity store: lookups and writes for student accounts.

Credentials arrive already hashed; this module never hashes or checks a
password. The Django `User.password` column stores the hash verbatim.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.contrib.auth.models import User
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from core.errors import Conflict, InvalidInput, NotFound
from core.validation import (
    check_update_keys,
    normalize_email,
    parse_id,
    parse_ids,
    validate_int_range,
    validate_string,
)
from courses.models import Course, Enrolment
from .models import MAX_AGE, MIN_AGE, StudentProfile

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "major", "age", "enrolled_course_ids")
# The e-mail doubles as the login username.
USERNAME_MAX = User._meta.get_field("username").max_length


def _students():
    return User.objects.select_related("profile").filter(profile__isnull=False)


def find_by_id(student_id: Any) -> Optional[User]:
    pk = parse_id(student_id, "student")
    return _students().filter(pk=pk).first()


def find_by_email(email: Any) -> Optional[User]:
    """Case-insensitive lookup; e-mails are stored lowercased."""
    return _students().filter(email=normalize_email(email)).first()


def _clean_course_ids(values: Any) -> list[int]:
    course_ids = parse_ids(values, "course")
    found = set(Course.objects.filter(pk__in=course_ids).values_list("pk", flat=True))
    missing = [cid for cid in course_ids if cid not in found]
    if missing:
        raise InvalidInput(f"Invalid course ID: {missing[0]}")
    return course_ids


def _set_enrolments(user: User, course_ids: list[int]) -> None:
    Enrolment.objects.filter(student=user).exclude(course_id__in=course_ids).delete()
    existing = set(Enrolment.objects.filter(student=user).values_list("course_id", flat=True))
    Enrolment.objects.bulk_create(
        [Enrolment(course_id=cid, student=user) for cid in dict.fromkeys(course_ids) if cid not in existing]
    )


def create_student(data: dict) -> User:
    """Create a student account and its profile.

    Expected keys: `first_name`, `last_name`, `email`, `credential_hash`,
    `major`, `age` and optionally `enrolled_course_ids`.
    """
    first_name = validate_string(data.get("first_name"), "First name", 1, 50)
    last_name = validate_string(data.get("last_name"), "Last name", 1, 50)
    email = normalize_email(data.get("email"))
    if len(email) > USERNAME_MAX:
        raise InvalidInput(f"Email must not exceed {USERNAME_MAX} characters")
    credential_hash = validate_string(data.get("credential_hash"), "Password", 1, 128)
    major = validate_string(data.get("major"), "Major", 1, 100)
    age = validate_int_range(data.get("age"), "Age", MIN_AGE, MAX_AGE)
    course_ids = _clean_course_ids(data.get("enrolled_course_ids") or [])

    try:
        with transaction.atomic():
            if User.objects.filter(Q(email__iexact=email) | Q(username__iexact=email)).exists():
                raise Conflict("A student with this email already exists")
            user = User(username=email, email=email, first_name=first_name, last_name=last_name, password=credential_hash)
            user.save()
            StudentProfile.objects.create(user=user, major=major, age=age)
            _set_enrolments(user, course_ids)
    except IntegrityError:
        raise Conflict("A student with this email already exists") from None
    logger.info("Created student %s", user.pk)
    return find_by_id(user.pk)


def update_student(student_id: Any, updates: dict) -> User:
    pk = parse_id(student_id, "student")
    check_update_keys(updates, UPDATABLE_FIELDS)

    user_fields: dict[str, Any] = {}
    profile_fields: dict[str, Any] = {}
    course_ids = None
    for key, value in updates.items():
        if key in ("first_name", "last_name"):
            user_fields[key] = validate_string(value, key, 1, 50)
        elif key == "major":
            profile_fields[key] = validate_string(value, key, 1, 100)
        elif key == "age":
            profile_fields[key] = validate_int_range(value, key, MIN_AGE, MAX_AGE)
        elif key == "enrolled_course_ids":
            course_ids = _clean_course_ids(value)

    with transaction.atomic():
        user = User.objects.select_for_update().filter(pk=pk, profile__isnull=False).first()
        if user is None:
            raise NotFound("Student not found")
        if user_fields:
            User.objects.filter(pk=pk).update(**user_fields)
        StudentProfile.objects.filter(user_id=pk).update(updated_at=timezone.now(), **profile_fields)
        if course_ids is not None:
            _set_enrolments(user, course_ids)
    return find_by_id(pk)


def delete_student(student_id: Any) -> int:
    pk = parse_id(student_id, "student")
    deleted, _ = User.objects.filter(pk=pk, profile__isnull=False).delete()
    if not deleted:
        raise NotFound("Student not found")
    return 1
