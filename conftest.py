import itertools
import logging

import pytest
from django.contrib.auth.hashers import make_password


@pytest.fixture(autouse=True)
def silence_django_request_logger():
    """Reduce noise from expected 4xx in passing tests.

    Many tests intentionally exercise 400/403/404 paths. Django logs these
    at WARNING via 'django.request'. Lower that logger to ERROR during
    tests to avoid clutter.
    """
    logger = logging.getLogger("django.request")
    old = logger.level
    logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        logger.setLevel(old)


@pytest.fixture(autouse=True)
def fast_hashing_and_fresh_throttles(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


_seq = itertools.count(1)


@pytest.fixture
def make_course(db):
    from courses import registry

    def _make(**overrides):
        n = next(_seq)
        data = {
            "code": f"CS{500 + n}",
            "name": f"Course {n}",
            "section": "A",
            "department": "Computer Science",
            "instructor_name": "Grace Hopper",
            "instructor_email": "grace.hopper@example.edu",
            "term": "Fall 2025",
        }
        data.update(overrides)
        return registry.create_course(data)

    return _make


@pytest.fixture
def make_student(db, settings):
    """Create a student whose password is 'pw' (login with the e-mail)."""
    from accounts import students

    def _make(first_name="Test", last_name=None, courses=(), **overrides):
        n = next(_seq)
        last_name = last_name or f"Student{n}"
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "email": f"{first_name}.{last_name}{n}@{settings.COURSEHUB_EMAIL_DOMAIN}".lower(),
            "credential_hash": make_password("pw"),
            "major": "Computer Science",
            "age": 20,
            "enrolled_course_ids": [c.pk for c in courses],
        }
        data.update(overrides)
        return students.create_student(data)

    return _make
