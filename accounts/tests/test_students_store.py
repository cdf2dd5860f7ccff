from __future__ import annotations

import pytest
from django.contrib.auth.hashers import make_password

from accounts import students
from core.errors import Conflict, InvalidInput, NotFound
from courses.models import Enrolment


def _data(**overrides):
    data = {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "Jane.Doe@stevens.edu",
        "credential_hash": make_password("pw"),
        "major": "Computer Science",
        "age": 21,
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_create_student_normalizes_email_and_stores_hash_verbatim():
    hashed = make_password("secret")
    s = students.create_student(_data(credential_hash=hashed))
    assert s.email == "jane.doe@stevens.edu"
    assert s.username == s.email
    assert s.password == hashed
    assert s.check_password("secret")
    assert s.profile.major == "Computer Science"
    assert s.profile.age == 21


@pytest.mark.django_db
def test_find_by_email_is_case_insensitive():
    s = students.create_student(_data())
    assert students.find_by_email("JANE.DOE@STEVENS.EDU").pk == s.pk
    assert students.find_by_email("nobody@stevens.edu") is None
    with pytest.raises(InvalidInput):
        students.find_by_email("jane@example.com")


@pytest.mark.django_db
def test_find_by_id_returns_none_when_missing():
    assert students.find_by_id(424242) is None
    with pytest.raises(InvalidInput):
        students.find_by_id("abc")


@pytest.mark.django_db
def test_duplicate_email_conflicts():
    students.create_student(_data())
    with pytest.raises(Conflict):
        students.create_student(_data(email="JANE.DOE@stevens.edu", first_name="Other"))


@pytest.mark.django_db
def test_email_taken_as_username_by_non_student_conflicts(django_user_model):
    django_user_model.objects.create_user(username="jane.doe@stevens.edu", password="pw")
    with pytest.raises(Conflict):
        students.create_student(_data())
    assert django_user_model.objects.count() == 1


@pytest.mark.django_db
def test_email_length_is_capped_by_username_column(settings):
    domain = "@" + settings.COURSEHUB_EMAIL_DOMAIN
    longest = "a" * (students.USERNAME_MAX - len(domain)) + domain
    assert len(longest) == 150
    assert students.create_student(_data(email=longest)).username == longest
    with pytest.raises(InvalidInput):
        students.create_student(_data(email="b" + longest))


@pytest.mark.django_db
@pytest.mark.parametrize(
    "overrides",
    [{"age": 16}, {"age": 26}, {"first_name": ""}, {"last_name": "x" * 51}, {"major": "  "}, {"email": "a@b.com"}],
)
def test_create_student_rejects_invalid_fields(overrides):
    with pytest.raises(InvalidInput):
        students.create_student(_data(**overrides))


@pytest.mark.django_db
def test_create_student_with_enrolments(make_course):
    c1, c2 = make_course(), make_course()
    s = students.create_student(_data(enrolled_course_ids=[c1.pk, str(c2.pk)]))
    assert set(Enrolment.objects.filter(student=s).values_list("course_id", flat=True)) == {c1.pk, c2.pk}


@pytest.mark.django_db
def test_update_student_allow_list_and_timestamp(make_course):
    s = students.create_student(_data())
    before = s.profile.updated_at
    course = make_course()
    updated = students.update_student(s.pk, {"first_name": "Janet", "age": 22, "enrolled_course_ids": [course.pk]})
    assert updated.first_name == "Janet"
    assert updated.profile.age == 22
    assert updated.profile.updated_at >= before
    assert list(Enrolment.objects.filter(student=s).values_list("course_id", flat=True)) == [course.pk]

    with pytest.raises(InvalidInput, match="Cannot update field: email"):
        students.update_student(s.pk, {"email": "x@stevens.edu"})
    with pytest.raises(InvalidInput, match="No updates"):
        students.update_student(s.pk, {})
    assert students.find_by_id(s.pk).email == "jane.doe@stevens.edu"


@pytest.mark.django_db
def test_update_and_delete_missing_student():
    with pytest.raises(NotFound):
        students.update_student(999, {"major": "Math"})
    with pytest.raises(NotFound):
        students.delete_student(999)


@pytest.mark.django_db
def test_delete_student():
    s = students.create_student(_data())
    assert students.delete_student(s.pk) == 1
    assert students.find_by_id(s.pk) is None
