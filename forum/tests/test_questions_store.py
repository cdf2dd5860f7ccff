from __future__ import annotations

import datetime as dt

import pytest
from freezegun import freeze_time

from core.errors import InvalidInput, NotFound
from forum import questions
from forum.models import ANONYMOUS, Question

T0 = dt.datetime(2025, 1, 1, 9, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def course(make_course):
    return make_course()


@pytest.fixture
def asker(make_student, course):
    return make_student(first_name="Ada", last_name="Byron", courses=[course])


@pytest.mark.django_db
def test_create_question_starts_open_with_poster_name(course, asker):
    q = questions.create_question(course.pk, asker.pk, "  How do I...  ", "Some content")
    assert q.title == "How do I..."
    assert q.is_resolved is False
    assert q.is_anonymous is False
    assert q.poster_name == "Ada Byron"
    assert q.created_at is not None and q.updated_at is not None


@pytest.mark.django_db
def test_anonymous_question_masks_poster_name(course, asker):
    q = questions.create_question(course.pk, asker.pk, "Title", "Body", is_anonymous=True)
    assert questions.get_question(q.pk).poster_name == ANONYMOUS
    assert [x.poster_name for x in questions.list_for_course(course.pk)] == [ANONYMOUS]


@pytest.mark.django_db
@pytest.mark.parametrize(
    "title,content",
    [("", "body"), ("t" * 201, "body"), ("title", ""), ("title", "c" * 2001), (None, "body")],
)
def test_create_question_validates_lengths(course, asker, title, content):
    with pytest.raises(InvalidInput):
        questions.create_question(course.pk, asker.pk, title, content)
    assert Question.objects.count() == 0


@pytest.mark.django_db
def test_create_question_rejects_bad_references(course, asker):
    with pytest.raises(InvalidInput):
        questions.create_question("zzz", asker.pk, "t", "c")
    with pytest.raises(NotFound):
        questions.create_question(999999, asker.pk, "t", "c")
    with pytest.raises(InvalidInput):
        questions.create_question(course.pk, asker.pk, "t", "c", is_anonymous="yes")


@pytest.mark.django_db
def test_get_question_missing_returns_none():
    assert questions.get_question(123456) is None


@pytest.mark.django_db
def test_list_for_course_sort_options(course, asker, make_course):
    ids = []
    for hours, title in ((0, "first"), (1, "second"), (2, "third")):
        with freeze_time(T0 + dt.timedelta(hours=hours)):
            ids.append(questions.create_question(course.pk, asker.pk, title, "body").pk)
    questions.update_question(ids[1], {"is_resolved": True})
    # A question elsewhere never leaks into the listing
    questions.create_question(make_course().pk, asker.pk, "elsewhere", "body")

    def listed(sort):
        return [q.pk for q in questions.list_for_course(course.pk, sort)]

    assert listed("oldest") == ids
    assert listed("newest") == ids[::-1]
    assert listed("answered") == [ids[1]]
    assert listed("unanswered") == [ids[2], ids[0]]
    assert len(listed("answered")) + len(listed("unanswered")) == len(listed("newest"))
    assert listed("bogus") == listed("newest")


@pytest.mark.django_db
def test_update_question_fields_and_timestamp(course, asker):
    with freeze_time(T0):
        q = questions.create_question(course.pk, asker.pk, "Title", "Body")
    with freeze_time(T0 + dt.timedelta(minutes=5)):
        updated = questions.update_question(q.pk, {"title": "New", "is_resolved": True})
    assert updated.title == "New"
    assert updated.content == "Body"
    assert updated.is_resolved is True
    assert updated.updated_at > q.updated_at
    assert updated.poster_name == "Ada Byron"

    reopened = questions.update_question(q.pk, {"is_resolved": False})
    assert reopened.is_resolved is False


@pytest.mark.django_db
@pytest.mark.parametrize(
    "updates",
    [{}, {"poster_id": 5}, {"course_id": 1}, {"title": "ok", "is_anonymous": True}, {"is_resolved": "true"}, {"content": ""}],
)
def test_update_question_rejects_bad_updates_without_changes(course, asker, updates):
    q = questions.create_question(course.pk, asker.pk, "Title", "Body")
    with pytest.raises(InvalidInput):
        questions.update_question(q.pk, updates)
    fresh = Question.objects.get(pk=q.pk)
    assert (fresh.title, fresh.content, fresh.is_resolved, fresh.is_anonymous, fresh.poster_id) == (
        "Title",
        "Body",
        False,
        False,
        asker.pk,
    )


@pytest.mark.django_db
def test_update_and_delete_missing_question():
    with pytest.raises(NotFound):
        questions.update_question(424242, {"title": "x"})
    with pytest.raises(NotFound):
        questions.delete_question(424242)


@pytest.mark.django_db
def test_delete_question(course, asker):
    q = questions.create_question(course.pk, asker.pk, "Title", "Body")
    assert questions.delete_question(q.pk) == 1
    assert questions.get_question(q.pk) is None
