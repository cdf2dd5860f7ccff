from __future__ import annotations

import pytest
from django.test import Client


@pytest.fixture
def classroom(make_course, make_student):
    course = make_course()
    alice = make_student(first_name="Alice", courses=[course])
    bob = make_student(first_name="Bob", courses=[course])
    return course, alice, bob


def client_for(student):
    c = Client()
    assert c.login(username=student.email, password="pw")
    return c


@pytest.mark.django_db
def test_schema_available():
    r = Client().get("/api/schema/")
    assert r.status_code == 200


@pytest.mark.django_db
@pytest.mark.security
def test_anonymous_requests_are_rejected():
    c = Client()
    for url in ("/api/v1/courses/", "/api/v1/notifications/", "/api/v1/notifications/unread-count/"):
        assert c.get(url).status_code == 403


@pytest.mark.django_db
@pytest.mark.security
def test_user_without_student_profile_is_rejected(django_user_model):
    django_user_model.objects.create_user(username="staff", password="pw")
    c = Client()
    assert c.login(username="staff", password="pw")
    assert c.get("/api/v1/courses/").status_code == 403


@pytest.mark.django_db
def test_my_courses_lists_enrolled_courses_with_counts(classroom, make_course):
    course, alice, _ = classroom
    make_course()  # not enrolled
    r = client_for(alice).get("/api/v1/courses/")
    assert r.status_code == 200
    body = r.json()
    assert [c["id"] for c in body] == [course.pk]
    assert body[0]["new_question_count"] == 0


@pytest.mark.django_db
def test_question_thread_over_http(classroom):
    course, alice, bob = classroom
    ca, cb = client_for(alice), client_for(bob)

    r = ca.post(
        "/api/v1/questions/",
        {"course": course.pk, "title": "Lab 2", "content": "Where is the dataset?", "is_anonymous": True},
        content_type="application/json",
    )
    assert r.status_code == 201
    question = r.json()
    assert question["poster_name"] == "Anonymous"
    assert question["is_mine"] is True
    assert question["poster"] == alice.pk

    seen_by_bob = cb.get(f"/api/v1/questions/{question['id']}/").json()
    assert seen_by_bob["poster"] is None
    assert seen_by_bob["is_mine"] is False

    r = cb.post(
        "/api/v1/responses/",
        {"question": question["id"], "content": "On the course page"},
        content_type="application/json",
    )
    assert r.status_code == 201
    response_id = r.json()["id"]

    assert ca.get("/api/v1/notifications/unread-count/").json() == {"unread": 1}
    r = ca.patch(f"/api/v1/responses/{response_id}/helpful/", {"is_helpful": True}, content_type="application/json")
    assert r.status_code == 200
    assert r.json()["is_helpful"] is True
    assert cb.get("/api/v1/notifications/unread-count/").json() == {"unread": 1}

    listed = cb.get(f"/api/v1/questions/{question['id']}/responses/?sort=oldest").json()
    assert [x["id"] for x in listed] == [response_id]

    r = ca.patch(f"/api/v1/questions/{question['id']}/", {"is_resolved": True}, content_type="application/json")
    assert r.json()["is_resolved"] is True
    answered = cb.get(f"/api/v1/courses/{course.pk}/questions/?sort=answered").json()
    assert [x["id"] for x in answered] == [question["id"]]

    r = ca.delete(f"/api/v1/questions/{question['id']}/")
    assert r.status_code == 200
    assert r.json()["deleted"] == {"responses": 1, "notifications": 2, "questions": 1}
    assert ca.get(f"/api/v1/questions/{question['id']}/").status_code == 404


@pytest.mark.django_db
def test_notifications_read_flow(classroom):
    course, alice, bob = classroom
    ca, cb = client_for(alice), client_for(bob)
    qid = ca.post(
        "/api/v1/questions/", {"course": course.pk, "title": "T", "content": "C"}, content_type="application/json"
    ).json()["id"]
    cb.post("/api/v1/responses/", {"question": qid, "content": "R1"}, content_type="application/json")
    cb.post("/api/v1/responses/", {"question": qid, "content": "R2"}, content_type="application/json")

    unread = ca.get("/api/v1/notifications/").json()
    assert len(unread) == 2
    assert unread[0]["type"] == "new_response"

    # Someone else's notification
    assert cb.patch(f"/api/v1/notifications/{unread[0]['id']}/read/").status_code == 403

    r = ca.patch(f"/api/v1/notifications/{unread[0]['id']}/read/")
    assert r.status_code == 200 and r.json()["is_read"] is True

    r = ca.patch("/api/v1/notifications/read-all/")
    assert r.json()["count"] == 1
    assert ca.patch("/api/v1/notifications/read-all/").json()["count"] == 0
    assert ca.get("/api/v1/notifications/").json() == []
    assert len(ca.get("/api/v1/notifications/?unread_only=false").json()) == 2


@pytest.mark.django_db
def test_unread_only_parses_like_request_booleans(classroom):
    course, alice, bob = classroom
    ca, cb = client_for(alice), client_for(bob)
    qid = ca.post(
        "/api/v1/questions/", {"course": course.pk, "title": "T", "content": "C"}, content_type="application/json"
    ).json()["id"]
    cb.post("/api/v1/responses/", {"question": qid, "content": "R"}, content_type="application/json")
    ca.patch("/api/v1/notifications/read-all/")

    assert ca.get("/api/v1/notifications/").json() == []
    for value in ("off", "0", "False", "no"):
        assert len(ca.get("/api/v1/notifications/", {"unread_only": value}).json()) == 1
    assert ca.get("/api/v1/notifications/", {"unread_only": "on"}).json() == []
    assert ca.get("/api/v1/notifications/", {"unread_only": "maybe"}).status_code == 400
