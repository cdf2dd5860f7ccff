"""Forum services: the operations the API calls on behalf of a student.

Each function receives the already-authenticated `actor_id`, re-reads the
entities it touches, checks `forum.permissions` and only then calls the
stores. Mutations lock the row they authorize against inside the same
transaction as the write.

Notification fan-out runs after the primary write has been stored. A
failure there is logged and never reaches the caller.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.conf import settings
from django.db import transaction

from activity import notifications
from activity.models import Notification
from core.errors import NotFound
from core.validation import check_update_keys, parse_id
from courses import registry
from courses.models import Course
from . import questions, responses
from .models import Question, Response
from .permissions import Action, require

logger = logging.getLogger(__name__)


def _lock_question(pk: int) -> Question:
    question = Question.objects.select_for_update().filter(pk=pk).first()
    if question is None:
        raise NotFound("Question not found")
    return question


def _lock_response(pk: int) -> Response:
    response = Response.objects.select_for_update(of=("self",)).select_related("question").filter(pk=pk).first()
    if response is None:
        raise NotFound("Response not found")
    return response


def _check_can_post(actor: int, course: Course) -> None:
    if settings.COURSEHUB_REQUIRE_ENROLMENT:
        require(Action.POST_IN_COURSE, actor, course, "Enrol in this course to post")


# --- Courses -----------------------------------------------------------------

def my_courses(actor_id: Any) -> list[Course]:
    """Courses the student takes, each with `new_question_count` attached."""
    courses = registry.list_for_student(actor_id)
    counts = registry.count_recent_questions([c.pk for c in courses]) if courses else {}
    for course in courses:
        course.new_question_count = counts.get(course.pk, 0)
    return courses


def course_detail(actor_id: Any, course_id: Any) -> Course:
    parse_id(actor_id, "student")
    course = registry.get_course(course_id)
    if course is None:
        raise NotFound("Course not found")
    return course


def course_questions(actor_id: Any, course_id: Any, sort: str = questions.DEFAULT_SORT) -> list[Question]:
    course = course_detail(actor_id, course_id)
    return questions.list_for_course(course.pk, sort)


# --- Questions ---------------------------------------------------------------

def ask_question(actor_id: Any, course_id: Any, title: Any, content: Any, is_anonymous: Any = False) -> Question:
    actor = parse_id(actor_id, "student")
    course = registry.get_course(course_id)
    if course is None:
        raise NotFound("Course not found")
    _check_can_post(actor, course)
    question = questions.create_question(course.pk, actor, title, content, is_anonymous)
    logger.info("Student %s asked question %s in course %s", actor, question.pk, course.pk)
    return question


def view_question(actor_id: Any, question_id: Any) -> Question:
    parse_id(actor_id, "student")
    question = questions.get_question(question_id)
    if question is None:
        raise NotFound("Question not found")
    return question


def revise_question(actor_id: Any, question_id: Any, updates: dict) -> Question:
    """Edit title/content or toggle resolved; poster only."""
    actor = parse_id(actor_id, "student")
    pk = parse_id(question_id, "question")
    with transaction.atomic():
        question = _lock_question(pk)
        require(Action.EDIT_QUESTION, actor, question, "You can only edit your own questions")
        return questions.update_question(pk, updates)


def remove_question(actor_id: Any, question_id: Any) -> dict[str, int]:
    """Delete a question with its responses and notifications, all or nothing."""
    actor = parse_id(actor_id, "student")
    pk = parse_id(question_id, "question")
    with transaction.atomic():
        question = _lock_question(pk)
        require(Action.DELETE_QUESTION, actor, question, "You can only delete your own questions")
        removed = {
            "responses": responses.delete_for_question(pk),
            "notifications": notifications.delete_for_question(pk),
        }
        removed["questions"] = questions.delete_question(pk)
    logger.info("Student %s deleted question %s (%s)", actor, pk, removed)
    return removed


# --- Responses ---------------------------------------------------------------

def question_responses(actor_id: Any, question_id: Any, sort: str = responses.DEFAULT_SORT) -> list[Response]:
    question = view_question(actor_id, question_id)
    return responses.list_for_question(question.pk, sort)


def answer_question(actor_id: Any, question_id: Any, content: Any, is_anonymous: Any = False) -> Response:
    actor = parse_id(actor_id, "student")
    question = view_question(actor, question_id)
    _check_can_post(actor, question.course)
    with transaction.atomic():
        response = responses.create_response(question.pk, actor, content, is_anonymous)
    if question.poster_id != actor:
        _notify_new_response(question, response)
    return response


def revise_response(actor_id: Any, response_id: Any, updates: dict) -> Response:
    """Edit a response.

    `content` belongs to the response's poster; `is_helpful` belongs to the
    poster of the question. Moving a response into helpful notifies its
    poster unless they marked it themselves.
    """
    actor = parse_id(actor_id, "student")
    pk = parse_id(response_id, "response")
    check_update_keys(updates, responses.UPDATABLE_FIELDS)
    with transaction.atomic():
        response = _lock_response(pk)
        if "is_helpful" in updates:
            require(Action.MARK_HELPFUL, actor, response, "Only the question poster can mark responses helpful")
        if set(updates) - {"is_helpful"}:
            require(Action.EDIT_RESPONSE, actor, response, "You can only edit your own responses")
        was_helpful = response.is_helpful
        updated = responses.update_response(pk, updates)
    if updated.is_helpful and not was_helpful and response.poster_id != actor:
        _notify_helpful(response.question, updated, actor)
    return updated


def set_helpful(actor_id: Any, response_id: Any, is_helpful: Any) -> Response:
    return revise_response(actor_id, response_id, {"is_helpful": is_helpful})


def remove_response(actor_id: Any, response_id: Any) -> int:
    actor = parse_id(actor_id, "student")
    pk = parse_id(response_id, "response")
    with transaction.atomic():
        response = _lock_response(pk)
        require(Action.DELETE_RESPONSE, actor, response, "You can only delete your own responses")
        return responses.delete_response(pk)


# --- Notifications -----------------------------------------------------------

def notifications_for(actor_id: Any, unread_only: bool = True) -> list[Notification]:
    return notifications.list_for_recipient(actor_id, unread_only)


def unread_count(actor_id: Any) -> int:
    return notifications.count_unread(actor_id)


def read_notification(actor_id: Any, notification_id: Any) -> Notification:
    actor = parse_id(actor_id, "student")
    notification = notifications.get_notification(notification_id)
    if notification is None:
        raise NotFound("Notification not found")
    require(Action.READ_NOTIFICATION, actor, notification, "You can only read your own notifications")
    return notifications.mark_read(notification.pk)


def read_all_notifications(actor_id: Any) -> int:
    return notifications.mark_all_read(actor_id)


# --- Fan-out -----------------------------------------------------------------

def _notify_new_response(question: Question, response: Response) -> Optional[Notification]:
    try:
        with transaction.atomic():
            responder = "Someone" if response.is_anonymous else response.poster.first_name
            return notifications.create_notification(
                recipient_id=question.poster_id,
                question_id=question.pk,
                sender_id=response.poster_id,
                type=Notification.TYPE_NEW_RESPONSE,
                message=f'{responder} replied to your question: "{question.title}"',
            )
    except Exception:
        logger.exception("Failed to create new_response notification for question %s", question.pk)
        return None


def _notify_helpful(question: Question, response: Response, actor: int) -> Optional[Notification]:
    try:
        with transaction.atomic():
            return notifications.create_notification(
                recipient_id=response.poster_id,
                question_id=question.pk,
                sender_id=actor,
                type=Notification.TYPE_HELPFUL_MARK,
                message=f'Your response to "{question.title}" was marked as helpful!',
            )
    except Exception:
        logger.exception("Failed to create helpful_mark notification for response %s", response.pk)
        return None
