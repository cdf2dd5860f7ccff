"""Authorization policy for forum actions.

Every mutation in `forum.services` asks `authorize` (through `require`)
before writing. Stores never compare identities themselves.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from activity.models import Notification
from core.errors import Forbidden
from courses.models import Course, Enrolment
from .models import Question, Response


class Action(str, Enum):
    POST_IN_COURSE = "post_in_course"
    EDIT_QUESTION = "edit_question"
    DELETE_QUESTION = "delete_question"
    EDIT_RESPONSE = "edit_response"
    DELETE_RESPONSE = "delete_response"
    MARK_HELPFUL = "mark_helpful"
    READ_NOTIFICATION = "read_notification"


def _is_poster(actor_id: int, post: Question | Response) -> bool:
    return post.poster_id == actor_id


def _is_question_poster(actor_id: int, response: Response) -> bool:
    return response.question.poster_id == actor_id


def _is_recipient(actor_id: int, notification: Notification) -> bool:
    return notification.recipient_id == actor_id


def _is_enrolled(actor_id: int, course: Course) -> bool:
    return Enrolment.objects.filter(course=course, student_id=actor_id).exists()


# action -> (resource type, rule)
POLICY: dict[Action, tuple[type, Callable[[int, Any], bool]]] = {
    Action.POST_IN_COURSE: (Course, _is_enrolled),
    Action.EDIT_QUESTION: (Question, _is_poster),
    Action.DELETE_QUESTION: (Question, _is_poster),
    Action.EDIT_RESPONSE: (Response, _is_poster),
    Action.DELETE_RESPONSE: (Response, _is_poster),
    Action.MARK_HELPFUL: (Response, _is_question_poster),
    Action.READ_NOTIFICATION: (Notification, _is_recipient),
}


def authorize(action: Action, actor_id: int, resource: Any) -> bool:
    """Return True when `actor_id` may perform `action` on `resource`."""
    resource_type, rule = POLICY[Action(action)]
    if actor_id is None or not isinstance(resource, resource_type):
        return False
    return bool(rule(actor_id, resource))


def require(action: Action, actor_id: int, resource: Any, message: str = "") -> None:
    if not authorize(action, actor_id, resource):
        raise Forbidden(message or f"Not permitted to {Action(action).value.replace('_', ' ')}")
