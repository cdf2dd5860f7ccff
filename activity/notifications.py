"""Notification engine: storage and read state for notifications.

Notifications are pull-based. They are written only by the forum
services as a side effect of new responses and helpful marks, and
removed only when their question is deleted.
"""
from __future__ import annotations

from typing import Any, Optional

from django.contrib.auth.models import User

from core.errors import InvalidInput, NotFound
from core.validation import parse_id, validate_string
from forum.models import Question
from .models import Notification

TYPES = {choice for choice, _ in Notification.TYPE_CHOICES}


def create_notification(recipient_id: Any, question_id: Any, sender_id: Any, type: Any, message: Any) -> Notification:
    """Store a pre-rendered notification; it always starts unread."""
    recipient_pk = parse_id(recipient_id, "recipient")
    question_pk = parse_id(question_id, "question")
    sender_pk = parse_id(sender_id, "sender")
    if type not in TYPES:
        raise InvalidInput(f"Invalid notification type: {type}")
    message = validate_string(message, "Message", 1, 300)
    found = set(User.objects.filter(pk__in=(recipient_pk, sender_pk)).values_list("pk", flat=True))
    if recipient_pk not in found:
        raise InvalidInput("Invalid recipient ID")
    if sender_pk not in found:
        raise InvalidInput("Invalid sender ID")
    if not Question.objects.filter(pk=question_pk).exists():
        raise InvalidInput("Invalid question ID")
    return Notification.objects.create(
        recipient_id=recipient_pk,
        question_id=question_pk,
        sender_id=sender_pk,
        type=type,
        message=message,
        is_read=False,
    )


def get_notification(notification_id: Any) -> Optional[Notification]:
    return Notification.objects.filter(pk=parse_id(notification_id, "notification")).first()


def list_for_recipient(student_id: Any, unread_only: bool = True) -> list[Notification]:
    qs = Notification.objects.filter(recipient_id=parse_id(student_id, "student"))
    if unread_only:
        qs = qs.filter(is_read=False)
    return list(qs.order_by("-created_at", "-id"))


def mark_read(notification_id: Any) -> Notification:
    """Mark one notification read. Repeating the call is harmless."""
    pk = parse_id(notification_id, "notification")
    if not Notification.objects.filter(pk=pk).update(is_read=True):
        raise NotFound("Notification not found")
    return Notification.objects.get(pk=pk)


def mark_all_read(recipient_id: Any) -> int:
    """Returns how many notifications actually changed (0 when none were unread)."""
    pk = parse_id(recipient_id, "recipient")
    return Notification.objects.filter(recipient_id=pk, is_read=False).update(is_read=True)


def count_unread(student_id: Any) -> int:
    return Notification.objects.filter(recipient_id=parse_id(student_id, "student"), is_read=False).count()


def delete_for_question(question_id: Any) -> int:
    pk = parse_id(question_id, "question")
    deleted, _ = Notification.objects.filter(question_id=pk).delete()
    return deleted
