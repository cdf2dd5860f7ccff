"""Activity models: per-student notifications about forum activity."""
from __future__ import annotations

from django.conf import settings
from django.db import models


class Notification(models.Model):
    TYPE_NEW_RESPONSE = "new_response"
    TYPE_HELPFUL_MARK = "helpful_mark"
    TYPE_CHOICES = (
        (TYPE_NEW_RESPONSE, "New response"),
        (TYPE_HELPFUL_MARK, "Helpful mark"),
    )

    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="notifications_sent")
    question = models.ForeignKey("forum.Question", on_delete=models.CASCADE, related_name="notifications")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    message = models.CharField(max_length=300)
    created_at = models.DateTimeField(auto_now_add=True)
    is_read = models.BooleanField(default=False, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.recipient_id}:{self.type}:{self.message[:20]}"
