"""Serializers for REST API v1.

Output serializers hide the poster id of anonymous posts from everyone
but the poster; `poster_name` is already masked by the stores.
"""
from __future__ import annotations

from rest_framework import serializers

from activity.models import Notification
from courses.models import Course
from forum.models import Question, Response
from forum.questions import CONTENT_MAX as QUESTION_CONTENT_MAX, TITLE_MAX
from forum.responses import CONTENT_MAX as RESPONSE_CONTENT_MAX


class CourseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ("id", "code", "name", "section", "department", "instructor_name", "instructor_email", "term", "created_at")
        read_only_fields = fields


class MyCourseSerializer(CourseSerializer):
    new_question_count = serializers.IntegerField(read_only=True)

    class Meta(CourseSerializer.Meta):
        fields = CourseSerializer.Meta.fields + ("new_question_count",)
        read_only_fields = fields


class PostSerializerMixin(serializers.Serializer):
    poster = serializers.SerializerMethodField()
    poster_name = serializers.CharField(read_only=True)
    is_mine = serializers.SerializerMethodField()

    def _viewer_id(self):
        request = self.context.get("request")
        return getattr(getattr(request, "user", None), "id", None)

    def get_poster(self, obj) -> int | None:
        if obj.is_anonymous and obj.poster_id != self._viewer_id():
            return None
        return obj.poster_id

    def get_is_mine(self, obj) -> bool:
        return obj.poster_id == self._viewer_id()


class QuestionSerializer(PostSerializerMixin, serializers.ModelSerializer):
    class Meta:
        model = Question
        fields = (
            "id",
            "course",
            "poster",
            "poster_name",
            "is_mine",
            "title",
            "content",
            "is_anonymous",
            "is_resolved",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ResponseSerializer(PostSerializerMixin, serializers.ModelSerializer):
    class Meta:
        model = Response
        fields = (
            "id",
            "question",
            "poster",
            "poster_name",
            "is_mine",
            "content",
            "is_anonymous",
            "is_helpful",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ("id", "type", "question", "message", "is_read", "created_at")
        read_only_fields = fields


class QuestionCreateSerializer(serializers.Serializer):
    course = serializers.IntegerField(min_value=1)
    title = serializers.CharField(max_length=TITLE_MAX)
    content = serializers.CharField(max_length=QUESTION_CONTENT_MAX)
    is_anonymous = serializers.BooleanField(required=False, default=False)


class ResponseCreateSerializer(serializers.Serializer):
    question = serializers.IntegerField(min_value=1)
    content = serializers.CharField(max_length=RESPONSE_CONTENT_MAX)
    is_anonymous = serializers.BooleanField(required=False, default=False)


class HelpfulSerializer(serializers.Serializer):
    is_helpful = serializers.BooleanField()


class NotificationFilterSerializer(serializers.Serializer):
    """Query parameters of the notification list."""

    unread_only = serializers.BooleanField(required=False, default=True)
