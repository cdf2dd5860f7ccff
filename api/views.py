"""REST API v1 viewsets.

Views only translate HTTP into calls on `forum.services`; authorization
and validation happen there. Errors are rendered by
`api.exceptions.coursehub_exception_handler`.
"""
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from forum import services
from .permissions import IsStudent
from .serializers import (
    CourseSerializer,
    HelpfulSerializer,
    MyCourseSerializer,
    NotificationFilterSerializer,
    NotificationSerializer,
    QuestionCreateSerializer,
    QuestionSerializer,
    ResponseCreateSerializer,
    ResponseSerializer,
)


def _updates(request) -> dict:
    data = request.data
    return dict(data.items()) if hasattr(data, "items") else {}


class CourseViewSet(viewsets.ViewSet):
    permission_classes = [IsStudent]

    def list(self, request):
        courses = services.my_courses(request.user.id)
        return Response(MyCourseSerializer(courses, many=True).data)

    def retrieve(self, request, pk=None):
        course = services.course_detail(request.user.id, pk)
        return Response(CourseSerializer(course).data)

    @action(detail=True, methods=["get"])
    def questions(self, request, pk=None):
        sort = request.query_params.get("sort", "newest")
        items = services.course_questions(request.user.id, pk, sort)
        return Response(QuestionSerializer(items, many=True, context={"request": request}).data)


class QuestionViewSet(viewsets.ViewSet):
    permission_classes = [IsStudent]

    def create(self, request):
        payload = QuestionCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        question = services.ask_question(
            request.user.id, data["course"], data["title"], data["content"], data["is_anonymous"]
        )
        return Response(QuestionSerializer(question, context={"request": request}).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        question = services.view_question(request.user.id, pk)
        return Response(QuestionSerializer(question, context={"request": request}).data)

    def partial_update(self, request, pk=None):
        question = services.revise_question(request.user.id, pk, _updates(request))
        return Response(QuestionSerializer(question, context={"request": request}).data)

    def destroy(self, request, pk=None):
        removed = services.remove_question(request.user.id, pk)
        return Response({"detail": "Question deleted successfully", "deleted": removed})

    @action(detail=True, methods=["get"])
    def responses(self, request, pk=None):
        sort = request.query_params.get("sort", "newest")
        items = services.question_responses(request.user.id, pk, sort)
        return Response(ResponseSerializer(items, many=True, context={"request": request}).data)


class ResponseViewSet(viewsets.ViewSet):
    permission_classes = [IsStudent]

    def create(self, request):
        payload = ResponseCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        response = services.answer_question(request.user.id, data["question"], data["content"], data["is_anonymous"])
        return Response(ResponseSerializer(response, context={"request": request}).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        response = services.revise_response(request.user.id, pk, _updates(request))
        return Response(ResponseSerializer(response, context={"request": request}).data)

    def destroy(self, request, pk=None):
        deleted = services.remove_response(request.user.id, pk)
        return Response({"detail": "Response deleted successfully", "deleted": deleted})

    @action(detail=True, methods=["patch"])
    def helpful(self, request, pk=None):
        payload = HelpfulSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        response = services.set_helpful(request.user.id, pk, payload.validated_data["is_helpful"])
        return Response(ResponseSerializer(response, context={"request": request}).data)


class NotificationViewSet(viewsets.ViewSet):
    permission_classes = [IsStudent]

    def list(self, request):
        params = NotificationFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        unread_only = params.validated_data["unread_only"]
        items = services.notifications_for(request.user.id, unread_only)
        return Response(NotificationSerializer(items, many=True).data)

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread": services.unread_count(request.user.id)})

    @action(detail=True, methods=["patch"])
    def read(self, request, pk=None):
        notification = services.read_notification(request.user.id, pk)
        return Response(NotificationSerializer(notification).data)

    @action(detail=False, methods=["patch"], url_path="read-all")
    def read_all(self, request):
        count = services.read_all_notifications(request.user.id)
        return Response({"detail": "All notifications marked as read", "count": count})
