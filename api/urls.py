"""API routes for Coursehub: versioned REST endpoints and the OpenAPI schema."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from drf_spectacular.views import SpectacularAPIView

from .views import CourseViewSet, NotificationViewSet, QuestionViewSet, ResponseViewSet

router = DefaultRouter()
router.register(r"api/v1/courses", CourseViewSet, basename="courses")
router.register(r"api/v1/questions", QuestionViewSet, basename="questions")
router.register(r"api/v1/responses", ResponseViewSet, basename="responses")
router.register(r"api/v1/notifications", NotificationViewSet, basename="notifications")

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("", include(router.urls)),
]
