"""URL routing for Coursehub.

The admin plus the REST API (see `api.urls`).
"""
from django.contrib import admin
from django.urls import include, path


urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("api.urls")),
]
