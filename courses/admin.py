from django.contrib import admin

from .models import Course, Enrolment


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "section", "term", "instructor_name")
    list_filter = ("term", "department")
    search_fields = ("code", "name", "instructor_name")


@admin.register(Enrolment)
class EnrolmentAdmin(admin.ModelAdmin):
    list_display = ("course", "student", "created_at")
    search_fields = ("course__code", "student__email")
