from django.contrib import admin

from .models import StudentProfile


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "major", "age", "created_at")
    search_fields = ("user__email", "user__first_name", "user__last_name", "major")
