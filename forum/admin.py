from django.contrib import admin

from .models import Question, Response


class ResponseInline(admin.TabularInline):
    model = Response
    extra = 0
    fields = ("poster", "content", "is_anonymous", "is_helpful")


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "poster", "is_resolved", "created_at")
    list_filter = ("is_resolved", "is_anonymous")
    search_fields = ("title", "content", "course__code", "poster__email")
    inlines = [ResponseInline]


@admin.register(Response)
class ResponseAdmin(admin.ModelAdmin):
    list_display = ("question", "poster", "is_helpful", "created_at")
    list_filter = ("is_helpful",)
