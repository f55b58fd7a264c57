from django.contrib import admin
from .models import Exam


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'subject', 'grade', 'mode', 'question_count', 'teacher', 'created_at']
    list_filter = ['mode', 'subject', 'grade']
    search_fields = ['title']
    raw_id_fields = ['teacher']
    readonly_fields = ['question_ids', 'versions', 'created_at', 'updated_at']

    def question_count(self, obj):
        return len(obj.question_ids or [])
    question_count.short_description = 'Questions'
