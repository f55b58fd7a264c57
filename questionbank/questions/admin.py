from django.contrib import admin
from .models import Question


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ['id', 'question_type', 'short_statement', 'subject', 'grade', 'topic', 'difficulty', 'teacher', 'times_used']
    list_filter = ['question_type', 'difficulty', 'subject', 'grade']
    search_fields = ['statement', 'topic']
    raw_id_fields = ['teacher', 'deleted_by']

    def short_statement(self, obj):
        return obj.statement[:50] + '...' if len(obj.statement) > 50 else obj.statement
    short_statement.short_description = 'Question'
