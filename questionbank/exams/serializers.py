from django.conf import settings
from rest_framework import serializers
from .models import Exam
from .services import AUDIENCES, VERSION_LABELS
from questions.models import Question


class ExamSerializer(serializers.ModelSerializer):
    teacher_username = serializers.CharField(source='teacher.username', read_only=True)
    question_count = serializers.SerializerMethodField()

    class Meta:
        model = Exam
        fields = [
            'id', 'teacher', 'teacher_username', 'title', 'subject', 'grade', 'topics', 'mode',
            'question_ids', 'question_count', 'versions', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_question_count(self, obj):
        return len(obj.question_ids or [])


class ExamListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views"""
    question_count = serializers.SerializerMethodField()

    class Meta:
        model = Exam
        fields = ['id', 'title', 'subject', 'grade', 'topics', 'mode', 'question_count', 'created_at', 'updated_at']

    def get_question_count(self, obj):
        return len(obj.question_ids or [])


class ComposeExamSerializer(serializers.Serializer):
    """Request body of the compose endpoint"""
    title = serializers.CharField(max_length=200)
    subject = serializers.CharField(max_length=100)
    grade = serializers.CharField(max_length=50)
    topics = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    topic = serializers.CharField(required=False, allow_blank=True)
    qty = serializers.IntegerField(min_value=1)
    difficulty = serializers.ChoiceField(choices=Question.Difficulty.choices, required=False, allow_blank=True)
    types = serializers.ListField(
        child=serializers.ChoiceField(choices=Question.QuestionType.choices),
        required=False,
        allow_empty=False,
    )

    def validate_qty(self, value):
        max_questions = getattr(settings, 'EXAMS_MAX_QUESTIONS', 50)
        if value > max_questions:
            raise serializers.ValidationError(f"qty must be between 1 and {max_questions}")
        return value

    def validate(self, attrs):
        # A single ``topic`` is accepted for older clients
        topics = attrs.get('topics')
        if topics is None:
            topic = (attrs.get('topic') or '').strip()
            topics = [topic] if topic else []
        topics = [t.strip() for t in topics if t.strip()]
        if not topics:
            raise serializers.ValidationError({'topics': 'select at least 1 topic'})
        attrs['topics'] = topics
        attrs.pop('topic', None)
        return attrs


class ReplacementSerializer(serializers.Serializer):
    old_question_id = serializers.IntegerField()
    new_question_id = serializers.IntegerField()


class ReplaceQuestionsSerializer(serializers.Serializer):
    """Request body of the replace endpoint"""
    replacements = ReplacementSerializer(many=True)
    regenerate_options = serializers.BooleanField(default=True)


class RenderQuerySerializer(serializers.Serializer):
    # Unknown versions are reported by the renderer as not found
    version = serializers.CharField(max_length=10, default=VERSION_LABELS[0])
    audience = serializers.ChoiceField(choices=AUDIENCES, default='student')
