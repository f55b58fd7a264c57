from django.contrib.auth.models import User
from rest_framework import serializers
from exams.permissions import ROLE_STUDENT, ROLE_TEACHER, is_teacher
from .models import Question


class QuestionListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views"""
    short_statement = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = [
            'id', 'subject', 'grade', 'topic', 'difficulty', 'question_type',
            'short_statement', 'times_used', 'last_used', 'updated_at'
        ]

    def get_short_statement(self, obj):
        return obj.statement[:200] + '...' if len(obj.statement) > 200 else obj.statement


class QuestionDetailSerializer(serializers.ModelSerializer):
    teacher_username = serializers.CharField(source='teacher.username', read_only=True)
    is_deleted = serializers.BooleanField(read_only=True)

    class Meta:
        model = Question
        fields = [
            'id', 'teacher', 'teacher_username', 'subject', 'grade', 'topic', 'difficulty',
            'question_type', 'statement', 'options', 'correct_index', 'expected_answer', 'rubric',
            'times_used', 'last_used', 'is_deleted', 'created_at', 'updated_at'
        ]
        read_only_fields = ['teacher', 'times_used', 'last_used', 'created_at', 'updated_at']

    def validate(self, attrs):
        def current(field, default=None):
            if field in attrs:
                return attrs[field]
            return getattr(self.instance, field, default) if self.instance else default

        question_type = current('question_type')
        options = current('options', []) or []

        if question_type == Question.QuestionType.MULTIPLE_CHOICE:
            if not isinstance(options, list) or len(options) < 2:
                raise serializers.ValidationError({'options': 'MCQ options must be a list with at least 2 items'})
            if any(not isinstance(o, str) or not o.strip() for o in options):
                raise serializers.ValidationError({'options': 'MCQ options must be non-empty strings'})
            correct_index = current('correct_index')
            if correct_index is None or not 0 <= correct_index < len(options):
                raise serializers.ValidationError({'correct_index': 'MCQ correct_index is invalid'})
            attrs['expected_answer'] = ''
            attrs['rubric'] = ''

        elif question_type == Question.QuestionType.DISCURSIVE:
            expected = current('expected_answer', '') or ''
            if not expected.strip():
                raise serializers.ValidationError({'expected_answer': 'DISC expected_answer is required'})
            attrs['options'] = []
            attrs['correct_index'] = None

        return attrs


class UserSerializer(serializers.ModelSerializer):
    """Roster entry shown on the teacher's students page"""
    name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'name', 'email', 'role', 'created_at']

    def get_name(self, obj):
        return obj.get_full_name() or obj.username

    def get_role(self, obj):
        # The roster is filtered by role, so the view passes it in
        role = self.context.get('role')
        if role:
            return role
        return ROLE_TEACHER if is_teacher(obj) else ROLE_STUDENT
