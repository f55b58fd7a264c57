import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Exam
from .permissions import IsTeacher, is_teacher
from .serializers import (
    ComposeExamSerializer,
    ExamListSerializer,
    ExamSerializer,
    RenderQuerySerializer,
    ReplaceQuestionsSerializer,
)
from .services import ExamComposer, ExamFilters, ExamRenderer, ExamServiceError, QuestionReplacer


logger = logging.getLogger(__name__)

# Most recent exams returned by the list endpoint
LIST_LIMIT = 200


def error_response(error):
    return Response(error.as_dict(), status=error.status_code)


def invalid_request(serializer):
    """Serializer errors in the same shape as service errors"""
    return Response(
        {'error': 'VALIDATION_ERROR', 'message': 'invalid request', **serializer.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


class ExamViewSet(mixins.DestroyModelMixin, viewsets.ReadOnlyModelViewSet):
    """Compose, inspect, render, edit and delete A/B exams"""
    queryset = Exam.objects.select_related('teacher').all()
    pagination_class = None
    lookup_value_regex = r'\d+'

    def get_serializer_class(self):
        if self.action == 'list':
            return ExamListSerializer
        return ExamSerializer

    def get_permissions(self):
        # Students may render exams; everything else is for teachers
        if self.action == 'render_version':
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsTeacher()]

    def get_queryset(self):
        user = self.request.user
        if not user.is_authenticated:
            return Exam.objects.none()
        return Exam.objects.select_related('teacher').filter(teacher=user).order_by('-created_at', '-id')

    def list(self, request, *args, **kwargs):
        queryset = self.get_queryset()
        total = queryset.count()
        items = ExamListSerializer(queryset[:LIST_LIMIT], many=True).data
        return Response({'total': total, 'items': items})

    def perform_destroy(self, instance):
        logger.info("Deleting exam %s (%s)", instance.pk, instance.title)
        instance.delete()

    @action(detail=False, methods=['post'])
    def compose(self, request):
        """Compose a new exam with versions A and B from the teacher's bank"""
        serializer = ComposeExamSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer)
        data = serializer.validated_data

        filters = ExamFilters(
            subject=data['subject'],
            grade=data['grade'],
            topics=data['topics'],
            difficulty=data.get('difficulty'),
            types=data.get('types'),
        )
        try:
            exam = ExamComposer().compose(filters, data['qty'], request.user, title=data['title'])
        except ExamServiceError as e:
            return error_response(e)

        return Response(ExamSerializer(exam).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get'], url_path='render')
    def render_version(self, request, pk=None):
        """Render one version for a student (no answers) or the owning teacher (answer key)"""
        params = request.query_params.copy()
        # ``mode`` is the older name of ``audience``
        if 'audience' not in params and 'mode' in params:
            params['audience'] = params['mode']
        query = RenderQuerySerializer(data=params)
        if not query.is_valid():
            return invalid_request(query)
        audience = query.validated_data['audience']

        exam = Exam.objects.filter(pk=pk).first()
        if not exam:
            return Response({'error': 'NOT_FOUND', 'message': 'Exam not found'}, status=status.HTTP_404_NOT_FOUND)

        if audience == 'teacher' and not (is_teacher(request.user) and exam.teacher_id == request.user.id):
            return Response(
                {'error': 'FORBIDDEN', 'message': 'Only the exam owner can see the answer key'},
                status=status.HTTP_403_FORBIDDEN
            )

        try:
            rendered = ExamRenderer().render(exam, query.validated_data['version'], audience)
        except ExamServiceError as e:
            return error_response(e)
        return Response(rendered)

    @action(detail=True, methods=['patch'], url_path='replace')
    def replace_questions(self, request, pk=None):
        """Swap questions in place, keeping every other slot of both versions"""
        exam = self.get_object()
        serializer = ReplaceQuestionsSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer)

        try:
            exam = QuestionReplacer().replace(
                exam,
                serializer.validated_data['replacements'],
                regenerate_options=serializer.validated_data['regenerate_options'],
            )
        except ExamServiceError as e:
            return error_response(e)

        return Response(ExamSerializer(exam).data)
