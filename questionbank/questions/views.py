from django.conf import settings
from django.contrib.auth.models import User
from django.db.models import Q
from rest_framework import mixins, viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from exams.permissions import ROLE_STUDENT, ROLE_TEACHER, ROLES, IsTeacher
from .models import Question
from .serializers import QuestionListSerializer, QuestionDetailSerializer, UserSerializer


class QuestionViewSet(viewsets.ModelViewSet):
    queryset = Question.objects.all()
    permission_classes = [IsAuthenticated, IsTeacher]
    pagination_class = None  # The compose screen needs the whole filtered bank
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['statement', 'topic']
    ordering_fields = ['created_at', 'updated_at', 'difficulty', 'times_used']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return QuestionListSerializer
        return QuestionDetailSerializer

    def get_queryset(self):
        user = self.request.user
        if not user.is_authenticated:
            return Question.objects.none()

        queryset = Question.objects.select_related('teacher').filter(teacher=user)

        # Check if we're viewing trash
        if self.request.query_params.get('trash') == 'true':
            queryset = queryset.filter(deleted_at__isnull=False)
        else:
            queryset = queryset.filter(deleted_at__isnull=True)

        for param, field in [
            ('subject', 'subject'),
            ('grade', 'grade'),
            ('topic', 'topic'),
            ('difficulty', 'difficulty'),
            ('type', 'question_type'),
        ]:
            value = (self.request.query_params.get(param) or '').strip()
            if value:
                queryset = queryset.filter(**{field: value})

        return queryset

    def perform_create(self, serializer):
        serializer.save(teacher=self.request.user)

    def destroy(self, request, *args, **kwargs):
        """Soft delete instead of hard delete"""
        question = self.get_object()
        question.soft_delete(user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        """Restore a soft-deleted question from trash"""
        question = Question.objects.filter(pk=pk, teacher=request.user).first()
        if not question:
            return Response({'error': 'Question not found'}, status=status.HTTP_404_NOT_FOUND)
        if not question.deleted_at:
            return Response({'error': 'Question is not in trash'}, status=status.HTTP_400_BAD_REQUEST)
        question.restore()
        return Response(QuestionDetailSerializer(question).data)

    @action(detail=False, methods=['get'])
    def topics(self, request):
        """Distinct topics of the teacher's bank for a subject and grade"""
        subject = (request.query_params.get('subject') or '').strip()
        grade = (request.query_params.get('grade') or '').strip()
        if not subject or not grade:
            return Response({'error': 'subject and grade are required'}, status=status.HTTP_400_BAD_REQUEST)

        topics = Question.objects.filter(
            teacher=request.user, subject=subject, grade=grade, deleted_at__isnull=True
        ).exclude(topic='').values_list('topic', flat=True).distinct()

        items = sorted({t.strip() for t in topics if t.strip()})
        return Response({'items': items})


class UserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Students (default) or teachers, newest first; ``?role=STUDENT|TEACHER``"""
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsTeacher]
    pagination_class = None

    def get_role(self):
        return (self.request.query_params.get('role') or ROLE_STUDENT).strip().upper()

    def get_queryset(self):
        group_name = getattr(settings, 'TEACHER_GROUP_NAME', 'teachers')
        users = User.objects.filter(is_active=True)
        if self.get_role() == ROLE_TEACHER:
            users = users.filter(Q(is_staff=True) | Q(groups__name=group_name)).distinct()
        else:
            users = users.exclude(is_staff=True).exclude(groups__name=group_name)
        return users.order_by('-date_joined', '-id')

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['role'] = self.get_role()
        return context

    def list(self, request, *args, **kwargs):
        if self.get_role() not in ROLES:
            return Response(
                {'error': 'VALIDATION_ERROR', 'message': f"role must be one of {', '.join(ROLES)}"},
                status=status.HTTP_400_BAD_REQUEST
            )
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'users': serializer.data})
