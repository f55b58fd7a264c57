"""
Exam composition: pick questions from the bank and build versions A and B.
"""
import logging

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from questions.models import Question
from exams.models import Exam
from .errors import InsufficientPoolError, ValidationError
from .permutation import sample_without_replacement
from .pool import ALL_TYPES, QuestionPool
from .variants import build_version


logger = logging.getLogger(__name__)

DEFAULT_MAX_VERSION_ATTEMPTS = 10


class ExamFilters:
    """Selection filters for a compose call"""

    def __init__(self, subject, grade, topics, difficulty=None, types=None):
        self.subject = (subject or '').strip()
        self.grade = (grade or '').strip()
        self.topics = [str(t).strip() for t in (topics or []) if str(t).strip()]
        self.difficulty = (difficulty or '').strip() or None
        self.types = list(ALL_TYPES) if types is None else [str(t).strip() for t in types]

    def validate(self):
        if not self.subject or not self.grade:
            raise ValidationError('subject and grade are required', code='MISSING_FILTERS')
        if not self.topics:
            raise ValidationError('topics is required (select at least 1 topic)', code='MISSING_TOPICS')
        unknown = [t for t in self.types if t not in ALL_TYPES]
        if unknown or not self.types:
            raise ValidationError(f"invalid question types: {unknown or self.types}", code='INVALID_TYPES')

    @property
    def mode(self):
        kinds = set(self.types)
        if kinds == {Question.QuestionType.MULTIPLE_CHOICE}:
            return Exam.Mode.MCQ
        if kinds == {Question.QuestionType.DISCURSIVE}:
            return Exam.Mode.DISC
        return Exam.Mode.MIXED

    def as_dict(self):
        return {
            'subject': self.subject,
            'grade': self.grade,
            'topics': self.topics,
            'types': self.types,
            'difficulty': self.difficulty,
        }


class ExamComposer:
    """Compose a new exam with two independently shuffled versions"""

    def __init__(self, pool=None, rng=None, max_version_attempts=None):
        self.pool = pool or QuestionPool()
        self.rng = rng
        if max_version_attempts is None:
            max_version_attempts = getattr(settings, 'EXAMS_MAX_VERSION_ATTEMPTS', DEFAULT_MAX_VERSION_ATTEMPTS)
        self.max_version_attempts = max(1, max_version_attempts)

    def compose(self, filters, count, teacher, title=''):
        if teacher is None:
            raise ValidationError('teacher is required', code='MISSING_TEACHER')
        filters.validate()
        if count is None or count <= 0:
            raise ValidationError(f"count must be a positive integer (got {count})", code='INVALID_COUNT')

        pool = self.pool.find(
            teacher,
            filters.subject,
            filters.grade,
            filters.topics,
            difficulty=filters.difficulty,
            types=filters.types,
        )
        if len(pool) < count:
            raise InsufficientPoolError(available=len(pool), requested=count, filters=filters.as_dict())

        selected = sample_without_replacement(pool, count, rng=self.rng)
        versions = self.build_versions(selected)

        with transaction.atomic():
            exam = Exam.objects.create(
                teacher=teacher,
                title=title,
                subject=filters.subject,
                grade=filters.grade,
                topics=filters.topics,
                mode=filters.mode,
                question_ids=[q.id for q in selected],
                versions=versions,
            )
            Question.objects.filter(id__in=[q.id for q in selected]).update(
                times_used=F('times_used') + 1,
                last_used=timezone.now(),
            )

        logger.info(
            "Composed exam %s for teacher %s: %d questions from a pool of %d",
            exam.pk, teacher.pk, count, len(pool)
        )
        return exam

    def build_versions(self, questions):
        """Build versions A and B, retrying B while its order equals A's"""
        version_a = build_version(questions, 'A', rng=self.rng)
        version_b = build_version(questions, 'B', rng=self.rng)
        attempts = 1
        while (version_b['question_order'] == version_a['question_order']
               and attempts < self.max_version_attempts):
            version_b = build_version(questions, 'B', rng=self.rng)
            attempts += 1

        if version_b['question_order'] == version_a['question_order'] and len(questions) > 1:
            logger.debug("Versions A and B share the same question order after %d attempts", attempts)
        return [version_a, version_b]
