"""
Read-only access to a teacher's question bank for the exam services.
"""
from questions.models import Question


ALL_TYPES = [Question.QuestionType.MULTIPLE_CHOICE, Question.QuestionType.DISCURSIVE]


class QuestionPool:
    """Filtered, live (not trashed) view over Question records"""

    def live(self):
        return Question.objects.filter(deleted_at__isnull=True)

    def find(self, teacher, subject, grade, topics, difficulty=None, types=None):
        """All live questions of ``teacher`` matching the filters"""
        queryset = self.live().filter(
            teacher=teacher,
            subject=subject,
            grade=grade,
            topic__in=list(topics),
            question_type__in=list(types or ALL_TYPES),
        )
        if difficulty:
            queryset = queryset.filter(difficulty=difficulty)
        # Stable order so a seeded sample is reproducible
        return list(queryset.order_by('id'))

    def get_by_ids(self, ids):
        """Live questions for ``ids``, keyed by id. Missing ids are simply absent."""
        wanted = {int(i) for i in ids}
        if not wanted:
            return {}
        return {q.id: q for q in self.live().filter(id__in=wanted)}
