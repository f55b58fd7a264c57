"""
Render a stored exam version for a student or for a teacher.
"""
import logging

from .errors import ValidationError, VersionNotFound
from .pool import QuestionPool


logger = logging.getLogger(__name__)

AUDIENCE_TEACHER = 'teacher'
AUDIENCE_STUDENT = 'student'
AUDIENCES = (AUDIENCE_TEACHER, AUDIENCE_STUDENT)


def find_answer_key(order, correct_index):
    """Position of the originally-correct option inside the rendered order"""
    if correct_index is None:
        return None
    try:
        return order.index(correct_index)
    except ValueError:
        return None


class ExamRenderer:
    """Builds the ordered, audience-filtered question list of one version.

    Rendering never writes to the exam. Questions removed from the bank after
    the exam was composed are left out of the result.
    """

    def __init__(self, pool=None):
        self.pool = pool or QuestionPool()

    def render(self, exam, version, audience):
        if audience not in AUDIENCES:
            raise ValidationError(f"invalid audience '{audience}'", code='INVALID_AUDIENCE')
        stored = exam.get_version(version)
        if stored is None:
            raise VersionNotFound(f"version '{version}' not found in exam {exam.pk}", version=version)

        question_order = stored.get('question_order') or []
        options_order = stored.get('options_order_by_question') or {}
        by_id = self.pool.get_by_ids(question_order)

        questions = []
        for question_id in question_order:
            question = by_id.get(int(question_id))
            if question is None:
                logger.debug("Question %s of exam %s no longer exists, skipping", question_id, exam.pk)
                continue
            questions.append(
                self.render_question(question, options_order.get(str(question.id)), audience)
            )

        return {
            'exam': {
                'id': exam.pk,
                'title': exam.title,
                'subject': exam.subject,
                'grade': exam.grade,
                'topics': list(exam.topics or []),
                'version': version,
                'audience': audience,
            },
            'questions': questions,
        }

    def render_question(self, question, order, audience):
        data = {
            'id': question.id,
            'type': question.question_type,
            'statement': question.statement,
            'topic': question.topic,
            'difficulty': question.difficulty,
        }
        include_answers = audience == AUDIENCE_TEACHER

        if question.is_mcq:
            source = list(question.options or [])
            if order is None:
                order = list(range(len(source)))
            # Indices outside the option list cannot be shown
            order = [i for i in order if isinstance(i, int) and 0 <= i < len(source)]
            data['options'] = [source[i] for i in order]
            if include_answers:
                data['answer_key'] = find_answer_key(order, question.correct_index)
        elif include_answers:
            data['expected_answer'] = question.expected_answer or None
            data['rubric'] = question.rubric or None

        return data
