"""
Swap questions inside an already composed exam.

A replacement takes over the exact slot of the question it replaces in every
version, so the rest of a version's order (which a teacher may already have
reviewed or printed) stays as it was.
"""
import logging

from django.conf import settings
from django.db import transaction

from exams.models import Exam
from .errors import (
    InvalidNewQuestionIds,
    NewQuestionFilterMismatch,
    NewQuestionTeacherMismatch,
    NotFoundError,
    OldQuestionNotInExam,
    ValidationError,
)
from .pool import QuestionPool
from .variants import option_order


logger = logging.getLogger(__name__)

DEFAULT_MAX_REPLACEMENTS = 10


def normalize_replacements(replacements):
    """Turn dicts or (old, new) pairs into a list of (old_id, new_id) ints"""
    pairs = []
    for item in replacements or []:
        if isinstance(item, dict):
            old_id, new_id = item.get('old_question_id'), item.get('new_question_id')
        else:
            try:
                old_id, new_id = item
            except (TypeError, ValueError):
                raise ValidationError(f"malformed replacement: {item!r}", code='MALFORMED_REPLACEMENT')
        try:
            pairs.append((int(old_id), int(new_id)))
        except (TypeError, ValueError):
            raise ValidationError(f"malformed replacement: {item!r}", code='MALFORMED_REPLACEMENT')
    return pairs


class QuestionReplacer:
    """Replace one or more questions of an exam, all-or-nothing"""

    def __init__(self, pool=None, rng=None, max_replacements=None):
        self.pool = pool or QuestionPool()
        self.rng = rng
        if max_replacements is None:
            max_replacements = getattr(settings, 'EXAMS_MAX_REPLACEMENTS', DEFAULT_MAX_REPLACEMENTS)
        self.max_replacements = max_replacements

    def replace(self, exam, replacements, regenerate_options=True):
        pairs = normalize_replacements(replacements)
        self.check_pairs(pairs)

        with transaction.atomic():
            try:
                locked = Exam.objects.select_for_update().get(pk=exam.pk)
            except Exam.DoesNotExist:
                raise NotFoundError(f"exam {exam.pk} not found", code='EXAM_NOT_FOUND')

            new_questions = self.validate(locked, pairs)
            question_ids, versions = self.apply(locked, pairs, new_questions, regenerate_options)

            locked.question_ids = question_ids
            locked.versions = versions
            locked.save(update_fields=['question_ids', 'versions', 'updated_at'])

        logger.info(
            "Replaced %d question(s) in exam %s: %s",
            len(pairs), locked.pk, ', '.join(f"{old}->{new}" for old, new in pairs)
        )
        return locked

    def check_pairs(self, pairs):
        if not 1 <= len(pairs) <= self.max_replacements:
            raise ValidationError(
                f"between 1 and {self.max_replacements} replacements are allowed (got {len(pairs)})",
                code='REPLACEMENT_COUNT',
            )
        old_ids = [old for old, _ in pairs]
        new_ids = [new for _, new in pairs]
        if len(set(old_ids)) != len(old_ids):
            raise ValidationError('old question ids must be distinct', code='DUPLICATE_OLD_IDS')
        if len(set(new_ids)) != len(new_ids):
            raise ValidationError('new question ids must be distinct', code='DUPLICATE_NEW_IDS')

    def validate(self, exam, pairs):
        """Check every replacement against the exam; returns new questions by id"""
        current = {int(i) for i in exam.question_ids}
        old_ids = [old for old, _ in pairs]
        new_ids = [new for _, new in pairs]

        missing = [old for old in old_ids if old not in current]
        if missing:
            raise OldQuestionNotInExam(
                f"questions {missing} are not part of exam {exam.pk}", old_question_ids=missing
            )

        staying = current - set(old_ids)
        clashing = [new for new in new_ids if new in staying]
        if clashing:
            raise ValidationError(
                f"questions {clashing} are already part of exam {exam.pk}",
                code='NEW_QUESTION_ALREADY_IN_EXAM',
                new_question_ids=clashing,
            )

        found = self.pool.get_by_ids(new_ids)
        unknown = [new for new in new_ids if new not in found]
        if unknown:
            raise InvalidNewQuestionIds(f"questions {unknown} do not exist", new_question_ids=unknown)

        foreign = [new for new in new_ids if found[new].teacher_id != exam.teacher_id]
        if foreign:
            raise NewQuestionTeacherMismatch(
                f"questions {foreign} belong to another teacher", new_question_ids=foreign
            )

        topics = set(exam.topics or [])
        out_of_scope = [
            new for new in new_ids
            if found[new].subject != exam.subject
            or found[new].grade != exam.grade
            or found[new].topic not in topics
        ]
        if out_of_scope:
            raise NewQuestionFilterMismatch(
                f"questions {out_of_scope} do not match the exam's subject, grade and topics",
                new_question_ids=out_of_scope,
            )
        return found

    def apply(self, exam, pairs, new_questions, regenerate_options):
        """Compute the new question ids and versions without touching ``exam``"""
        mapping = dict(pairs)
        question_ids = [mapping.get(int(i), int(i)) for i in exam.question_ids]

        versions = []
        for version in exam.versions or []:
            order = [mapping.get(int(i), int(i)) for i in version.get('question_order') or []]
            options_order = {
                key: list(value)
                for key, value in (version.get('options_order_by_question') or {}).items()
                if int(key) not in mapping
            }
            if regenerate_options:
                for _, new_id in pairs:
                    question = new_questions[new_id]
                    if question.is_mcq:
                        options_order[str(new_id)] = option_order(question, rng=self.rng)
            versions.append({
                'version': version.get('version'),
                'question_order': order,
                'options_order_by_question': options_order,
            })
        return question_ids, versions
