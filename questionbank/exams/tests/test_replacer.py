import copy
import random

from django.test import TestCase

from exams.models import Exam
from exams.services import (
    ExamRenderer,
    InvalidNewQuestionIds,
    NewQuestionFilterMismatch,
    NewQuestionTeacherMismatch,
    OldQuestionNotInExam,
    QuestionReplacer,
    ValidationError,
)
from .helpers import make_disc, make_mcq, make_teacher


class QuestionReplacerTests(TestCase):
    def setUp(self):
        self.teacher = make_teacher()
        self.q1 = make_mcq(self.teacher, statement='one')
        self.q2 = make_mcq(self.teacher, statement='two', options=['x', 'y', 'z'])
        self.q3 = make_disc(self.teacher, statement='three')
        self.q4 = make_mcq(self.teacher, statement='four')
        self.exam = Exam.objects.create(
            teacher=self.teacher,
            title='Replaceable',
            subject='physics',
            grade='9',
            topics=['kinematics', 'optics'],
            question_ids=[self.q1.id, self.q2.id, self.q3.id, self.q4.id],
            versions=[
                {
                    'version': 'A',
                    'question_order': [self.q3.id, self.q1.id, self.q4.id, self.q2.id],
                    'options_order_by_question': {
                        str(self.q1.id): [1, 0, 3, 2],
                        str(self.q2.id): [2, 1, 0],
                        str(self.q4.id): [0, 1, 2, 3],
                    },
                },
                {
                    'version': 'B',
                    'question_order': [self.q2.id, self.q4.id, self.q1.id, self.q3.id],
                    'options_order_by_question': {
                        str(self.q1.id): [3, 2, 1, 0],
                        str(self.q2.id): [1, 2, 0],
                        str(self.q4.id): [2, 3, 0, 1],
                    },
                },
            ],
        )
        self.original_ids = list(self.exam.question_ids)
        self.original_versions = copy.deepcopy(self.exam.versions)

    def assertUnchanged(self):
        self.exam.refresh_from_db()
        self.assertEqual(self.exam.question_ids, self.original_ids)
        self.assertEqual(self.exam.versions, self.original_versions)

    def test_replace_single_mcq_keeps_slots(self):
        new = make_mcq(self.teacher, statement='new', options=['n0', 'n1', 'n2', 'n3', 'n4'])
        exam = QuestionReplacer(rng=random.Random(8)).replace(self.exam, [(self.q1.id, new.id)])
        exam.refresh_from_db()

        self.assertEqual(exam.question_ids, [new.id, self.q2.id, self.q3.id, self.q4.id])
        version_a, version_b = exam.versions
        self.assertEqual(version_a['question_order'], [self.q3.id, new.id, self.q4.id, self.q2.id])
        self.assertEqual(version_b['question_order'], [self.q2.id, self.q4.id, new.id, self.q3.id])

        for version, original in zip(exam.versions, self.original_versions):
            orders = version['options_order_by_question']
            self.assertNotIn(str(self.q1.id), orders)
            self.assertEqual(sorted(orders[str(new.id)]), [0, 1, 2, 3, 4])
            self.assertEqual(orders[str(self.q2.id)], original['options_order_by_question'][str(self.q2.id)])
            self.assertEqual(orders[str(self.q4.id)], original['options_order_by_question'][str(self.q4.id)])

    def test_replace_without_regenerating_options(self):
        new = make_mcq(self.teacher, options=['p', 'q', 'r'], correct_index=2)
        exam = QuestionReplacer().replace(self.exam, [(self.q4.id, new.id)], regenerate_options=False)

        for version in exam.versions:
            self.assertNotIn(str(new.id), version['options_order_by_question'])
            self.assertNotIn(str(self.q4.id), version['options_order_by_question'])

        rendered = ExamRenderer().render(exam, 'A', 'teacher')
        item = next(q for q in rendered['questions'] if q['id'] == new.id)
        self.assertEqual(item['options'], ['p', 'q', 'r'])
        self.assertEqual(item['answer_key'], 2)

    def test_discursive_and_mcq_swaps(self):
        new_disc = make_disc(self.teacher, topic='optics')
        new_mcq = make_mcq(self.teacher, topic='optics')
        exam = QuestionReplacer().replace(self.exam, [
            {'old_question_id': self.q2.id, 'new_question_id': new_disc.id},
            {'old_question_id': self.q3.id, 'new_question_id': new_mcq.id},
        ])
        for version in exam.versions:
            orders = version['options_order_by_question']
            self.assertNotIn(str(new_disc.id), orders)
            self.assertNotIn(str(self.q2.id), orders)
            self.assertEqual(sorted(orders[str(new_mcq.id)]), [0, 1, 2, 3])
            self.assertEqual(sorted(version['question_order']), sorted(exam.question_ids))

    def test_chained_replacement(self):
        new = make_mcq(self.teacher)
        exam = QuestionReplacer().replace(self.exam, [(self.q1.id, self.q2.id), (self.q2.id, new.id)])
        self.assertEqual(exam.question_ids, [self.q2.id, new.id, self.q3.id, self.q4.id])
        self.assertEqual(exam.versions[0]['question_order'], [self.q3.id, self.q2.id, self.q4.id, new.id])

    def test_old_question_not_in_exam(self):
        stranger = make_mcq(self.teacher)
        new = make_mcq(self.teacher)
        with self.assertRaises(OldQuestionNotInExam) as ctx:
            QuestionReplacer().replace(self.exam, [(stranger.id, new.id)])
        self.assertEqual(ctx.exception.extra['old_question_ids'], [stranger.id])
        self.assertUnchanged()

    def test_replacement_count_limits(self):
        with self.assertRaises(ValidationError) as ctx:
            QuestionReplacer().replace(self.exam, [])
        self.assertEqual(ctx.exception.code, 'REPLACEMENT_COUNT')

        too_many = [(self.q1.id + i, 1000 + i) for i in range(11)]
        with self.assertRaises(ValidationError) as ctx:
            QuestionReplacer().replace(self.exam, too_many)
        self.assertEqual(ctx.exception.code, 'REPLACEMENT_COUNT')
        self.assertUnchanged()

    def test_duplicate_ids(self):
        a, b = make_mcq(self.teacher), make_mcq(self.teacher)
        with self.assertRaises(ValidationError) as ctx:
            QuestionReplacer().replace(self.exam, [(self.q1.id, a.id), (self.q1.id, b.id)])
        self.assertEqual(ctx.exception.code, 'DUPLICATE_OLD_IDS')

        with self.assertRaises(ValidationError) as ctx:
            QuestionReplacer().replace(self.exam, [(self.q1.id, a.id), (self.q2.id, a.id)])
        self.assertEqual(ctx.exception.code, 'DUPLICATE_NEW_IDS')
        self.assertUnchanged()

    def test_new_question_already_in_exam(self):
        with self.assertRaises(ValidationError) as ctx:
            QuestionReplacer().replace(self.exam, [(self.q1.id, self.q2.id)])
        self.assertEqual(ctx.exception.code, 'NEW_QUESTION_ALREADY_IN_EXAM')
        self.assertUnchanged()

    def test_unknown_new_question(self):
        trashed = make_mcq(self.teacher)
        trashed.soft_delete()
        with self.assertRaises(InvalidNewQuestionIds) as ctx:
            QuestionReplacer().replace(self.exam, [(self.q1.id, 999999), (self.q2.id, trashed.id)])
        self.assertEqual(ctx.exception.extra['new_question_ids'], [999999, trashed.id])
        self.assertUnchanged()

    def test_new_question_of_another_teacher(self):
        foreign = make_mcq(make_teacher('other'))
        with self.assertRaises(NewQuestionTeacherMismatch):
            QuestionReplacer().replace(self.exam, [(self.q1.id, foreign.id)])
        self.assertUnchanged()

    def test_new_question_out_of_scope(self):
        for kwargs in ({'topic': 'thermodynamics'}, {'grade': '10'}, {'subject': 'geography'}):
            outsider = make_mcq(self.teacher, **kwargs)
            with self.assertRaises(NewQuestionFilterMismatch):
                QuestionReplacer().replace(self.exam, [(self.q1.id, outsider.id)])
        self.assertUnchanged()

    def test_all_or_nothing(self):
        good = make_mcq(self.teacher)
        bad = make_mcq(self.teacher, topic='thermodynamics')
        with self.assertRaises(NewQuestionFilterMismatch):
            QuestionReplacer().replace(self.exam, [(self.q1.id, good.id), (self.q2.id, bad.id)])
        self.assertUnchanged()

    def test_malformed_replacement(self):
        with self.assertRaises(ValidationError) as ctx:
            QuestionReplacer().replace(self.exam, [('abc', self.q1.id)])
        self.assertEqual(ctx.exception.code, 'MALFORMED_REPLACEMENT')
