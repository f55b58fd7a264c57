from rest_framework import status
from rest_framework.test import APITestCase

from exams.tests.helpers import make_disc, make_mcq, make_student, make_teacher
from questions.models import Question


class QuestionApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.teacher = make_teacher()
        cls.other = make_teacher('other')

    def setUp(self):
        self.client.force_authenticate(user=self.teacher)

    def mcq_body(self, **overrides):
        body = {
            'subject': 'physics', 'grade': '9', 'topic': 'kinematics', 'difficulty': 'easy',
            'question_type': 'MCQ', 'statement': 'Unit of speed?',
            'options': ['m/s', 'kg', 'N', 'J'], 'correct_index': 0,
        }
        body.update(overrides)
        return body

    def test_create_mcq(self):
        response = self.client.post('/api/questions/', self.mcq_body(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        question = Question.objects.get(pk=response.data['id'])
        self.assertEqual(question.teacher, self.teacher)
        self.assertEqual(question.options, ['m/s', 'kg', 'N', 'J'])

    def test_create_invalid_mcq(self):
        response = self.client.post('/api/questions/', self.mcq_body(options=['only one']), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/questions/', self.mcq_body(correct_index=4), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/questions/', self.mcq_body(correct_index=None), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Question.objects.count(), 0)

    def test_create_discursive(self):
        body = {
            'subject': 'physics', 'grade': '9', 'topic': 'dynamics', 'difficulty': 'hard',
            'question_type': 'DISC', 'statement': 'Explain inertia.',
            'expected_answer': 'Bodies keep their state of motion.', 'rubric': 'concept + example',
        }
        response = self.client.post('/api/questions/', body, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['options'], [])
        self.assertIsNone(response.data['correct_index'])

        body['expected_answer'] = '   '
        response = self.client.post('/api/questions/', body, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_is_scoped_and_filtered(self):
        mine = make_mcq(self.teacher)
        make_disc(self.teacher, topic='optics')
        make_mcq(self.other)

        response = self.client.get('/api/questions/')
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/questions/', {'type': 'MCQ', 'topic': 'kinematics'})
        self.assertEqual([q['id'] for q in response.data], [mine.id])

    def test_soft_delete_and_restore(self):
        question = make_mcq(self.teacher)
        response = self.client.delete(f'/api/questions/{question.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        question.refresh_from_db()
        self.assertTrue(question.is_deleted)

        self.assertEqual(self.client.get('/api/questions/').data, [])
        trash = self.client.get('/api/questions/', {'trash': 'true'}).data
        self.assertEqual([q['id'] for q in trash], [question.id])

        response = self.client.post(f'/api/questions/{question.id}/restore/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        question.refresh_from_db()
        self.assertFalse(question.is_deleted)

        response = self.client.post(f'/api/questions/{question.id}/restore/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_topics(self):
        make_mcq(self.teacher, topic='optics')
        make_mcq(self.teacher, topic='kinematics')
        make_disc(self.teacher, topic='kinematics')
        make_mcq(self.teacher, topic='waves', grade='10')
        make_mcq(self.other, topic='astronomy')

        response = self.client.get('/api/questions/topics/', {'subject': 'physics', 'grade': '9'})
        self.assertEqual(response.data['items'], ['kinematics', 'optics'])

        response = self.client.get('/api/questions/topics/', {'subject': 'physics'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_students_are_forbidden(self):
        self.client.force_authenticate(user=make_student())
        self.assertEqual(self.client.get('/api/questions/').status_code, status.HTTP_403_FORBIDDEN)
