from django.contrib.auth.models import Group, User

from questions.models import Question


def make_teacher(username='teacher'):
    user = User.objects.create_user(username=username, password='Musterpassword', email=f'{username}@test.com')
    group, _ = Group.objects.get_or_create(name='teachers')
    user.groups.add(group)
    return user


def make_student(username='student'):
    return User.objects.create_user(username=username, password='Musterpassword', email=f'{username}@test.com')


def make_mcq(teacher, options=None, correct_index=0, subject='physics', grade='9', topic='kinematics',
             difficulty='easy', statement='Which one is correct?'):
    return Question.objects.create(
        teacher=teacher,
        subject=subject,
        grade=grade,
        topic=topic,
        difficulty=difficulty,
        question_type=Question.QuestionType.MULTIPLE_CHOICE,
        statement=statement,
        options=options if options is not None else ['alpha', 'beta', 'gamma', 'delta'],
        correct_index=correct_index,
    )


def make_disc(teacher, expected_answer='A long enough expected answer', rubric='', subject='physics', grade='9',
              topic='kinematics', difficulty='easy', statement='Explain the concept.'):
    return Question.objects.create(
        teacher=teacher,
        subject=subject,
        grade=grade,
        topic=topic,
        difficulty=difficulty,
        question_type=Question.QuestionType.DISCURSIVE,
        statement=statement,
        expected_answer=expected_answer,
        rubric=rubric,
    )


class IdentityRandom:
    """Random source that never reorders anything"""

    def shuffle(self, items):
        pass

    def sample(self, pool, k):
        return list(pool)[:k]
