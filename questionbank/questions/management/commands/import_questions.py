"""
Import a teacher's questions from an INI file.

Every section is one question; a ``[defaults]`` section provides values shared
by all of them::

    [defaults]
    subject = physics
    grade = 9

    [speed-units]
    type = MCQ
    topic = kinematics
    difficulty = easy
    statement = "What is the SI unit of speed?"
    options = m/s, km/h, "mph", knots
    correct = 0

    [explain-inertia]
    type = DISC
    topic = dynamics
    statement = Explain inertia with an everyday example.
    expected_answer = "Objects keep their state of motion unless a net force acts on them."
    rubric = "Definition (1pt), example (1pt)"
"""
from configobj import ConfigObj, ConfigObjError
from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from questions.serializers import QuestionDetailSerializer


DEFAULTS_SECTION = 'defaults'


def as_list(value):
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value]
    return [str(value).strip()]


def as_text(value, default=''):
    """Unquoted values containing commas come back from ConfigObj as lists"""
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        return ', '.join(str(v).strip() for v in value)
    return str(value).strip()


def section_to_data(name, section, defaults):
    values = dict(defaults)
    values.update(section.dict())

    question_type = as_text(values.get('type')).upper()
    data = {
        'subject': as_text(values.get('subject')),
        'grade': as_text(values.get('grade')),
        'topic': as_text(values.get('topic')),
        'difficulty': as_text(values.get('difficulty'), 'medium').lower(),
        'question_type': question_type,
        'statement': as_text(values.get('statement')),
    }
    if question_type == 'MCQ':
        data['options'] = as_list(values.get('options'))
        correct = values.get('correct', values.get('correct_index'))
        try:
            data['correct_index'] = int(correct)
        except (TypeError, ValueError):
            raise CommandError(f"[{name}] correct must be an integer, got {correct!r}")
    else:
        data['expected_answer'] = as_text(values.get('expected_answer'))
        data['rubric'] = as_text(values.get('rubric'))
    return data


class Command(BaseCommand):
    help = 'Import MCQ and discursive questions from an INI file into a teacher\'s bank'

    def add_arguments(self, parser):
        parser.add_argument('path', help='INI file with one section per question')
        parser.add_argument('--teacher', required=True, help='Username owning the imported questions')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Validate the file without saving anything',
        )

    def handle(self, *args, **options):
        try:
            teacher = User.objects.get(username=options['teacher'])
        except User.DoesNotExist:
            raise CommandError(f"User '{options['teacher']}' not found")

        try:
            config = ConfigObj(options['path'], encoding='utf-8', file_error=True)
        except (IOError, ConfigObjError) as e:
            raise CommandError(f"Cannot read {options['path']}: {e}")

        defaults = config[DEFAULTS_SECTION].dict() if DEFAULTS_SECTION in config.sections else {}

        serializers = []
        errors = []
        for name in config.sections:
            if name == DEFAULTS_SECTION:
                continue
            serializer = QuestionDetailSerializer(data=section_to_data(name, config[name], defaults))
            if serializer.is_valid():
                serializers.append((name, serializer))
            else:
                errors.append(f"[{name}] {serializer.errors}")

        if errors:
            for error in errors:
                self.stderr.write(error)
            raise CommandError(f"{len(errors)} invalid question(s), nothing imported")

        if options['dry_run']:
            self.stdout.write(f"Dry run: {len(serializers)} question(s) are valid")
            return

        with transaction.atomic():
            for name, serializer in serializers:
                question = serializer.save(teacher=teacher)
                self.stdout.write(f"  Imported [{name}] as question {question.id}")

        self.stdout.write(self.style.SUCCESS(f"Imported {len(serializers)} question(s) for {teacher.username}"))
