from django.db import models
from django.contrib.auth.models import User


class Exam(models.Model):
    """A composed exam with its two shuffled versions (A and B).

    ``versions`` holds one dict per version::

        {"version": "A",
         "question_order": [12, 7, 31],
         "options_order_by_question": {"12": [2, 0, 1, 3], "31": [1, 0, 2, 3]}}

    ``question_order`` is a permutation of ``question_ids``. Option orders are
    keyed by the stringified question id and only exist for MCQ questions.
    """

    class Mode(models.TextChoices):
        MIXED = 'MIXED', 'Mixed'
        MCQ = 'MCQ', 'Multiple Choice only'
        DISC = 'DISC', 'Discursive only'

    teacher = models.ForeignKey(User, on_delete=models.CASCADE, related_name='exams')
    title = models.CharField(max_length=200)
    subject = models.CharField(max_length=100)
    grade = models.CharField(max_length=50)
    topics = models.JSONField(default=list, help_text="Topics the questions were drawn from")
    mode = models.CharField(max_length=10, choices=Mode.choices, default=Mode.MIXED)

    # Base question set (order-independent)
    question_ids = models.JSONField(default=list)
    versions = models.JSONField(default=list, help_text="Per-version question and option orders")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['teacher', 'subject', 'grade', '-created_at'], name='exams_exam_teacher_9d2f4b_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.subject}/{self.grade})"

    @property
    def version_labels(self):
        return [v.get('version') for v in self.versions or []]

    def get_version(self, label):
        """Return the stored version dict for ``label`` or None"""
        for version in self.versions or []:
            if version.get('version') == label:
                return version
        return None
