from django.db import models
from django.contrib.auth.models import User


class Question(models.Model):
    """Individual question in a teacher's bank"""

    class QuestionType(models.TextChoices):
        MULTIPLE_CHOICE = 'MCQ', 'Multiple Choice'
        DISCURSIVE = 'DISC', 'Discursive'

    class Difficulty(models.TextChoices):
        EASY = 'easy', 'Easy'
        MEDIUM = 'medium', 'Medium'
        HARD = 'hard', 'Hard'

    # Core fields
    teacher = models.ForeignKey(User, on_delete=models.CASCADE, related_name='questions')
    subject = models.CharField(max_length=100)
    grade = models.CharField(max_length=50)
    topic = models.CharField(max_length=200)
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices, default=Difficulty.MEDIUM)
    question_type = models.CharField(max_length=10, choices=QuestionType.choices)
    statement = models.TextField()

    # MCQ data
    options = models.JSONField(default=list, blank=True, help_text="Ordered option texts (MCQ only)")
    correct_index = models.PositiveIntegerField(null=True, blank=True, help_text="Index of the correct option (MCQ only)")

    # DISC data
    expected_answer = models.TextField(blank=True)
    rubric = models.TextField(blank=True)

    # Usage tracking
    times_used = models.PositiveIntegerField(default=0)
    last_used = models.DateTimeField(null=True, blank=True)

    # Audit
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Soft delete
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)
    deleted_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='questions_deleted')

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['teacher', 'subject', 'grade'], name='questions_q_teacher_5a1c2e_idx'),
            models.Index(fields=['topic'], name='questions_q_topic_8b7d41_idx'),
            models.Index(fields=['question_type'], name='questions_q_questio_3f0e9a_idx'),
            models.Index(fields=['difficulty'], name='questions_q_difficu_c2d6b8_idx'),
        ]

    def __str__(self):
        return f"{self.question_type}: {self.statement[:50]}..."

    @property
    def is_mcq(self):
        return self.question_type == self.QuestionType.MULTIPLE_CHOICE

    @property
    def option_count(self):
        return len(self.options or []) if self.is_mcq else 0

    @property
    def is_deleted(self):
        """True if this question is in the trash"""
        return self.deleted_at is not None

    def soft_delete(self, user=None):
        """Move this question to trash"""
        from django.utils import timezone
        self.deleted_at = timezone.now()
        self.deleted_by = user
        self.save(update_fields=['deleted_at', 'deleted_by'])

    def restore(self):
        """Restore this question from trash"""
        self.deleted_at = None
        self.deleted_by = None
        self.save(update_fields=['deleted_at', 'deleted_by'])
