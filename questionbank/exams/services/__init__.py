from .composer import ExamComposer, ExamFilters
from .errors import (
    ExamServiceError,
    InsufficientPoolError,
    InvalidNewQuestionIds,
    NewQuestionFilterMismatch,
    NewQuestionTeacherMismatch,
    NotFoundError,
    OldQuestionNotInExam,
    ValidationError,
    VersionNotFound,
)
from .pool import QuestionPool
from .renderer import AUDIENCES, ExamRenderer
from .replacer import QuestionReplacer
from .variants import VERSION_LABELS, build_version

__all__ = [
    'AUDIENCES',
    'ExamComposer',
    'ExamFilters',
    'ExamRenderer',
    'ExamServiceError',
    'InsufficientPoolError',
    'InvalidNewQuestionIds',
    'NewQuestionFilterMismatch',
    'NewQuestionTeacherMismatch',
    'NotFoundError',
    'OldQuestionNotInExam',
    'QuestionPool',
    'QuestionReplacer',
    'ValidationError',
    'VERSION_LABELS',
    'VersionNotFound',
    'build_version',
]
