"""
Errors raised by the exam services.

Every error carries a machine-readable ``code``, the HTTP status the API layer
answers with, and an ``extra`` dict merged into the error response body.
None of them is transient: they all follow from the input and the current
data, so callers never retry.
"""


class ExamServiceError(Exception):
    code = 'EXAM_ERROR'
    status_code = 400

    def __init__(self, message, code=None, **extra):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.extra = extra

    def as_dict(self):
        return {'error': self.code, 'message': self.message, **self.extra}


class ValidationError(ExamServiceError):
    """Malformed or missing input"""
    code = 'VALIDATION_ERROR'


class InsufficientPoolError(ExamServiceError):
    """Not enough matching questions to satisfy the requested count"""
    code = 'INSUFFICIENT_POOL'

    def __init__(self, available, requested, message=None, **extra):
        super().__init__(
            message or 'not enough questions for selected filters',
            available=available,
            requested=requested,
            **extra
        )
        self.available = available
        self.requested = requested


class NotFoundError(ExamServiceError):
    code = 'NOT_FOUND'
    status_code = 404


class VersionNotFound(NotFoundError):
    code = 'VERSION_NOT_FOUND'


class OldQuestionNotInExam(ValidationError):
    code = 'OLD_QUESTION_NOT_IN_EXAM'


class InvalidNewQuestionIds(ValidationError):
    code = 'INVALID_NEW_QUESTION_IDS'


class NewQuestionFilterMismatch(ValidationError):
    code = 'NEW_QUESTION_FILTER_MISMATCH'


class NewQuestionTeacherMismatch(ValidationError):
    code = 'NEW_QUESTION_TEACHER_MISMATCH'
