from .errors import ValidationError
from .permutation import shuffle


VERSION_LABELS = ('A', 'B')


def option_order(question, rng=None):
    """Fresh shuffled order of an MCQ question's option indices"""
    return shuffle(range(question.option_count), rng=rng)


def build_version(questions, label, rng=None):
    """
    Build one exam version from the exam's questions.

    The question order is a fresh shuffle of the question ids and every MCQ
    question gets its own independent option order. Discursive questions
    have no option order.
    """
    if label not in VERSION_LABELS:
        raise ValidationError(f"unknown version '{label}'", code='INVALID_VERSION')

    question_order = shuffle([q.id for q in questions], rng=rng)
    options_order = {}
    for q in questions:
        if q.is_mcq:
            options_order[str(q.id)] = option_order(q, rng=rng)

    return {
        'version': label,
        'question_order': question_order,
        'options_order_by_question': options_order,
    }
