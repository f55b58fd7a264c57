import random

from .errors import InsufficientPoolError, ValidationError


def shuffle(items, rng=None):
    """Return a uniformly shuffled copy of ``items`` (Fisher-Yates)"""
    rng = rng or random
    result = list(items)
    if len(result) > 1:
        rng.shuffle(result)
    return result


def sample_without_replacement(pool, k, rng=None):
    """Draw ``k`` distinct elements of ``pool`` uniformly, in random order"""
    rng = rng or random
    pool = list(pool)
    if k < 0:
        raise ValidationError(f"sample size must not be negative (got {k})")
    if k > len(pool):
        raise InsufficientPoolError(available=len(pool), requested=k)
    if k == 0:
        return []
    return rng.sample(pool, k)
