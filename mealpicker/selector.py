"""
Random recipe selection that avoids recent repeats.

Draws uniformly from the candidate ids, skipping ids in the recency cache.
After `max_attempts` cached hits the cache is cleared and one final draw
is returned as-is, so work per call stays bounded even for tiny pools.
"""

import random
from typing import Optional, Protocol, Sequence

from .logger import get_logger
from .recency import RecencyCache

logger = get_logger()

DEFAULT_MAX_ATTEMPTS = 5


class EmptyCandidateList(ValueError):
    """Raised when select() is called with no candidates."""
    pass


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def select(
    candidates: Sequence[str],
    cache: RecencyCache,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[RandomSource] = None,
) -> str:
    """
    Pick a candidate id that was not recently shown.

    The cache is only read here, except on exhaustion where it is cleared.
    Inserting the returned id is the caller's job (see select_and_remember).

    Args:
        candidates: Candidate ids; duplicates are allowed and not collapsed
        cache: Recency cache of recently selected ids
        max_attempts: Number of random draws before giving up and resetting
        rng: Object with randrange(n); defaults to the random module

    Returns:
        An id from candidates

    Raises:
        EmptyCandidateList: If candidates is empty
        ValueError: If max_attempts < 1
    """
    if not candidates:
        raise EmptyCandidateList("Cannot select from an empty candidate list")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    rng = rng or random
    n = len(candidates)

    for _ in range(max_attempts):
        identifier = candidates[rng.randrange(n)]
        if identifier not in cache:
            return identifier

    logger.debug(
        "Recency cache exhausted, resetting",
        candidates=n,
        cached=len(cache),
        max_attempts=max_attempts,
    )
    cache.clear()
    return candidates[rng.randrange(n)]


def select_and_remember(
    candidates: Sequence[str],
    cache: RecencyCache,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[RandomSource] = None,
) -> str:
    """select(), then record the chosen id in the cache."""
    size_before = len(cache)
    identifier = select(candidates, cache, max_attempts=max_attempts, rng=rng)
    # The cache only shrinks inside select() when it was reset
    reset = len(cache) < size_before
    cache.add(identifier)
    logger.record_selection(reset=reset)
    return identifier
