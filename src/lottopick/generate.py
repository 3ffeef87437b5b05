from __future__ import annotations
import logging
import random
from math import comb, perm
from typing import Iterable, List

from .settings import GeneratorSettings

logger = logging.getLogger(__name__)

DEFAULT_TRIES_PER_PICK = 10_000


class SamplingExhausted(RuntimeError):
    pass


def total_space(s: GeneratorSettings) -> int:
    """Number of distinct results the settings can produce."""
    if s.unique and s.sorted:
        return comb(s.span, s.count)
    if s.unique:
        return perm(s.span, s.count)
    return s.span ** s.count


def format_numbers(numbers: Iterable[int]) -> str:
    return ", ".join(str(n) for n in numbers)


def format_ball(n: int) -> str:
    return f"{n:02d}"


def generate(
    settings: GeneratorSettings,
    seed: int | None = None,
    max_tries: int | None = None,
) -> List[int]:
    """Draw `settings.count` numbers from [min, max].

    With `unique`, repeated values are rejected and drawn again; the total
    number of draws is capped by `max_tries`.
    """
    settings.validate()
    rng = random.Random(seed)

    if max_tries is None:
        max_tries = max(1000, settings.count * DEFAULT_TRIES_PER_PICK)

    results: List[int] = []
    seen = set()
    tries = 0

    while len(results) < settings.count:
        if tries >= max_tries:
            raise SamplingExhausted(
                f"Gave up after {tries} draws with {len(results)} of {settings.count} numbers"
            )
        n = rng.randint(settings.min, settings.max)
        tries += 1
        if settings.unique:
            if n in seen:
                continue
            seen.add(n)
        results.append(n)

    if settings.sorted:
        results.sort()

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Drew %d numbers (%d possible results) in %d tries",
            len(results), total_space(settings), tries,
        )
    return results
