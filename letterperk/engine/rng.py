"""Deterministic linear-congruential generator shared by puzzle generation and play."""

from typing import List, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF


class SeededRandom:
    """
    Reproducible stream of floats in [0, 1) driven by an integer seed.

    Each call advances the state by one LCG step. The current state is exposed
    so a game can store its position as a plain integer: constructing a new
    generator from ``state`` continues the exact same stream.
    """

    def __init__(self, seed: int):
        self.state = seed

    def __call__(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return self.state / LCG_MASK

    def randbelow(self, n: int) -> int:
        """Uniform integer in [0, n) as ``floor(random() * n)``."""
        return int(self() * n)


def seeded_random(seed: int) -> SeededRandom:
    """Create an independent generator for the given seed."""
    return SeededRandom(seed)


def shuffle_array(items: List[T], random: SeededRandom) -> List[T]:
    """
    Fisher-Yates shuffle driven by ``random``.

    Swaps from the last index down to 1 with partner ``floor(random() * (i + 1))``.
    Returns a new list; the input is left untouched.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = random.randbelow(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
