"""
Random Picker

Samples reviewers from a candidate pool without replacement.

The randomness source is injected so production runs and reproducible runs
share the same sampling code:
- UniformRandomSource: pseudo-random draws from random.Random
- SeededRandomSource: linear-congruential generator, identical output for
  identical seeds (used by tests and LOTTERY_SEED dry runs)
"""
import random
from typing import Iterable, List, Optional, Protocol

from lib.env_constants import LCG_INCREMENT, LCG_MODULUS, LCG_MULTIPLIER


class RandomSource(Protocol):
    def uniform(self) -> float:
        """Return a float in [0, 1)"""
        ...


class UniformRandomSource:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def uniform(self) -> float:
        return self._rng.random()


class SeededRandomSource:
    """seed' = (seed * 9301 + 49297) mod 233280, draw = seed' / 233280"""

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed

    def uniform(self) -> float:
        self._seed = (self._seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._seed / LCG_MODULUS


class RandomPicker:
    def __init__(self, source: Optional[RandomSource] = None) -> None:
        self._source = source or UniformRandomSource()

    def pick(
        self, items: Iterable[str], n: int, ignore: Iterable[str] = ()
    ) -> List[str]:
        """
        Pick up to `n` distinct items that are not in `ignore`.

        Returns fewer than `n` items when the pool runs out; partial
        fulfillment is not an error.
        """
        return _pick_with_source(self._source, items, n, ignore)

    @staticmethod
    def pick_deterministic(
        items: Iterable[str], n: int, ignore: Iterable[str] = (), seed: int = 0
    ) -> List[str]:
        """Same as pick(), reseeded from `seed` on every call."""
        return _pick_with_source(SeededRandomSource(seed), items, n, ignore)


def _pick_with_source(
    source: RandomSource, items: Iterable[str], n: int, ignore: Iterable[str]
) -> List[str]:
    ignored = set(ignore)
    candidates = [item for item in items if item not in ignored]
    picks: List[str] = []

    while len(picks) < n and candidates:
        index = int(source.uniform() * len(candidates))
        # Swap-remove: order of the remaining pool does not matter.
        candidates[index], candidates[-1] = candidates[-1], candidates[index]
        pick = candidates.pop()

        # A username listed in two groups sits in the pool twice.
        if pick not in picks:
            picks.append(pick)

    return picks
