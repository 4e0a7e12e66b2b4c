import random
from typing import Callable, Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    def next_float(self) -> float:
        ...


class SeededRandom(random.Random):
    """`random.Random` exposing `next_float`; `seed=None` seeds from the system."""

    def next_float(self) -> float:
        return self.random()


class NumpyRandom:
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_float(self) -> float:
        return float(self._rng.random())


class _FloatFn:
    def __init__(self, fn: Callable[[], float]):
        self._fn = fn

    def next_float(self) -> float:
        return self._fn()


def seeded_rng(seed: Optional[int]) -> SeededRandom:
    return SeededRandom(seed)


def resolve_random_source(random_source: Optional[object] = None, seed: Optional[int] = None) -> RandomSource:
    if random_source is not None and seed is not None:
        raise ValueError("Pass either random_source or seed, not both.")
    if random_source is None:
        return SeededRandom(seed)
    if callable(getattr(random_source, "next_float", None)):
        return random_source  # type: ignore[return-value]
    if isinstance(random_source, (random.Random, np.random.Generator)):
        return _FloatFn(random_source.random)
    raise TypeError(
        f"random_source must provide next_float() or be a random.Random / numpy Generator; "
        f"got {type(random_source).__name__}."
    )
