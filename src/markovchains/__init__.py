"""N-th order Markov chains over arbitrary state labels."""

from .chains import History, MarkovChain
from .errors import (
    DegenerateContextError,
    DuplicateStateError,
    IndexOutOfRangeError,
    InvalidOrderError,
    InvalidShapeError,
    InvalidWeightError,
    MarkovChainError,
)
from .tables import TransitionTable, flatten_matrix, table_from_matrix
from .utils.rng import NumpyRandom, RandomSource, SeededRandom, seeded_rng

__all__ = [
    "MarkovChain",
    "History",
    "TransitionTable",
    "flatten_matrix",
    "table_from_matrix",
    "MarkovChainError",
    "InvalidOrderError",
    "InvalidShapeError",
    "InvalidWeightError",
    "DuplicateStateError",
    "IndexOutOfRangeError",
    "DegenerateContextError",
    "RandomSource",
    "SeededRandom",
    "NumpyRandom",
    "seeded_rng",
]
