from .shapes import flatten_matrix, table_from_matrix
from .transition_table import TransitionTable

__all__ = [
    "TransitionTable",
    "flatten_matrix",
    "table_from_matrix",
]
