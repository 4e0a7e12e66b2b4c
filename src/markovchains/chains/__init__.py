from .history import History
from .markov_chain import MarkovChain

__all__ = [
    "History",
    "MarkovChain",
]
