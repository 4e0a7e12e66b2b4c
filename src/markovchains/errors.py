"""Exceptions raised by the transition table and the chain wrapper."""


class MarkovChainError(Exception):
    """Base class for every contract violation raised by this package."""


class InvalidOrderError(MarkovChainError, ValueError):
    pass


class InvalidShapeError(MarkovChainError, ValueError):
    pass


class InvalidWeightError(MarkovChainError, ValueError):
    pass


class DuplicateStateError(MarkovChainError, ValueError):
    pass


class IndexOutOfRangeError(MarkovChainError, IndexError):
    pass


class DegenerateContextError(MarkovChainError, ValueError):
    """Raised by strict tables when sampling a context whose weights sum to zero."""
