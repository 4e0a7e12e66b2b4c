from .entropy import context_entropy, mean_context_entropy
from .occupancy import state_frequencies

__all__ = [
    "context_entropy",
    "mean_context_entropy",
    "state_frequencies",
]
