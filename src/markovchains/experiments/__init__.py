from .registry import PROCESS_REGISTRY
from .runner import run_generation

__all__ = ["run_generation", "PROCESS_REGISTRY"]
