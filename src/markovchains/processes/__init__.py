from .chain_process import ChainProcess
from .presets import alternating, melody, weather
from .protocols import Process, Sample

__all__ = [
    "Process",
    "Sample",
    "ChainProcess",
    "alternating",
    "weather",
    "melody",
]
