from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from markovchains.types import Label, StateIndex


@dataclass(frozen=True)
class Sample:
    x: Sequence[Label]
    latent: Optional[Sequence[StateIndex]] = None


class Process(Protocol):
    @property
    def name(self) -> str:
        ...

    def sample(self, length: int, seed: int) -> Sample:
        ...
