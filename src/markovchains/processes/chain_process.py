import logging
from typing import Optional, Sequence, Tuple

from markovchains.chains.markov_chain import MarkovChain
from markovchains.tables.transition_table import TransitionTable
from markovchains.types import Label
from markovchains.utils.rng import seeded_rng

from .protocols import Process, Sample

LOGGER = logging.getLogger(__name__)


class ChainProcess(Process):
    """
    Seeded sequence generator over one shared transition table.

    Every call to `sample` builds a fresh MarkovChain with its own history and
    its own seeded random source; the table itself is normalized once here and
    only read afterwards.
    """

    def __init__(self, states: Sequence[Label], table: TransitionTable, name: Optional[str] = None):
        if table.state_count != len(states):
            raise ValueError(f"table covers {table.state_count} states but {len(states)} states were given.")
        self.states: Tuple[Label, ...] = tuple(states)
        self.table = table.normalize()
        self._name = name or f"order{table.order}_chain_{table.state_count}"

    @property
    def name(self) -> str:
        return self._name

    def chain(self, seed: int) -> MarkovChain:
        return MarkovChain(self.table.order, self.states, self.table, seeded_rng(seed))

    def sample(self, length: int, seed: int) -> Sample:
        if length < 1:
            raise ValueError(f"length must be >= 1, got {length}.")

        chain = self.chain(seed)
        x = chain.generate(length)
        latent = [chain.index_of(label) for label in x]
        LOGGER.debug("%s: sampled %d states with seed %d", self.name, length, seed)
        return Sample(x=x, latent=latent)
