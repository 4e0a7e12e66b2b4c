from collections import Counter
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from markovchains.errors import DuplicateStateError, InvalidOrderError, InvalidShapeError
from markovchains.tables.shapes import table_from_matrix
from markovchains.tables.transition_table import TransitionTable
from markovchains.types import Label, StateIndex, Weights
from markovchains.utils.rng import RandomSource, resolve_random_source

from .history import History

_DEFAULT_STATE: StateIndex = 0


class MarkovChain:
    """
    N-th order Markov chain over arbitrary hashable state labels.

    The chain keeps the `order + 1` most recent states (oldest first, current
    last) and advances by sampling the next state from the transition table
    row selected by the `order` newest entries. History starts as
    `order + 1` copies of `states[0]`.

    `table` is either a TransitionTable (shared tables are fine, they are
    read-only once normalized) or a flat sequence of state_count ** (order + 1)
    weights. Weights need not be normalized.
    """

    def __init__(
        self,
        order: int,
        states: Sequence[Label],
        table: Union[TransitionTable, Weights],
        random_source: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
    ):
        labels = tuple(states)
        if not labels:
            raise InvalidShapeError("states must not be empty.")
        duplicates = [label for label, count in Counter(labels).items() if count > 1]
        if duplicates:
            raise DuplicateStateError(f"All states must be unique; duplicated: {duplicates!r}.")

        if isinstance(table, TransitionTable):
            if table.order != order:
                raise InvalidOrderError(f"chain order {order} does not match table order {table.order}.")
            if table.state_count != len(labels):
                raise InvalidShapeError(
                    f"table covers {table.state_count} states but {len(labels)} states were given."
                )
        else:
            table = TransitionTable(order, len(labels), table)

        self._states = labels
        self._index: Dict[Label, StateIndex] = {label: i for i, label in enumerate(labels)}
        self._table = table.normalize()
        self._random = resolve_random_source(random_source, seed)
        self._history = History(table.order, fill=_DEFAULT_STATE)

    # Convenience constructors for nested matrix input.

    @classmethod
    def from_matrix(
        cls,
        states: Sequence[Label],
        matrix: Any,
        random_source: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
        strict: bool = False,
    ) -> "MarkovChain":
        """Order is inferred from the matrix dimension (2D -> 1, 3D -> 2, ...)."""
        table = table_from_matrix(matrix, strict=strict)
        return cls(table.order, states, table, random_source, seed=seed)

    @classmethod
    def first_order(
        cls,
        states: Sequence[Label],
        matrix: Any,
        random_source: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
    ) -> "MarkovChain":
        """matrix[x][y] is the weight of moving to y from current state x."""
        return cls(1, states, table_from_matrix(matrix, expected_order=1), random_source, seed=seed)

    @classmethod
    def second_order(
        cls,
        states: Sequence[Label],
        matrix: Any,
        random_source: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
    ) -> "MarkovChain":
        """matrix[x][y][z] is the weight of moving to z given current state y and previous state x."""
        return cls(2, states, table_from_matrix(matrix, expected_order=2), random_source, seed=seed)

    def __repr__(self) -> str:
        return f"MarkovChain(order={self.order}, states={list(self._states)!r}, history={list(self.history)!r})"

    def __iter__(self) -> Iterator[Label]:
        return self

    def __next__(self) -> Label:
        return self.next()

    @property
    def order(self) -> int:
        return self._table.order

    @property
    def states(self) -> Tuple[Label, ...]:
        return self._states

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def history(self) -> Tuple[Label, ...]:
        return tuple(self._states[i] for i in self._history)

    @property
    def raw_history(self) -> Tuple[StateIndex, ...]:
        return tuple(self._history)

    def index_of(self, state: Label) -> StateIndex:
        try:
            return self._index[state]
        except KeyError:
            raise ValueError(f"{state!r} is not a state of this chain.") from None

    def next(self) -> Label:
        """Advance the chain by one step, consuming exactly one random draw."""
        draw = self._random.next_float()
        index = self._table.sample_next(self._history.context(), draw)
        self._history.push(index)
        return self._states[index]

    def current(self) -> Label:
        return self.previous(0)

    def previous(self, n: int = 1) -> Label:
        """The state `n` steps before the current one, 0 <= n <= order."""
        return self._states[self._history.back(n)]

    def reset_history(self) -> None:
        self._history.reset(_DEFAULT_STATE)

    def generate(self, length: int) -> List[Label]:
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}.")
        return [self.next() for _ in range(length)]
