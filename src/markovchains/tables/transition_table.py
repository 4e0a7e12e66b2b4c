import logging
import operator
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from markovchains.errors import (
    DegenerateContextError,
    IndexOutOfRangeError,
    InvalidOrderError,
    InvalidShapeError,
    InvalidWeightError,
)
from markovchains.types import StateIndex, Weights

LOGGER = logging.getLogger(__name__)


def _require_index(value: object, *, state_count: int, position: int, name: str) -> int:
    try:
        index = operator.index(value)
    except TypeError:
        raise TypeError(
            f"{name} expects integer state indices; got {type(value).__name__} at position {position}."
        ) from None
    if not 0 <= index < state_count:
        raise IndexOutOfRangeError(
            f"{name} expects state indices in [0, {state_count}); got {index} at position {position}."
        )
    return index


class TransitionTable:
    """
    Next-state weights of an order-k chain over S states, stored flat.

    The table is conceptually a (k+1)-dimensional array indexed oldest state
    first, with the last axis being the candidate next state. The weight for
    (i_0, ..., i_{k-1}) -> i_k lives at

        offset = i_0*S^k + i_1*S^(k-1) + ... + i_{k-1}*S + i_k

    so each of the S^k contexts owns the contiguous row [c*S, c*S + S).

    Weights are copied on construction. After `normalize()` the buffer is
    frozen and the table can be shared read-only between chains.

    strict:
      - False -> sampling a zero-sum context returns the last state index
      - True  -> sampling a zero-sum context raises DegenerateContextError
    """

    def __init__(self, order: int, state_count: int, weights: Weights, *, strict: bool = False):
        order = operator.index(order)
        state_count = operator.index(state_count)
        if order < 1:
            raise InvalidOrderError(f"order must be >= 1, got {order}.")
        if state_count < 1:
            raise InvalidShapeError(f"state_count must be >= 1, got {state_count}.")

        try:
            flat = np.array(weights, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidWeightError(f"weights must be a sequence of numbers: {exc}") from exc

        if flat.ndim != 1:
            raise InvalidShapeError(f"weights must be flat, got an array of shape {flat.shape}.")
        expected = state_count ** (order + 1)
        if flat.size != expected:
            raise InvalidShapeError(
                f"order={order} with {state_count} states needs {expected} weights, got {flat.size}."
            )

        non_finite = np.flatnonzero(~np.isfinite(flat))
        if non_finite.size:
            bad = int(non_finite[0])
            raise InvalidWeightError(f"weights must be finite; got {flat[bad]} at offset {bad}.")
        negative = np.flatnonzero(flat < 0.0)
        if negative.size:
            bad = int(negative[0])
            raise InvalidWeightError(f"weights must be non-negative; got {flat[bad]} at offset {bad}.")

        self._order = order
        self._state_count = state_count
        self._weights = flat
        self._strict = bool(strict)
        self._normalized = False

    def __repr__(self) -> str:
        return (
            f"TransitionTable(order={self._order}, state_count={self._state_count}, "
            f"normalized={self._normalized}, strict={self._strict})"
        )

    def __len__(self) -> int:
        return int(self._weights.size)

    @property
    def order(self) -> int:
        return self._order

    @property
    def state_count(self) -> int:
        return self._state_count

    @property
    def context_count(self) -> int:
        return self._state_count ** self._order

    @property
    def normalized(self) -> bool:
        return self._normalized

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def weights(self) -> np.ndarray:
        return self._readonly(self._weights)

    def as_array(self) -> np.ndarray:
        """Read-only view shaped (S,) * (order + 1)."""
        return self._readonly(self._weights.reshape((self._state_count,) * (self._order + 1)))

    def _rows(self) -> np.ndarray:
        return self._weights.reshape(self.context_count, self._state_count)

    @staticmethod
    def _readonly(view: np.ndarray) -> np.ndarray:
        view = view.view()
        view.flags.writeable = False
        return view

    def _fold(self, indices: Sequence[StateIndex], length: int, name: str) -> int:
        if len(indices) != length:
            raise InvalidShapeError(f"{name} must hold exactly {length} state indices, got {len(indices)}.")
        # Horner evaluation of the mixed-radix offset.
        acc = 0
        for position, value in enumerate(indices):
            acc = acc * self._state_count + _require_index(
                value, state_count=self._state_count, position=position, name=name
            )
        return acc

    def offset(self, indices: Sequence[StateIndex]) -> int:
        """Flat offset of a full (context..., next) index tuple."""
        return self._fold(indices, self._order + 1, "indices")

    def context_index(self, context: Sequence[StateIndex]) -> int:
        return self._fold(context, self._order, "context")

    def context_of(self, context_index: int) -> Tuple[StateIndex, ...]:
        if not 0 <= context_index < self.context_count:
            raise IndexOutOfRangeError(
                f"context index must be in [0, {self.context_count}); got {context_index}."
            )
        digits = np.unravel_index(context_index, (self._state_count,) * self._order)
        return tuple(int(d) for d in digits)

    def row(self, context: Sequence[StateIndex]) -> np.ndarray:
        base = self.context_index(context) * self._state_count
        return self._readonly(self._weights[base : base + self._state_count])

    def degenerate_contexts(self) -> List[int]:
        """Context indices whose weights sum to zero."""
        return np.flatnonzero(self._rows().sum(axis=1) <= 0.0).tolist()

    def _describe(self, context_indices: Iterable[int], limit: int = 5) -> str:
        shown = [self.context_of(c) for c in list(context_indices)[:limit]]
        return ", ".join(str(c) for c in shown)

    def normalize(self) -> "TransitionTable":
        """
        Scale every context row to sum to one, then freeze the buffer.

        Zero-sum rows are left as they are and reported. Calling this again
        is a no-op.
        """
        if self._normalized:
            return self

        rows = self._rows()
        sums = rows.sum(axis=1)
        live = sums > 0.0
        rows[live] /= sums[live, np.newaxis]

        degenerate = np.flatnonzero(~live)
        if degenerate.size:
            LOGGER.warning(
                "%d of %d contexts have zero total weight and stay unnormalized (e.g. %s).",
                degenerate.size,
                self.context_count,
                self._describe(degenerate.tolist()),
            )

        self._weights.flags.writeable = False
        self._normalized = True
        LOGGER.debug("Normalized %r", self)
        return self

    def sample_next(self, context: Sequence[StateIndex], draw: float) -> StateIndex:
        """
        Inverse-CDF sample of the next state index for `context`.

        Returns the first positive-weight candidate whose cumulative weight
        reaches `draw`. If rounding leaves the total short of `draw`, the last
        positive-weight candidate is returned. Zero-sum rows yield
        state_count - 1 (or raise when the table is strict).

        `draw` must lie in [0, 1). A table that has not been normalized yet is
        normalized (and frozen) on the first call.
        """
        if not 0.0 <= draw < 1.0:
            raise ValueError(f"draw must be in [0, 1), got {draw!r}.")
        if not self._normalized:
            self.normalize()

        c = self.context_index(context)
        base = c * self._state_count

        cumulative = 0.0
        last_positive = -1
        for candidate, weight in enumerate(self._weights[base : base + self._state_count].tolist()):
            if weight <= 0.0:
                continue
            cumulative += weight
            last_positive = candidate
            if cumulative >= draw:
                return candidate

        if last_positive >= 0:
            return last_positive
        if self._strict:
            raise DegenerateContextError(
                f"context {self.context_of(c)} has zero total weight; no next state can be sampled."
            )
        return self._state_count - 1
