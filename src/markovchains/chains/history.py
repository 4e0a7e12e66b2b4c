import operator
from collections import deque
from typing import Deque, Iterator, Tuple

from markovchains.errors import IndexOutOfRangeError, InvalidOrderError
from markovchains.types import StateIndex


class History:
    """
    Window of the `order + 1` most recent state indices, oldest first.

    Backed by a deque with maxlen `order + 1`, so pushing a new index drops
    the oldest one and the window never grows.
    """

    def __init__(self, order: int, fill: StateIndex = 0):
        if order < 1:
            raise InvalidOrderError(f"order must be >= 1, got {order}.")
        self.order = order
        self._window: Deque[StateIndex] = deque(maxlen=order + 1)
        self.reset(fill)

    def __len__(self) -> int:
        return len(self._window)

    def __iter__(self) -> Iterator[StateIndex]:
        return iter(self._window)

    def __repr__(self) -> str:
        return f"History({list(self._window)!r})"

    def reset(self, fill: StateIndex = 0) -> None:
        self._window.clear()
        while len(self._window) <= self.order:
            self._window.append(fill)

    def context(self) -> Tuple[StateIndex, ...]:
        """The `order` newest entries, i.e. what remains once the oldest is dropped."""
        return tuple(self._window)[1:]

    def push(self, index: StateIndex) -> None:
        self._window.append(index)

    def back(self, n: int) -> StateIndex:
        try:
            n = operator.index(n)
        except TypeError:
            raise TypeError(f"back expects an integer step count; got {type(n).__name__}.") from None
        if not 0 <= n <= self.order:
            raise IndexOutOfRangeError(f"Expected 0 <= n <= {self.order}, received n = {n}.")
        return self._window[-1 - n]
