"""Conversion of nested (hypercube) transition matrices into the flat table layout."""

from typing import Any, Optional, Tuple

import numpy as np

from markovchains.errors import InvalidShapeError

from .transition_table import TransitionTable


def flatten_matrix(matrix: Any, expected_order: Optional[int] = None) -> Tuple[int, int, np.ndarray]:
    """
    Flatten an (order+1)-dimensional matrix row-major.

    matrix[i_0]...[i_{k-1}][i_k] is the weight of moving to i_k after the
    context (i_0, ..., i_{k-1}), oldest first. A 2D square matrix is an
    order-1 chain, a 3D cubical matrix an order-2 chain.

    Returns (order, state_count, flat_weights).
    """
    try:
        arr = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidShapeError(f"transition matrix must be a rectangular numeric array: {exc}") from exc

    if arr.ndim < 2:
        raise InvalidShapeError(f"transition matrix needs at least 2 dimensions, got {arr.ndim}.")
    if expected_order is not None and arr.ndim != expected_order + 1:
        raise InvalidShapeError(
            f"an order-{expected_order} chain needs a {expected_order + 1}-dimensional matrix, "
            f"got {arr.ndim} dimensions."
        )

    state_count = arr.shape[-1]
    if any(dim != state_count for dim in arr.shape):
        raise InvalidShapeError(f"transition matrix must have equal dimensions, got shape {arr.shape}.")

    return arr.ndim - 1, state_count, arr.reshape(-1)


def table_from_matrix(
    matrix: Any,
    *,
    expected_order: Optional[int] = None,
    strict: bool = False,
) -> TransitionTable:
    order, state_count, flat = flatten_matrix(matrix, expected_order=expected_order)
    return TransitionTable(order, state_count, flat, strict=strict)
