import math
from typing import Sequence

from markovchains.tables.transition_table import TransitionTable
from markovchains.types import StateIndex


def _row_entropy(row: Sequence[float], log_base: float) -> float:
    total = sum(row)
    if total <= 0.0:
        return math.nan
    h = 0.0
    for w in row:
        if w <= 0.0:
            continue
        p = w / total
        h -= p * math.log(p)
    if log_base != math.e:
        h /= math.log(log_base)
    return h


def context_entropy(table: TransitionTable, context: Sequence[StateIndex], log_base: float = math.e) -> float:
    """
    Entropy of the next-state distribution for one context:

        H(X_{t+1} | context) = - sum_x p(x|context) log p(x|context)

    Rows are rescaled before use, so unnormalized tables are fine.
    Returns NaN for a zero-sum context.

    log_base:
      - math.e -> nats
      - 2.0    -> bits
    """
    return _row_entropy(table.row(context).tolist(), log_base)


def mean_context_entropy(table: TransitionTable, log_base: float = math.e) -> float:
    """Unweighted mean of `context_entropy` over contexts with positive total weight."""
    rows = table.weights.reshape(table.context_count, table.state_count)
    entropies = []
    for row in rows.tolist():
        h = _row_entropy(row, log_base)
        if not math.isnan(h):
            entropies.append(h)
    if not entropies:
        return math.nan
    return sum(entropies) / len(entropies)
