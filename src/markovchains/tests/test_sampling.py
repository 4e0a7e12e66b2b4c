import logging
import math
import random
from collections import Counter

import pytest

from markovchains.errors import DegenerateContextError, IndexOutOfRangeError, InvalidShapeError
from markovchains.tables.transition_table import TransitionTable
from markovchains.utils.rng import seeded_rng


def _table(*rows: list[float], strict: bool = False) -> TransitionTable:
    state_count = len(rows[0])
    flat = [w for row in rows for w in row]
    return TransitionTable(1, state_count, flat, strict=strict).normalize()


def test_draw_zero_selects_first_candidate() -> None:
    table = _table([0.3, 0.7], [0.5, 0.5])
    assert table.sample_next([0], 0.0) == 0


def test_high_draw_selects_last_candidate() -> None:
    table = _table([0.3, 0.7], [0.5, 0.5])
    assert table.sample_next([0], 0.99) == 1


def test_draw_on_cumulative_boundary_selects_that_candidate() -> None:
    table = _table([0.25, 0.75], [0.5, 0.5])
    assert table.sample_next([0], 0.25) == 0
    assert table.sample_next([0], 0.2500001) == 1


def test_zero_weight_candidates_are_never_selected() -> None:
    table = _table([0.0, 1.0], [1.0, 0.0])
    for draw in (0.0, 0.5, 0.999999):
        assert table.sample_next([0], draw) == 1
        assert table.sample_next([1], draw) == 0


def test_uses_the_row_of_the_given_context() -> None:
    table = TransitionTable(2, 2, [1, 0, 0, 1, 1, 0, 0, 1]).normalize()
    # the row is picked by (older, newer); the newer state repeats itself here
    assert table.sample_next([1, 0], 0.5) == 0
    assert table.sample_next([0, 1], 0.5) == 1


def test_rounding_shortfall_falls_back_to_last_positive_candidate() -> None:
    # the last next-state column is zero, so a fallback to S-1 would be visible
    state_count = 40
    rng = random.Random(0)
    weights = [
        0.0 if j == state_count - 1 else rng.random() for _ in range(state_count) for j in range(state_count)
    ]
    table = TransitionTable(1, state_count, weights).normalize()

    short_rows = []
    for c in range(state_count):
        total = 0.0
        for w in table.row([c]).tolist():
            total += w
        if total < math.nextafter(1.0, 0.0):
            short_rows.append((c, total))
    assert short_rows, "expected at least one row whose running total stays below 1"

    for c, total in short_rows:
        draw = math.nextafter(total, 1.0)
        assert draw < 1.0
        assert table.sample_next([c], draw) == state_count - 2


def test_largest_draw_never_selects_a_zero_weight_candidate() -> None:
    table = _table([1.0, 2.0, 0.0], [1.0, 1.0, 1.0], [0.1] * 2 + [0.0])
    for c in range(3):
        assert table.sample_next([c], math.nextafter(1.0, 0.0)) == (2 if c == 1 else 1)


@pytest.mark.parametrize("draw", [-0.1, 1.0, 1.5, math.nan, math.inf])
def test_draw_outside_unit_interval_is_rejected(draw: float) -> None:
    table = _table([0.5, 0.5], [0.5, 0.5])
    with pytest.raises(ValueError, match=r"draw must be in \[0, 1\)"):
        table.sample_next([0], draw)


def test_unnormalized_table_is_normalized_on_first_sample() -> None:
    table = TransitionTable(1, 2, [1.0, 3.0, 1.0, 1.0])
    assert not table.normalized
    # the normalized row is [0.25, 0.75]
    assert table.sample_next([0], 0.5) == 1
    assert table.sample_next([0], 0.2) == 0
    assert table.normalized
    assert table.row([0]).tolist() == [0.25, 0.75]


def test_zero_sum_context_falls_back_to_last_state(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        table = _table([0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [0.0, 2.0, 0.0])
    assert "zero total weight" in caplog.text
    assert table.sample_next([0], 0.0) == 2
    assert table.sample_next([0], 0.7) == 2


def test_zero_sum_context_raises_when_strict() -> None:
    table = _table([0.0, 0.0], [1.0, 1.0], strict=True)
    assert table.sample_next([1], 0.1) == 0
    with pytest.raises(DegenerateContextError, match=r"context \(0,\)"):
        table.sample_next([0], 0.1)


@pytest.mark.parametrize("context", [[2], [-1], [100]])
def test_out_of_range_context_is_rejected(context: list[int]) -> None:
    table = _table([0.5, 0.5], [0.5, 0.5])
    with pytest.raises(IndexOutOfRangeError, match="state indices in \\[0, 2\\)"):
        table.sample_next(context, 0.5)


def test_out_of_range_error_is_an_index_error() -> None:
    table = _table([0.5, 0.5], [0.5, 0.5])
    with pytest.raises(IndexError):
        table.sample_next([3], 0.5)


def test_context_length_must_match_order() -> None:
    table = _table([0.5, 0.5], [0.5, 0.5])
    with pytest.raises(InvalidShapeError, match="exactly 1 state indices"):
        table.sample_next([0, 1], 0.5)


def test_non_integer_context_is_rejected() -> None:
    table = _table([0.5, 0.5], [0.5, 0.5])
    with pytest.raises(TypeError, match="integer state indices"):
        table.sample_next([0.5], 0.5)


def test_sampled_frequencies_follow_the_row() -> None:
    table = _table([0.2, 0.5, 0.3], [1.0, 0.0, 0.0], [1.0, 0.0, 0.0])
    rng = seeded_rng(0)
    n = 20_000
    counts = Counter(table.sample_next([0], rng.next_float()) for _ in range(n))
    for candidate, p in enumerate([0.2, 0.5, 0.3]):
        assert abs(counts[candidate] / n - p) < 0.02
