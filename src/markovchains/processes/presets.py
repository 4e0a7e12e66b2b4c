"""Small ready-made chains used by the CLI and the tests."""

from markovchains.tables.shapes import table_from_matrix

from .chain_process import ChainProcess


def alternating() -> ChainProcess:
    """Deterministic A, B, A, B, ... from the default start state A."""
    table = table_from_matrix([[0.0, 1.0], [1.0, 0.0]])
    return ChainProcess(["A", "B"], table, name="alternating")


def weather() -> ChainProcess:
    # rows: today, columns: tomorrow
    table = table_from_matrix(
        [
            [6.0, 3.0, 1.0],  # sunny
            [4.0, 4.0, 2.0],  # cloudy
            [2.0, 3.0, 5.0],  # rainy
        ]
    )
    return ChainProcess(["sunny", "cloudy", "rainy"], table, name="weather")


def melody() -> ChainProcess:
    """Second-order walk over four notes that favours stepwise motion in the same direction."""
    notes = ["C", "D", "E", "G"]
    n = len(notes)
    weights = []
    for prev in range(n):
        plane = []
        for cur in range(n):
            direction = (cur > prev) - (cur < prev)
            row = []
            for nxt in range(n):
                step = nxt - cur
                w = 1.0
                if abs(step) == 1:
                    w += 2.0
                if direction and step * direction > 0:
                    w += 3.0
                if nxt == cur:
                    w = 0.5
                row.append(w)
            plane.append(row)
        weights.append(plane)
    return ChainProcess(notes, table_from_matrix(weights, expected_order=2), name="melody")
