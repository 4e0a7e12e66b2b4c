from collections import Counter
from typing import Dict, Sequence

from markovchains.types import Label


def state_frequencies(sequence: Sequence[Label], states: Sequence[Label]) -> Dict[Label, float]:
    """Relative visit frequency of every state in `states`, in that order."""
    if len(sequence) == 0:
        raise ValueError("state_frequencies needs a non-empty sequence.")
    known = set(states)
    counts = Counter(sequence)
    unknown = [s for s in counts if s not in known]
    if unknown:
        raise ValueError(f"sequence contains labels outside the state set: {unknown!r}.")
    total = len(sequence)
    return {s: counts.get(s, 0) / total for s in states}
