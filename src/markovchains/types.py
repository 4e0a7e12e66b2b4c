from typing import Hashable, Sequence

# States are arbitrary hashable labels; the numeric core only ever sees indices.
Label = Hashable
StateIndex = int
Weights = Sequence[float]
LabelSequence = Sequence[Label]
