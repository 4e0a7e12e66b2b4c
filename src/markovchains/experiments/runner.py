import logging
import math
import time
from pathlib import Path
from typing import Any, Dict, List, Sequence

from markovchains.metrics import mean_context_entropy, state_frequencies
from markovchains.processes.chain_process import ChainProcess
from markovchains.utils.io import save_csv, save_json

LOGGER = logging.getLogger(__name__)

SEQUENCE_FIELDS = ["seed", "step", "state", "index"]


def run_generation(
    process: ChainProcess,
    length: int,
    seeds: Sequence[int],
    outdir: Path,
) -> List[Dict[str, Any]]:
    """
    Generate one sequence per seed from `process` and write

      - sequences.csv: one row per (seed, step)
      - summary.json:  table facts plus per-seed state frequencies

    Returns the per-seed summaries.
    """
    if length < 1:
        raise ValueError(f"length must be >= 1, got {length}.")
    if not seeds:
        raise ValueError("At least one seed is required.")

    rows: List[Dict[str, Any]] = []
    runs: List[Dict[str, Any]] = []

    for i, seed in enumerate(seeds, start=1):
        t0 = time.perf_counter()
        sample = process.sample(length=length, seed=seed)
        latent = sample.latent if sample.latent is not None else [math.nan] * len(sample.x)
        for step, (state, index) in enumerate(zip(sample.x, latent)):
            rows.append({"seed": seed, "step": step, "state": state, "index": index})

        freqs = state_frequencies(sample.x, process.states)
        elapsed = time.perf_counter() - t0
        runs.append(
            {
                "seed": seed,
                "length": len(sample.x),
                "frequencies": {str(s): p for s, p in freqs.items()},
                "elapsed_s": elapsed,
            }
        )
        LOGGER.info("Seed %d/%d | seed=%d length=%d (%.3fs)", i, len(seeds), seed, len(sample.x), elapsed)

    save_csv(outdir / "sequences.csv", rows, fieldnames=SEQUENCE_FIELDS)
    save_json(
        outdir / "summary.json",
        {
            "process": process.name,
            "order": process.table.order,
            "states": [str(s) for s in process.states],
            "mean_context_entropy_bits": mean_context_entropy(process.table, log_base=2.0),
            "degenerate_contexts": [list(process.table.context_of(c)) for c in process.table.degenerate_contexts()],
            "runs": runs,
        },
    )
    return runs
