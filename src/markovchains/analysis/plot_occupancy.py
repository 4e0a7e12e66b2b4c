"""Plot per-state visit frequencies of a generation run."""

import argparse
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd


def occupancy_table(sequences_csv: Path) -> pd.DataFrame:
    """Rows: seed, columns: state, values: relative visit frequency."""
    df = pd.read_csv(sequences_csv, dtype={"state": str})
    missing = {"seed", "state"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns in {sequences_csv}: {sorted(missing)}")
    counts = df.groupby(["seed", "state"]).size().unstack(fill_value=0)
    return counts.div(counts.sum(axis=1), axis=0)


def plot_occupancy(run_dir: Path, outpath: Optional[Path] = None) -> Path:
    sequences_csv = run_dir / "sequences.csv"
    if not sequences_csv.exists():
        raise FileNotFoundError(f"Missing {sequences_csv}")

    freqs = occupancy_table(sequences_csv)
    mean = freqs.mean(axis=0)
    std = freqs.std(axis=0, ddof=1).fillna(0.0)

    fig, ax = plt.subplots(figsize=(max(4.0, 0.8 * len(mean)), 3.5))
    ax.bar(mean.index.astype(str), mean.values, yerr=std.values, capsize=3)
    ax.set_xlabel("state")
    ax.set_ylabel("visit frequency")
    ax.set_title(f"{run_dir.name} ({len(freqs)} seed{'s' if len(freqs) != 1 else ''})")
    fig.tight_layout()

    outpath = outpath or run_dir / "occupancy.png"
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outpath, dpi=150)
    plt.close(fig)
    return outpath


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("run_dir", type=Path)
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args()
    print(f"Wrote {plot_occupancy(args.run_dir, args.out)}")


if __name__ == "__main__":
    main()
