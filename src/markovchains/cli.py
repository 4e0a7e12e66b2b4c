import argparse
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from markovchains.experiments.registry import PROCESS_REGISTRY
from markovchains.experiments.runner import run_generation
from markovchains.processes.chain_process import ChainProcess
from markovchains.tables.shapes import table_from_matrix
from markovchains.utils.io import save_json
from markovchains.utils.logging import configure_logging

LOGGER = logging.getLogger(__name__)


def _make_outdir(base: Path, process_name: str, length: int, seeds: Sequence[int], run_id: Optional[str]) -> Path:
    if base != Path("results/run"):
        return base
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    generated_id = run_id or f"{timestamp}_{process_name}__L{length}__s{min(seeds)}-{max(seeds)}"
    return Path("results") / generated_id


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate sequences from an N-th order Markov chain.")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--process", choices=PROCESS_REGISTRY.keys(), help="Preset chain to run.")
    source.add_argument(
        "--matrix",
        type=str,
        help="JSON nested list of transition weights; 2D for order 1, 3D for order 2, ...",
    )
    parser.add_argument("--states", nargs="+", default=None, help="State labels for --matrix, in index order.")
    parser.add_argument("--strict", action="store_true", help="Fail on zero-weight contexts instead of falling back.")

    parser.add_argument("--length", type=int, default=100)
    parser.add_argument("--seeds", nargs="+", type=int, default=[0], help="Random seeds.")

    parser.add_argument("--outdir", type=Path, default=Path("results/run"))
    parser.add_argument("--force", action="store_true", help="Allow writing into an existing run directory.")
    parser.add_argument("--run-id", type=str, default=None, help="Optional run ID.")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="CLI logging verbosity.",
    )
    return parser.parse_args(argv)


def _build_process(args: argparse.Namespace) -> ChainProcess:
    if args.process is not None:
        if args.states is not None:
            raise ValueError("--states is only valid together with --matrix.")
        if args.strict:
            raise ValueError("--strict is only valid together with --matrix.")
        return PROCESS_REGISTRY[args.process]()

    try:
        matrix = json.loads(args.matrix)
    except json.JSONDecodeError as exc:
        raise ValueError(f"--matrix is not valid JSON: {exc}") from exc
    table = table_from_matrix(matrix, strict=args.strict)
    states = args.states if args.states is not None else [str(i) for i in range(table.state_count)]
    return ChainProcess(states, table, name="custom")


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    if args.length < 1:
        raise ValueError("--length must be >= 1.")

    process = _build_process(args)

    args.outdir = _make_outdir(
        base=args.outdir,
        process_name=process.name,
        length=args.length,
        seeds=args.seeds,
        run_id=args.run_id,
    )
    sequences_csv = args.outdir / "sequences.csv"
    if sequences_csv.exists():
        if not args.force:
            raise FileExistsError(
                f"Output directory {args.outdir} already exists. Use --force or a fresh --outdir."
            )
        sequences_csv.unlink()

    config = {
        "process": process.name,
        "order": process.table.order,
        "states": list(process.states),
        "strict": process.table.strict,
        "length": args.length,
        "seeds": args.seeds,
    }
    args.outdir.mkdir(parents=True, exist_ok=True)
    save_json(args.outdir / "config.json", config)
    LOGGER.info(
        "Running chain | process=%s order=%d states=%d seeds=%d outdir=%s",
        process.name,
        process.table.order,
        len(process.states),
        len(args.seeds),
        args.outdir,
    )

    run_generation(process, length=args.length, seeds=args.seeds, outdir=args.outdir)
    LOGGER.info("Done. Outputs in %s", args.outdir)


if __name__ == "__main__":
    main()
