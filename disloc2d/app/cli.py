"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
import logging

from ..config import load_config, parse_ensemble_config
from ..distribution import RandomDislocationDistribution
from ..errors import ConfigError, SamplingExhaustedError
from ..lattice import LatticeExtent
from ..metrics import ensemble_summary
from ..plotting import save_ensemble_png
from ..selfcheck import run_selfcheck


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(
        prog="disloc2d", description="Random charge-neutral dislocation ensembles"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log sampler diagnostics at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    sample_p = sub.add_parser("sample", help="Sample ensembles from a YAML config")
    sample_p.add_argument("config", type=str, help="Path to config YAML")
    sample_p.add_argument("--seed", type=int, default=None, help="Override config seed")
    sample_p.add_argument("--count", type=int, default=None, help="Override number of ensembles")
    sample_p.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Write a PNG plot of the first ensemble to this path",
    )
    sample_p.add_argument(
        "--summary-only",
        action="store_true",
        help="Print only the per-ensemble summary lines.",
    )

    selfcheck_p = sub.add_parser(
        "selfcheck", help="Run dependency and smoke self-check"
    )
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke sampling).",
    )

    return parser


def _run_sample(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        cfg = parse_ensemble_config(load_config(args.config))
        dist = RandomDislocationDistribution.from_config(cfg, rng=args.seed)
    except ConfigError as exc:
        parser.exit(2, f"Error: {exc}\n")

    n_ensembles = cfg.ensembles if args.count is None else int(args.count)
    if n_ensembles < 1:
        parser.exit(2, "Error: --count must be >= 1\n")
    extent = LatticeExtent(cfg.lattice.Lx, cfg.lattice.Ly)

    try:
        for idx, ensemble in enumerate(dist.sample(n_ensembles)):
            summary = ensemble_summary(ensemble, extent)
            print(
                f"ensemble {idx}: count={summary['count']}, pairs={summary['pairs']}, "
                f"concentration={summary['concentration']:.4f}, "
                f"net=({summary['net_burgers_x']:g}, {summary['net_burgers_y']:g})"
            )
            if not args.summary_only:
                for j, dis in enumerate(ensemble):
                    bx, by = dis.burgers_vector
                    x, y = dis.origin
                    print(f"  {j:4d}  b=({bx:g}, {by:g})  origin=({x:g}, {y:g})")
            if idx == 0 and args.plot:
                path = save_ensemble_png(ensemble, extent, args.plot)
                print(f"Plot: {path}")
    except SamplingExhaustedError as exc:
        parser.exit(1, f"Error: {exc}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "sample":
        return _run_sample(args, parser)

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2
