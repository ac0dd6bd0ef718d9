"""Command-line entry point for primal-sweep.

Running ``primal-sweep`` with no arguments performs the reference sweep and
writes ``results.csv`` to the working directory. Optional flags select a
YAML config, the output path, the worker count and the log settings.
"""

from __future__ import annotations

import argparse
import logging
import sys

from primal_sweep import __version__
from primal_sweep.exceptions import PrimalSweepError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primal-sweep",
        description="Integrate ODE models under Primal Logic perturbations over a parameter grid",
    )
    parser.add_argument("--version", action="version", version=f"primal-sweep {__version__}")
    parser.add_argument("--config", default=None, help="Path to YAML sweep config")
    parser.add_argument("--output", default=None, help="Result CSV path (default: results.csv)")
    parser.add_argument("--workers", type=int, default=None, help="Concurrent integration workers")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument(
        "--log-format", choices=["text", "json"], default=None, help="Log output format"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the primal-sweep CLI."""
    from primal_sweep.sweep.driver import run_sweep
    from primal_sweep.utils.config import SweepConfig, load_config, merge_configs
    from primal_sweep.utils.logging import setup_logging

    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else SweepConfig()
        updates: dict[str, object] = {}
        if args.output is not None:
            updates["output"] = args.output
        if args.workers is not None:
            updates["workers"] = args.workers
        if updates:
            config = SweepConfig.model_validate(
                merge_configs(config.model_dump(mode="json"), updates)
            )

        log_cfg = config.logging
        setup_logging(
            level=args.log_level or log_cfg.level,
            log_format=args.log_format or log_cfg.format,
            log_file=log_cfg.log_file,
            module_levels=log_cfg.module_levels,
        )

        summary = run_sweep(config)
    except PrimalSweepError as exc:
        logger.error(str(exc))
        sys.exit(1)
    except ValueError as exc:
        # pydantic validation of CLI overrides
        logger.error(f"Invalid arguments: {exc}")
        sys.exit(1)

    print(f"wrote {summary.output}")


__all__ = ["build_parser", "main"]
