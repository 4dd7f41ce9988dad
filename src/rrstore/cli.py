"""Command line interface for the round-robin store."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from . import __version__
from .config import StoreConfig, load_config_file
from .export import data_points_frame, samples_frame, write_timeline
from .ingest import load_samples
from .logging_utils import configure_logging, log_store_event
from .reducers import available_reducers

logger = logging.getLogger(__name__)


def _print_result(result: Any, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, indent=2))
    else:
        print(result)


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, help="Store configuration (YAML or JSON)")
    parser.add_argument("--levels", type=int, help="Number of levels")
    parser.add_argument("--size", type=int, help="Data points in the coarsest level")
    parser.add_argument("--factor", type=int, help="Reducing factor between levels")
    parser.add_argument("--reducer", help="Reducer name (see `rrstore reducers`)")


def _store_config(args: argparse.Namespace) -> StoreConfig:
    raw = load_config_file(args.config) if args.config else {}
    overrides = {
        "num_levels": args.levels,
        "data_points_in_last_level": args.size,
        "reducing_factor": args.factor,
        "reducer": args.reducer,
    }
    return StoreConfig.from_mapping(raw, overrides={k: v for k, v in overrides.items() if v is not None})


def cmd_describe(args: argparse.Namespace) -> None:
    config = _store_config(args)
    layout = {"config": config.model_dump(), **config.build().describe()}
    if args.json:
        _print_result(layout, as_json=True)
        return
    print(
        f"{layout['num_levels']} levels, factor {layout['reducing_factor']}, "
        f"reducer {config.reducer}: {layout['capacity_data_points']} data points, "
        f"{layout['capacity_samples']} samples"
    )
    for level in layout["levels"]:
        print(
            f"  level {level['level']}: {level['data_points']} data points "
            f"x {level['raw_per_data_point']} raw each"
        )


def cmd_replay(args: argparse.Namespace) -> None:
    config = _store_config(args)
    store = config.build()
    log_store_event(logger, "store_built", store, reducer=config.reducer)

    samples = load_samples(args.samples, value_column=args.value_column)
    store.extend(samples)
    log_store_event(logger, "replay_complete", store, source=str(args.samples), pushed=len(samples))

    if args.output:
        path = write_timeline(store, args.output, data_points=args.data_points)
        print(f"Wrote {'data points' if args.data_points else 'samples'} for {len(samples)} pushes to {path}")
        return

    frame = data_points_frame(store) if args.data_points else samples_frame(store)
    if args.json:
        _print_result({"pushed": len(samples), "rows": frame.to_dict(orient="records")}, as_json=True)
    else:
        print(frame.to_string(index=False))


def cmd_reducers(args: argparse.Namespace) -> None:
    _print_result(available_reducers(), as_json=args.json)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rrstore",
        description="Inspect and replay data through fixed-memory multi-resolution time series stores.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON logs")

    sub = parser.add_subparsers(dest="command", required=True)

    describe = sub.add_parser("describe", help="Show the level layout and capacities of a store")
    _add_layout_arguments(describe)
    describe.add_argument("--json", action="store_true", help="Emit layout as JSON")
    describe.set_defaults(func=cmd_describe)

    replay = sub.add_parser("replay", help="Push a sample file through a store and dump its timeline")
    replay.add_argument("samples", type=Path, help="Path to CSV/JSON/JSONL samples")
    _add_layout_arguments(replay)
    replay.add_argument("--value-column", help="Column name for CSV/JSONL inputs")
    replay.add_argument("--data-points", action="store_true", help="Dump stored data points instead of samples")
    replay.add_argument("--output", type=Path, help="Write the read-out to a .csv or .json file")
    replay.add_argument("--json", action="store_true", help="Emit read-out as JSON")
    replay.set_defaults(func=cmd_replay)

    reducers = sub.add_parser("reducers", help="List available reducers")
    reducers.add_argument("--json", action="store_true", help="Emit names as JSON")
    reducers.set_defaults(func=cmd_reducers)

    version = sub.add_parser("version", help="Display the installed version")
    version.set_defaults(func=lambda args: print(__version__))

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, json_logs=args.json_logs)
    try:
        args.func(args)
    except Exception as exc:  # pragma: no cover - CLI surface
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
