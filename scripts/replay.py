"""CLI wrapper to replay a sample file through a store and export its timeline."""

from __future__ import annotations

import argparse
from pathlib import Path

from rrstore import StoreConfig, load_samples, write_timeline


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay samples through a round-robin store")
    parser.add_argument("samples", type=Path, help="Path to CSV/JSON/JSONL samples")
    parser.add_argument("output", type=Path, help="Destination .csv or .json for the sample timeline")
    parser.add_argument("--config", type=Path, help="Store configuration (YAML or JSON)")
    args = parser.parse_args()

    config = StoreConfig.from_file(args.config) if args.config else StoreConfig()
    store = config.build()
    samples = load_samples(args.samples)
    store.extend(samples)
    path = write_timeline(store, args.output)
    print(f"Replayed {len(samples)} samples into {store.capacity_samples} timeline slots at {path}")


if __name__ == "__main__":
    main()
