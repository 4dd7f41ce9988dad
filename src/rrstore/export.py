"""Tabular read-outs of a store's sample timeline and data points."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from .store import RoundRobinStore


def samples_frame(store: RoundRobinStore) -> pd.DataFrame:
    """One row per sample on the uniform timeline, newest first."""

    agos = range(store.capacity_samples)
    levels = [ago // store.samples_per_level for ago in agos]
    return pd.DataFrame(
        {
            "ago": list(agos),
            "level": levels,
            "repeat": [store.reducing_factor**level for level in levels],
            "value": [store.get_sample(ago) for ago in agos],
        }
    )


def data_points_frame(store: RoundRobinStore) -> pd.DataFrame:
    """One row per stored data point, newest first, finest level first."""

    rows = []
    index = 0
    for depth, level in enumerate(reversed(store.levels)):
        for _ in range(len(level)):
            rows.append({"index": index, "level": depth, "value": store.get_data_point(index)})
            index += 1
    return pd.DataFrame(rows, columns=["index", "level", "value"])


def write_timeline(store: RoundRobinStore, path: str | Path, *, data_points: bool = False) -> Path:
    """Write the sample timeline (or data points) as CSV or JSON."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in {".csv", ".json"}:
        raise ValueError(f"Unsupported export format '{suffix}'. Use .csv or .json")
    frame = data_points_frame(store) if data_points else samples_frame(store)
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        frame.to_csv(path, index=False)
    else:
        payload = {"layout": store.describe(), "rows": frame.to_dict(orient="records")}
        path.write_text(json.dumps(payload, indent=2, default=float), encoding="utf-8")
    return path
