"""Load raw samples to replay through a store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pandas as pd


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_samples(path: str | Path, value_column: str | None = None) -> List[float]:
    """Load samples from CSV, JSON list, or JSONL file."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sample file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        values: list[float] = []
        for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
            if not line.strip():
                continue
            obj = json.loads(line)
            if _is_number(obj):
                values.append(float(obj))
            elif isinstance(obj, dict) and value_column and _is_number(obj.get(value_column)):
                values.append(float(obj[value_column]))
            else:
                raise ValueError(f"{path}:{lineno}: expected a number or an object with numeric '{value_column}'")
        return values
    if suffix == ".json":
        loaded = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(loaded, list):
            raise ValueError("JSON sample file must contain a list of numbers")
        for position, item in enumerate(loaded):
            if not _is_number(item):
                raise ValueError(f"{path}: item {position} is not a number ({item!r})")
        return [float(x) for x in loaded]

    df = pd.read_csv(path)
    if value_column is None:
        value_column = "value" if "value" in df.columns else df.columns[0]
    if value_column not in df.columns:
        raise ValueError(f"Column '{value_column}' not found. Available: {list(df.columns)}")
    return df[value_column].astype(float).tolist()
