"""Named reducers for collapsing a window of values into one data point."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence

import numpy as np

from .buffers import Reducer


def mean(values: Sequence[float] | np.ndarray) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))


def minimum(values: Sequence[float] | np.ndarray) -> float:
    return float(np.min(np.asarray(values, dtype=float)))


def maximum(values: Sequence[float] | np.ndarray) -> float:
    return float(np.max(np.asarray(values, dtype=float)))


def total(values: Sequence[float] | np.ndarray) -> float:
    return float(np.sum(np.asarray(values, dtype=float)))


def median(values: Sequence[float] | np.ndarray) -> float:
    return float(np.median(np.asarray(values, dtype=float)))


def rms(values: Sequence[float] | np.ndarray) -> float:
    """Root mean square, handy for vibration or noise telemetry."""

    arr = np.asarray(values, dtype=float)
    return float(np.sqrt(np.mean(arr**2)))


def first(values: Sequence[Any]) -> Any:
    return values[0]


def last(values: Sequence[Any]) -> Any:
    return values[-1]


REDUCERS: Dict[str, Callable[..., Any]] = {
    "mean": mean,
    "average": mean,
    "avg": mean,
    "min": minimum,
    "max": maximum,
    "sum": total,
    "median": median,
    "rms": rms,
    "first": first,
    "last": last,
}


def available_reducers() -> List[str]:
    return sorted(REDUCERS)


def get_reducer(name: str) -> Reducer:
    """Look up a reducer by (case-insensitive) name."""

    key = str(name).strip().lower()
    reducer = REDUCERS.get(key)
    if reducer is None:
        raise ValueError(f"Unknown reducer '{name}'. Available: {available_reducers()}")
    return reducer


def resolve_reducer(spec: Reducer | str) -> Reducer:
    if callable(spec):
        return spec
    return get_reducer(spec)
