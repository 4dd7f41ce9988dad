"""Fixed-memory, multi-resolution round-robin time series storage."""

from importlib import metadata

from .buffers import CircularBuffer, Reducer, ReducingBuffer
from .config import StoreConfig, load_config_file
from .export import data_points_frame, samples_frame, write_timeline
from .ingest import load_samples
from .reducers import available_reducers, get_reducer, resolve_reducer
from .store import RoundRobinStore, build_store, level_sizes

try:
    __version__ = metadata.version("round-robin-store")
except metadata.PackageNotFoundError:  # pragma: no cover - running from a source checkout without installing
    __version__ = "0.1.0"

__all__ = [
    "CircularBuffer",
    "ReducingBuffer",
    "Reducer",
    "RoundRobinStore",
    "build_store",
    "level_sizes",
    "StoreConfig",
    "load_config_file",
    "available_reducers",
    "get_reducer",
    "resolve_reducer",
    "load_samples",
    "samples_frame",
    "data_points_frame",
    "write_timeline",
    "__version__",
]
