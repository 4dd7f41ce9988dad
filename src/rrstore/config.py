"""Store configuration model and file loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .reducers import get_reducer
from .store import RoundRobinStore


class StoreConfig(BaseModel):
    """Layout of a round-robin store.

    ``data_points_in_last_level`` is the size of the coarsest level; every finer
    level is ``reducing_factor`` times larger.
    """

    model_config = ConfigDict(extra="ignore")

    num_levels: int = 3
    data_points_in_last_level: int = 60
    reducing_factor: int = 4
    reducer: str = "mean"
    fill_value: float = 0.0

    @field_validator("num_levels", "data_points_in_last_level")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("reducing_factor")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("reducer")
    @classmethod
    def _known_reducer(cls, value: str) -> str:
        get_reducer(value)
        return value.strip().lower()

    @model_validator(mode="after")
    def _factor_required_for_cascade(self) -> "StoreConfig":
        if self.num_levels > 1 and self.reducing_factor == 0:
            raise ValueError("reducing_factor must be positive when num_levels > 1")
        if self.reducing_factor and self.data_points_in_last_level % self.reducing_factor != 0:
            raise ValueError("data_points_in_last_level must be a multiple of reducing_factor")
        return self

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any], overrides: Mapping[str, Any] | None = None) -> "StoreConfig":
        section = cfg.get("store", cfg)
        if not isinstance(section, Mapping):
            raise ValueError("'store' section must be a mapping/object")
        merged = {**section, **(overrides or {})}
        return cls(**{k: v for k, v in merged.items() if k in cls.model_fields})

    @classmethod
    def from_file(cls, path: str | Path) -> "StoreConfig":
        return cls.from_mapping(load_config_file(path))

    def build(self) -> RoundRobinStore:
        return RoundRobinStore(
            self.num_levels,
            self.data_points_in_last_level,
            self.reducing_factor,
            get_reducer(self.reducer),
            fill_value=self.fill_value,
            dtype=float,
        )


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Read a YAML or JSON mapping from disk."""

    raw = Path(path)
    if not raw.exists():
        raise FileNotFoundError(f"Configuration file not found: {raw}")
    text = raw.read_text(encoding="utf-8")
    cfg = yaml.safe_load(text) if raw.suffix.lower() in {".yml", ".yaml"} else json.loads(text)
    if not isinstance(cfg, dict):
        raise ValueError("Config file must contain a mapping/object at the top level")
    return cfg
