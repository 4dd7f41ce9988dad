"""Logging setup and store lifecycle events."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from .store import RoundRobinStore


def _json_logs_enabled() -> bool:
    return os.getenv("RRSTORE_JSON_LOGS", "false").lower() == "true"


def configure_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """Configure global logging. Respects RRSTORE_JSON_LOGS env override."""

    if json_logs is None:
        json_logs = _json_logs_enabled()

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s" if json_logs else "%(levelname)s:%(name)s:%(message)s",
    )


def store_fields(store: RoundRobinStore) -> dict[str, Any]:
    """Compact layout summary attached to every store event."""

    return {
        "level_sizes": store.level_sizes,
        "reducing_factor": store.reducing_factor,
        "capacity_samples": store.capacity_samples,
        "capacity_data_points": store.capacity_data_points,
    }


def log_store_event(
    logger: logging.Logger,
    event: str,
    store: RoundRobinStore,
    *,
    json_logs: bool | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Log ``event`` together with the layout of ``store`` and return the payload."""

    if json_logs is None:
        json_logs = _json_logs_enabled()

    payload = {"event": event, **store_fields(store), **fields}
    logger.info(json.dumps(payload) if json_logs else payload)
    return payload
