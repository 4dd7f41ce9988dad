"""Multi-level round-robin store built from a chain of reducing buffers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from .buffers import Reducer, ReducingBuffer

logger = logging.getLogger(__name__)


def level_sizes(num_levels: int, data_points_in_last_level: int, reducing_factor: int) -> List[int]:
    """Return the logical size of each level, coarsest (oldest data) first."""

    sizes: list[int] = []
    data_points = data_points_in_last_level
    for _ in range(num_levels):
        sizes.append(data_points)
        data_points *= reducing_factor
    return sizes


class RoundRobinStore:
    """Fixed-memory time series with full resolution for recent data and coarser levels for older data.

    Levels are ordered coarsest first. Pushes go to the finest level and every
    ``reducing_factor`` pushes into a level cascade one reduced value into the
    next coarser one. Each level covers the same stretch of raw history, so
    the finest level is ``reducing_factor`` times larger than the one before.

    Two read-outs are offered, both newest first:

    * :meth:`get_data_point` walks every stored value across all levels.
    * :meth:`get_sample` presents a uniform timeline in which each level
      contributes ``samples_per_level`` slots by repeating its coarser values.
    """

    def __init__(
        self,
        num_levels: int,
        data_points_in_last_level: int,
        reducing_factor: int,
        reducer: Reducer,
        *,
        fill_value: Any = 0,
        dtype: Any = object,
    ) -> None:
        if num_levels <= 0:
            raise ValueError("num_levels must be positive")

        self._reducing_factor = int(reducing_factor)
        self._levels: Tuple[ReducingBuffer, ...] = tuple(
            self._create_levels(
                num_levels,
                data_points_in_last_level,
                reducing_factor,
                reducer,
                fill_value=fill_value,
                dtype=dtype,
            )
        )
        self._samples_per_level = len(self._levels[-1])
        self._capacity_data_points = sum(len(level) for level in self._levels)
        self._capacity_samples = self._samples_per_level * num_levels
        logger.debug(
            "Built round-robin store levels=%s reducing_factor=%d data_points=%d samples=%d",
            self.level_sizes,
            self._reducing_factor,
            self._capacity_data_points,
            self._capacity_samples,
        )

    @staticmethod
    def _create_levels(
        num_levels: int,
        data_points_in_last_level: int,
        reducing_factor: int,
        reducer: Reducer,
        **kwargs: Any,
    ) -> Iterator[ReducingBuffer]:
        previous: ReducingBuffer | None = None
        for size in level_sizes(num_levels, data_points_in_last_level, reducing_factor):
            level = ReducingBuffer(size, reducing_factor, reducer, previous, **kwargs)
            yield level
            previous = level

    @property
    def levels(self) -> Tuple[ReducingBuffer, ...]:
        return self._levels

    @property
    def num_levels(self) -> int:
        return len(self._levels)

    @property
    def level_sizes(self) -> List[int]:
        return [len(level) for level in self._levels]

    @property
    def reducing_factor(self) -> int:
        return self._reducing_factor

    @property
    def samples_per_level(self) -> int:
        return self._samples_per_level

    @property
    def capacity_data_points(self) -> int:
        return self._capacity_data_points

    @property
    def capacity_samples(self) -> int:
        return self._capacity_samples

    @property
    def _newest_level(self) -> ReducingBuffer:
        return self._levels[-1]

    def push(self, value: Any) -> None:
        self._newest_level.push(value)

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.push(value)

    def get_data_point(self, index: int) -> Any:
        """Return a stored value, counting back from the newest value of the finest level.

        Indices past the finest level continue into the next coarser level,
        again newest first, and so on until the coarsest level.
        """

        if index < 0 or index >= self._capacity_data_points:
            raise IndexError(f"index must be in [0, {self._capacity_data_points}) (got {index})")
        level = len(self._levels) - 1
        while index >= len(self._levels[level]):
            index -= len(self._levels[level])
            level -= 1
        return self._levels[level].at(index)

    def get_sample(self, ago: int) -> Any:
        """Return the value ``ago`` slots back on the uniform sample timeline."""

        if ago < 0:
            raise IndexError(f"ago must not be negative (got {ago})")
        level = ago // self._samples_per_level
        if level >= len(self._levels):
            raise IndexError(f"ago must be in [0, {self._capacity_samples}) (got {ago})")
        data_points_per_sample = self._reducing_factor**level
        sample_within_level = ago % self._samples_per_level
        data_point_within_level = sample_within_level // data_points_per_sample
        return self._levels[len(self._levels) - level - 1].at(data_point_within_level)

    def data_points(self) -> List[Any]:
        return [self.get_data_point(i) for i in range(self._capacity_data_points)]

    def samples(self) -> List[Any]:
        return [self.get_sample(ago) for ago in range(self._capacity_samples)]

    def describe(self) -> Dict[str, Any]:
        """Summarize the layout in a JSON-friendly mapping, finest level first."""

        levels: list[dict[str, int]] = []
        for depth, level in enumerate(reversed(self._levels)):
            levels.append(
                {
                    "level": depth,
                    "data_points": len(level),
                    "raw_per_data_point": self._reducing_factor**depth,
                    "backing_capacity": level.capacity,
                }
            )
        return {
            "num_levels": self.num_levels,
            "reducing_factor": self._reducing_factor,
            "samples_per_level": self._samples_per_level,
            "capacity_data_points": self._capacity_data_points,
            "capacity_samples": self._capacity_samples,
            "levels": levels,
        }

    def __str__(self) -> str:
        return ",".join(f"{i}: {level}" for i, level in enumerate(self._levels))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_levels={self.num_levels}, level_sizes={self.level_sizes}, "
            f"reducing_factor={self._reducing_factor})"
        )


def build_store(
    num_levels: int,
    data_points_in_last_level: int,
    reducing_factor: int,
    reducer: Reducer | str = "mean",
    **kwargs: Any,
) -> RoundRobinStore:
    """Create a store, resolving ``reducer`` by name when a string is given."""

    from .reducers import resolve_reducer

    return RoundRobinStore(
        num_levels,
        data_points_in_last_level,
        reducing_factor,
        resolve_reducer(reducer),
        **kwargs,
    )
