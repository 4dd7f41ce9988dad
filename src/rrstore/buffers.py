"""Fixed-capacity ring buffers used as the storage levels of a round-robin store."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Sequence

import numpy as np

Reducer = Callable[[Sequence[Any]], Any]


def _scalar(value: Any) -> Any:
    return value.item() if isinstance(value, np.generic) else value


class CircularBuffer:
    """Ring of ``capacity`` slots; each push overwrites the oldest slot."""

    def __init__(self, capacity: int, *, fill_value: Any = 0, dtype: Any = object) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._data = np.full(int(capacity), fill_value, dtype=dtype)
        self._tail = 0

    @property
    def capacity(self) -> int:
        """Number of backing slots, including any hidden staging region."""

        return int(self._data.size)

    @property
    def tail(self) -> int:
        """Slot the next push writes to."""

        return self._tail

    def __len__(self) -> int:
        return self.capacity

    def push(self, value: Any) -> None:
        self._data[self._tail] = value
        self._tail = (self._tail + 1) % self._data.size

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.push(value)

    def at(self, ago: int) -> Any:
        """Return the value pushed ``ago`` pushes before the most recent one."""

        size = self._data.size
        if ago < 0 or ago >= size:
            raise IndexError(f"ago must be in [0, {size}) (got {ago})")
        return _scalar(self._data[(size + self._tail - ago - 1) % size])

    def values(self) -> List[Any]:
        """Logical contents, oldest first."""

        return [_scalar(v) for v in self._slice(self._tail, len(self))]

    def _slice(self, start: int, count: int) -> np.ndarray:
        size = self._data.size
        if start < 0 or start >= size:
            raise IndexError(f"start must be in [0, {size}) (got {start})")
        if count < 0 or count > size:
            raise IndexError(f"count must be in [0, {size}] (got {count})")
        if start + count <= size:
            return self._data[start : start + count].copy()
        return np.concatenate((self._data[start:], self._data[: count - size + start]))

    def __str__(self) -> str:
        ordered = np.concatenate((self._data[self._tail :], self._data[: self._tail]))
        return "[" + ",".join(str(v) for v in ordered.tolist()) + "]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self.capacity}, tail={self._tail})"


class ReducingBuffer(CircularBuffer):
    """Circular buffer that forwards one reduced value downstream every ``reducing_factor`` pushes.

    Backing storage is ``size + reducing_factor`` slots. The extra slots form a
    staging region at the cursor: they are excluded from :meth:`values` and are
    the window handed to the reducer when the push count reaches a multiple of
    ``reducing_factor``.
    """

    def __init__(
        self,
        size: int,
        reducing_factor: int,
        reducer: Reducer | None = None,
        downstream: CircularBuffer | None = None,
        *,
        fill_value: Any = 0,
        dtype: Any = object,
    ) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        if reducing_factor < 0:
            raise ValueError("reducing_factor must not be negative")
        if downstream is not None and reducing_factor == 0:
            raise ValueError("reducing_factor must be positive when a downstream buffer is attached")
        if reducing_factor and size % reducing_factor != 0:
            raise ValueError(f"size must be a multiple of reducing_factor (got {size} and {reducing_factor})")
        if downstream is not None and not callable(reducer):
            raise ValueError("reducer must be callable when a downstream buffer is attached")

        super().__init__(size + reducing_factor, fill_value=fill_value, dtype=dtype)
        self._reducing_factor = int(reducing_factor)
        self._reducer = reducer
        self._downstream = downstream

    @property
    def reducing_factor(self) -> int:
        return self._reducing_factor

    @property
    def reducer(self) -> Reducer | None:
        return self._reducer

    @property
    def downstream(self) -> CircularBuffer | None:
        return self._downstream

    def __len__(self) -> int:
        return self.capacity - self._reducing_factor

    def push(self, value: Any) -> None:
        super().push(value)
        if self._downstream is not None and self._tail % self._reducing_factor == 0:
            # a full window has accumulated
            self._downstream.push(self._reducer(self._slice(self._tail, self._reducing_factor)))

    def values(self) -> List[Any]:
        return [_scalar(v) for v in self._slice(self._oldest_value_index, len(self))]

    def values_to_reduce(self) -> List[Any]:
        """Staging window at the cursor, oldest first."""

        return [_scalar(v) for v in self._slice(self._tail, self._reducing_factor)]

    @property
    def _oldest_value_index(self) -> int:
        return (self._tail + self._reducing_factor) % self.capacity

    def __str__(self) -> str:
        return "[" + ",".join(str(v) for v in self.values()) + "]"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self)}, reducing_factor={self._reducing_factor}, "
            f"tail={self._tail})"
        )
