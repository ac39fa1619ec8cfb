"""Ordered time grids used for simulation times and forward-rate periods."""
from __future__ import annotations

import bisect
from typing import Iterable, Iterator, Tuple

import jax.numpy as jnp
import numpy as np

__all__ = ["TimeDiscretization"]


class TimeDiscretization:
    """Immutable, strictly increasing sequence of time points ``t_0 < t_1 < ...``.

    The same type serves both as the simulation time grid ``t_i`` and as the
    forward-rate period grid ``T_j``. Instances are value objects and may be
    shared freely between models and clones.
    """

    __slots__ = ("_times",)

    def __init__(self, times: Iterable[float]) -> None:
        if not isinstance(times, (np.ndarray, jnp.ndarray)):
            times = list(times)
        arr = np.asarray(times, dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError("times must be one-dimensional.")
        if arr.size == 0:
            raise ValueError("times must contain at least one point.")
        if not np.all(np.isfinite(arr)):
            raise ValueError("times must be finite.")
        if arr.size > 1 and np.any(np.diff(arr) <= 0.0):
            raise ValueError("times must be strictly increasing.")
        self._times: Tuple[float, ...] = tuple(float(t) for t in arr)

    @classmethod
    def uniform(cls, start: float, end: float, steps: int) -> "TimeDiscretization":
        """Grid of ``steps`` equal intervals from ``start`` to ``end`` inclusive."""
        if steps <= 0:
            raise ValueError("steps must be > 0 for a time grid.")
        if end <= start:
            raise ValueError("end must be greater than start.")
        return cls(np.linspace(start, end, steps + 1))

    @classmethod
    def from_tenor(
        cls, start: float, num_periods: int, period_length: float
    ) -> "TimeDiscretization":
        """Tenor structure ``start, start + dT, ..., start + num_periods * dT``."""
        if num_periods <= 0:
            raise ValueError("num_periods must be > 0.")
        if period_length <= 0.0:
            raise ValueError("period_length must be positive.")
        return cls(start + period_length * np.arange(num_periods + 1))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_time(self, index: int) -> float:
        """Return ``t_index``.

        Raises
        ------
        IndexError
            If ``index`` is negative or beyond the last time point.
        """
        if index < 0 or index >= len(self._times):
            raise IndexError(
                f"time index {index} out of range for {len(self._times)} time points"
            )
        return self._times[index]

    def get_time_step(self, index: int) -> float:
        """Return ``t_{index+1} - t_index``."""
        return self.get_time(index + 1) - self.get_time(index)

    def get_time_index(self, time: float) -> int:
        """Index of ``time`` if it is a grid point, otherwise ``-1``."""
        pos = bisect.bisect_left(self._times, time)
        if pos < len(self._times) and self._times[pos] == time:
            return pos
        return -1

    def get_time_index_nearest_less_or_equal(self, time: float) -> int:
        """Largest index with ``t_index <= time``; ``-1`` if ``time < t_0``."""
        return bisect.bisect_right(self._times, time) - 1

    # ------------------------------------------------------------------
    @property
    def number_of_time_points(self) -> int:
        return len(self._times)

    @property
    def number_of_time_steps(self) -> int:
        return len(self._times) - 1

    @property
    def first_time(self) -> float:
        return self._times[0]

    @property
    def last_time(self) -> float:
        return self._times[-1]

    def as_array(self) -> jnp.ndarray:
        """Return the time points as a new JAX array."""
        return jnp.asarray(self._times)

    def as_tuple(self) -> Tuple[float, ...]:
        return self._times

    def merge(self, other: "TimeDiscretization") -> "TimeDiscretization":
        """Union of both grids."""
        return self.refine(other.as_tuple())

    def refine(self, extra_points: Iterable[float]) -> "TimeDiscretization":
        """Grid with ``extra_points`` added; duplicates are dropped."""
        extra = np.asarray(list(extra_points), dtype=np.float64).ravel()
        combined = np.unique(np.concatenate([np.asarray(self._times), extra]))
        return TimeDiscretization(combined)

    def __len__(self) -> int:
        return len(self._times)

    def __iter__(self) -> Iterator[float]:
        return iter(self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeDiscretization):
            return NotImplemented
        return self._times == other._times

    def __hash__(self) -> int:
        return hash(self._times)

    def __repr__(self) -> str:
        if len(self._times) <= 6:
            body = ", ".join(f"{t:g}" for t in self._times)
        else:
            head = ", ".join(f"{t:g}" for t in self._times[:3])
            body = f"{head}, ..., {self._times[-1]:g}"
        return f"TimeDiscretization([{body}])"
