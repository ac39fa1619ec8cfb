"""Time-stamped values exchanged between model components and simulation engines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import jax.numpy as jnp
import numpy as np

Array = jnp.ndarray

__all__ = ["Array", "RandomVariable"]


@dataclass(frozen=True)
class RandomVariable:
    """Value of a quantity measurable at ``time``.

    ``value`` is a scalar array for deterministic quantities and a vector with
    one entry per path otherwise.
    """

    time: float
    value: Array

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", float(self.time))
        object.__setattr__(self, "value", jnp.asarray(self.value, dtype=jnp.float64))
        if self.value.ndim > 1:
            raise ValueError("RandomVariable.value must be a scalar or a vector of path values.")

    @classmethod
    def deterministic(cls, time: float, value: float) -> "RandomVariable":
        return cls(time=time, value=jnp.asarray(value, dtype=jnp.float64))

    @property
    def is_deterministic(self) -> bool:
        return self.value.ndim == 0

    @property
    def size(self) -> int:
        return int(self.value.size)

    def expectation(self) -> float:
        """Average over paths; the value itself for deterministic variables."""
        return float(jnp.mean(self.value))

    def __float__(self) -> float:
        if not self.is_deterministic:
            raise TypeError("Only deterministic random variables can be converted to float.")
        return float(self.value)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> np.ndarray:
        if copy is False:
            raise ValueError("A RandomVariable cannot be exposed as a NumPy array without a copy.")
        return np.array(self.value, dtype=dtype)
