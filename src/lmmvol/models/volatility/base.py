"""
Interface shared by all forward-rate volatility models.

A volatility model maps a pair (simulation time index ``i``, forward-rate
index ``j``) to the instantaneous volatility ``sigma_j(t_i)`` of the forward
rate for the period starting at ``T_j``. Every model:

- holds the simulation time grid ``t_i`` and the period grid ``T_j`` as shared,
  read-only references,
- exposes its calibratable parameters as a flat vector (or ``None``),
- can be cloned into an independent instance.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from lmmvol.core.random_variable import Array, RandomVariable
from lmmvol.core.time_discretization import TimeDiscretization

__all__ = [
    "LIBORVolatilityModel",
    "as_parameter_vector",
    "require_discretization",
]


@runtime_checkable
class LIBORVolatilityModel(Protocol):
    """Capability set of a forward-rate volatility model."""

    @property
    def time_discretization(self) -> TimeDiscretization:
        """Simulation time discretization ``t_i``."""
        ...

    @property
    def libor_period_discretization(self) -> TimeDiscretization:
        """Forward-rate period discretization ``T_j``."""
        ...

    def get_volatility(self, time_index: int, libor_index: int) -> RandomVariable:
        """
        Instantaneous volatility of forward rate ``libor_index`` at ``t_{time_index}``.

        Args:
            time_index: Index into the simulation time discretization
            libor_index: Index into the period discretization

        Returns:
            Volatility tagged with the simulation time ``t_{time_index}``
        """
        ...

    def get_parameters(self) -> Optional[np.ndarray]:
        """Copy of the calibration parameters, or ``None`` if not calibrateable."""
        ...

    def set_parameters(self, values: Sequence[float] | Array) -> None:
        """Overwrite the calibration parameters; no-op if not calibrateable."""
        ...

    def clone(self) -> "LIBORVolatilityModel":
        """Independent copy sharing the time discretizations."""
        ...


def require_discretization(value: Optional[TimeDiscretization], name: str) -> TimeDiscretization:
    """Return ``value`` or raise ``ValueError`` if it is missing."""
    if value is None:
        raise ValueError(f"{name} must not be None")
    return value


def as_parameter_vector(values: Sequence[float] | Array, expected: int) -> np.ndarray:
    """Copy ``values`` into a flat float64 NumPy vector of length ``expected``.

    NumPy keeps float64 regardless of the JAX ``jax_enable_x64`` flag.
    """
    vector = np.array(values, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"Parameter vector must be one-dimensional, got shape {vector.shape}")
    if vector.shape[0] != expected:
        raise ValueError(
            f"Parameter vector must have exactly {expected} elements, got {vector.shape[0]}"
        )
    return vector
