"""Piecewise-constant volatility model.

Volatility is a free matrix ``σ[i, j]`` over simulation time index ``i`` and
forward-rate index ``j``, held constant on each simulation step. This is the
most flexible deterministic volatility structure and is typically bootstrapped
from caplet volatilities.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import jax.numpy as jnp
import numpy as np

from lmmvol.core.random_variable import Array, RandomVariable
from lmmvol.core.time_discretization import TimeDiscretization
from lmmvol.models.volatility.base import as_parameter_vector, require_discretization

logger = logging.getLogger(__name__)

__all__ = ["PiecewiseConstantVolatilityModel"]


class PiecewiseConstantVolatilityModel:
    """Volatility model ``σ_j(t_i) = σ[i, j]`` for ``T_j > t_i``, zero otherwise.

    Parameters
    ----------
    time_discretization : TimeDiscretization
        Simulation time discretization ``t_i``.
    libor_period_discretization : TimeDiscretization
        Forward-rate period discretization ``T_j``.
    volatility : float or Array
        Matrix of shape ``(n_times, n_libors)``, or a scalar applied to every
        entry.
    is_calibrateable : bool, optional
        If True the flattened matrix (row-major) is the calibration vector.
        Default: True
    """

    def __init__(
        self,
        time_discretization: TimeDiscretization,
        libor_period_discretization: TimeDiscretization,
        volatility: float | Sequence[Sequence[float]] | Array,
        is_calibrateable: bool = True,
    ) -> None:
        self._time_discretization = require_discretization(
            time_discretization, "time_discretization"
        )
        self._libor_period_discretization = require_discretization(
            libor_period_discretization, "libor_period_discretization"
        )
        shape = (
            self._time_discretization.number_of_time_points,
            self._libor_period_discretization.number_of_time_points,
        )
        matrix = np.array(volatility, dtype=np.float64)
        if matrix.ndim == 0:
            matrix = np.full(shape, matrix, dtype=np.float64)
        if matrix.shape != shape:
            raise ValueError(f"Volatility matrix shape {matrix.shape} must be {shape}")
        matrix.flags.writeable = False
        self._volatility = matrix
        self._is_calibrateable = bool(is_calibrateable)

    @property
    def time_discretization(self) -> TimeDiscretization:
        return self._time_discretization

    @property
    def libor_period_discretization(self) -> TimeDiscretization:
        return self._libor_period_discretization

    @property
    def is_calibrateable(self) -> bool:
        return self._is_calibrateable

    @property
    def num_parameters(self) -> int:
        return int(self._volatility.size)

    def get_volatility(self, time_index: int, libor_index: int) -> RandomVariable:
        time = self._time_discretization.get_time(time_index)
        maturity = self._libor_period_discretization.get_time(libor_index)

        if maturity - time <= 0.0:
            volatility = jnp.asarray(0.0, dtype=jnp.float64)
        else:
            volatility = float(self._volatility[time_index, libor_index])

        return RandomVariable(time=time, value=volatility)

    def volatility_matrix(self) -> Array:
        """Volatility matrix with fixed rates zeroed out."""
        times = self._time_discretization.as_array()
        maturities = self._libor_period_discretization.as_array()
        alive = (maturities[None, :] - times[:, None]) > 0.0
        return jnp.where(alive, jnp.asarray(self._volatility), 0.0)

    def get_parameters(self) -> Optional[np.ndarray]:
        if not self._is_calibrateable:
            return None
        return self._volatility.ravel().copy()

    def set_parameters(self, values: Sequence[float] | Array) -> None:
        if not self._is_calibrateable:
            logger.debug("Ignoring parameter update on non-calibrateable %s", type(self).__name__)
            return

        vector = as_parameter_vector(values, self.num_parameters)
        matrix = vector.reshape(self._volatility.shape)
        matrix.flags.writeable = False
        self._volatility = matrix
        logger.debug("Updated %d piecewise-constant volatilities", self.num_parameters)

    def with_parameters(
        self, values: Sequence[float] | Array
    ) -> "PiecewiseConstantVolatilityModel":
        model = self.clone()
        model.set_parameters(values)
        return model

    def clone(self) -> "PiecewiseConstantVolatilityModel":
        return PiecewiseConstantVolatilityModel(
            self._time_discretization,
            self._libor_period_discretization,
            self._volatility,
            self._is_calibrateable,
        )

    def __copy__(self) -> "PiecewiseConstantVolatilityModel":
        return self.clone()
