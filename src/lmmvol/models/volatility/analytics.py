"""Deterministic quantities derived from a volatility model.

These helpers work with any :class:`~lmmvol.models.volatility.base.LIBORVolatilityModel`
and provide what a simulation engine or calibration driver typically reads
from it: the full volatility grid, a ``volatility_fn(t)`` callable for LMM
parameter sets, and the caplet variance implied by the model.
"""

from __future__ import annotations

from typing import Callable

import jax.numpy as jnp

from lmmvol.core.random_variable import Array
from lmmvol.models.volatility.base import LIBORVolatilityModel

__all__ = [
    "as_volatility_fn",
    "caplet_volatility",
    "integrated_variance",
    "volatility_matrix",
]


def volatility_matrix(model: LIBORVolatilityModel) -> Array:
    """Return ``σ_j(t_i)`` for all indices as an array of shape ``(n_times, n_libors)``."""
    fast_path = getattr(model, "volatility_matrix", None)
    if callable(fast_path):
        return fast_path()

    n_times = model.time_discretization.number_of_time_points
    n_libors = model.libor_period_discretization.number_of_time_points
    rows = [
        [float(model.get_volatility(i, j)) for j in range(n_libors)]
        for i in range(n_times)
    ]
    return jnp.asarray(rows, dtype=jnp.float64)


def as_volatility_fn(model: LIBORVolatilityModel) -> Callable[[float], Array]:
    """Wrap ``model`` as ``λ(t) -> Array[n_libors]``.

    The volatility at ``t`` is read on the simulation time index nearest less
    than or equal to ``t``, i.e. volatilities are piecewise constant in time.
    The matrix is evaluated once; later parameter updates on ``model`` are
    not seen by the returned callable.
    """
    matrix = volatility_matrix(model)
    times = model.time_discretization

    def volatility_fn(t: float) -> Array:
        index = times.get_time_index_nearest_less_or_equal(float(t))
        if index < 0:
            raise ValueError(f"Time {t} precedes the first simulation time {times.first_time}")
        return matrix[index]

    return volatility_fn


def integrated_variance(model: LIBORVolatilityModel, libor_index: int) -> float:
    """Integrated variance ``∫_{t_0}^{T_j} σ_j(t)² dt`` on the simulation grid.

    The integral starts at the first simulation time ``t_0``, the valuation
    time of the simulation, not at zero.

    Only simulation steps ``[t_i, t_{i+1}]`` that end on or before the period
    start ``T_j`` contribute.
    """
    times = model.time_discretization
    maturity = model.libor_period_discretization.get_time(libor_index)

    variance = 0.0
    for time_index in range(times.number_of_time_steps):
        if times.get_time(time_index + 1) > maturity:
            break
        sigma = float(model.get_volatility(time_index, libor_index))
        variance += sigma * sigma * times.get_time_step(time_index)
    return variance


def caplet_volatility(model: LIBORVolatilityModel, libor_index: int) -> float:
    """Black volatility of the caplet fixing at ``T_j`` implied by ``model``.

    Annualised over the time to fixing ``T_j - t_0`` seen from the first
    simulation time ``t_0``.
    """
    valuation_time = model.time_discretization.first_time
    maturity = model.libor_period_discretization.get_time(libor_index)
    time_to_fixing = maturity - valuation_time
    if time_to_fixing <= 0.0:
        raise ValueError(
            f"Caplet fixing time {maturity} must be after the first simulation time {valuation_time}"
        )
    return float(jnp.sqrt(integrated_variance(model, libor_index) / time_to_fixing))
