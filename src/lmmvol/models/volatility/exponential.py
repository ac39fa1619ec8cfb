"""Two-parameter exponential volatility model for forward LIBOR rates.

The instantaneous volatility of the forward rate for the period starting at
``T_j``, observed at simulation time ``t_i``, is

    σ_j(t_i) = a · exp(-b · (T_j - t_i))    for T_j - t_i > 0
    σ_j(t_i) = 0                            otherwise

``a`` sets the volatility level of a rate that is about to fix and ``b``
controls how quickly volatility decays with time-to-maturity. Rates whose
period has already started are fixed and carry no volatility.

The parameters are stored as one immutable :class:`ExponentialVolatilityParams`
snapshot. :meth:`ExponentialVolatilityModel.set_parameters` swaps the snapshot
as a whole, so a reader always sees a consistent ``(a, b)`` pair. Calibration
loops that run simulations concurrently should prefer
:meth:`ExponentialVolatilityModel.with_parameters`, which leaves the receiver
untouched.

References
----------
Brigo, D., & Mercurio, F. (2006). "Interest Rate Models - Theory and Practice."
Springer. (Chapter 6.3: Instantaneous volatility structures)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import jax.numpy as jnp
import numpy as np

from lmmvol.core.random_variable import Array, RandomVariable
from lmmvol.core.time_discretization import TimeDiscretization
from lmmvol.models.volatility.base import as_parameter_vector, require_discretization

logger = logging.getLogger(__name__)

__all__ = ["ExponentialVolatilityModel", "ExponentialVolatilityParams"]


@dataclass(frozen=True)
class ExponentialVolatilityParams:
    """Parameters of the exponential volatility form.

    Attributes
    ----------
    a : float
        Initial volatility level. Expected to be non-negative; not validated.
    b : float
        Exponential decay rate applied to time-to-maturity.
    """

    a: float
    b: float

    def to_vector(self) -> np.ndarray:
        return np.array([self.a, self.b], dtype=np.float64)


class ExponentialVolatilityModel:
    """Volatility model ``σ_j(t_i) = a · exp(-b · (T_j - t_i))``.

    Parameters
    ----------
    time_discretization : TimeDiscretization
        Simulation time discretization ``t_i``.
    libor_period_discretization : TimeDiscretization
        Forward-rate period discretization ``T_j``.
    a : float
        Initial volatility level.
    b : float
        Exponential decay of the volatility.
    is_calibrateable : bool, optional
        If False, :meth:`get_parameters` returns ``None`` and
        :meth:`set_parameters` does nothing. Default: True

    Raises
    ------
    ValueError
        If either discretization is ``None``.
    """

    NUM_PARAMETERS = 2

    def __init__(
        self,
        time_discretization: TimeDiscretization,
        libor_period_discretization: TimeDiscretization,
        a: float,
        b: float,
        is_calibrateable: bool = True,
    ) -> None:
        self._time_discretization = require_discretization(
            time_discretization, "time_discretization"
        )
        self._libor_period_discretization = require_discretization(
            libor_period_discretization, "libor_period_discretization"
        )
        self._params = ExponentialVolatilityParams(a=float(a), b=float(b))
        self._is_calibrateable = bool(is_calibrateable)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
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
    def parameters(self) -> ExponentialVolatilityParams:
        """Current parameter snapshot."""
        return self._params

    @property
    def a(self) -> float:
        return self._params.a

    @property
    def b(self) -> float:
        return self._params.b

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def get_volatility(self, time_index: int, libor_index: int) -> RandomVariable:
        """Instantaneous volatility of forward rate ``libor_index`` at ``t_{time_index}``.

        Indices are not checked here; an invalid index raises ``IndexError``
        from the corresponding discretization.
        """
        params = self._params
        time = self._time_discretization.get_time(time_index)
        maturity = self._libor_period_discretization.get_time(libor_index)
        time_to_maturity = maturity - time

        if time_to_maturity <= 0.0:
            # Forward rate already fixed
            volatility = jnp.asarray(0.0, dtype=jnp.float64)
        else:
            volatility = params.a * jnp.exp(-params.b * time_to_maturity)

        return RandomVariable(time=time, value=volatility)

    def volatility_matrix(self) -> Array:
        """All volatilities as an array of shape ``(n_times, n_libors)``."""
        params = self._params
        times = self._time_discretization.as_array()
        maturities = self._libor_period_discretization.as_array()
        time_to_maturity = maturities[None, :] - times[:, None]
        decayed = params.a * jnp.exp(-params.b * jnp.maximum(time_to_maturity, 0.0))
        return jnp.where(time_to_maturity > 0.0, decayed, 0.0)

    # ------------------------------------------------------------------
    # Calibration surface
    # ------------------------------------------------------------------
    def get_parameters(self) -> Optional[np.ndarray]:
        """Return ``[a, b]`` as a new array, or ``None`` if not calibrateable."""
        if not self._is_calibrateable:
            return None
        return self._params.to_vector()

    def set_parameters(self, values: Sequence[float] | Array) -> None:
        """Overwrite ``a`` and ``b`` from ``values = [a, b]``.

        Does nothing if the model is not calibrateable.

        Raises
        ------
        ValueError
            If the model is calibrateable and ``values`` does not hold exactly
            two elements.
        """
        if not self._is_calibrateable:
            logger.debug("Ignoring parameter update on non-calibrateable %s", type(self).__name__)
            return

        vector = as_parameter_vector(values, self.NUM_PARAMETERS)
        self._params = ExponentialVolatilityParams(a=float(vector[0]), b=float(vector[1]))
        logger.debug("Updated exponential volatility parameters: a=%g, b=%g", self.a, self.b)

    def with_parameters(self, values: Sequence[float] | Array) -> "ExponentialVolatilityModel":
        """Return a clone carrying ``values``; the receiver is left unchanged."""
        model = self.clone()
        model.set_parameters(values)
        return model

    # ------------------------------------------------------------------
    def clone(self) -> "ExponentialVolatilityModel":
        """Independent copy sharing the (immutable) time discretizations."""
        return ExponentialVolatilityModel(
            self._time_discretization,
            self._libor_period_discretization,
            self._params.a,
            self._params.b,
            self._is_calibrateable,
        )

    def __copy__(self) -> "ExponentialVolatilityModel":
        return self.clone()

    def __repr__(self) -> str:
        return (
            f"ExponentialVolatilityModel(a={self.a:g}, b={self.b:g}, "
            f"is_calibrateable={self._is_calibrateable})"
        )
