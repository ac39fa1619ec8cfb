"""Forward-rate volatility models for LIBOR market-model Monte Carlo simulation."""

from __future__ import annotations

import jax

jax.config.update("jax_enable_x64", True)

from . import config, core, models  # noqa: E402
from .core import RandomVariable, TimeDiscretization  # noqa: E402
from .models.volatility import (  # noqa: E402
    ExponentialVolatilityModel,
    LIBORVolatilityModel,
    PiecewiseConstantVolatilityModel,
)

__all__ = [
    "ExponentialVolatilityModel",
    "LIBORVolatilityModel",
    "PiecewiseConstantVolatilityModel",
    "RandomVariable",
    "TimeDiscretization",
    "config",
    "core",
    "models",
]

__version__ = "0.1.0"
