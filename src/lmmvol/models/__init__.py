"""Model level utilities."""

from . import volatility
from .volatility import (
    ExponentialVolatilityModel,
    ExponentialVolatilityParams,
    LIBORVolatilityModel,
    PiecewiseConstantVolatilityModel,
)

__all__ = [
    "ExponentialVolatilityModel",
    "ExponentialVolatilityParams",
    "LIBORVolatilityModel",
    "PiecewiseConstantVolatilityModel",
    "volatility",
]
