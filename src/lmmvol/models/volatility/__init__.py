"""Forward-rate volatility models for LIBOR market-model simulation."""

from .analytics import as_volatility_fn, caplet_volatility, integrated_variance, volatility_matrix
from .base import LIBORVolatilityModel, as_parameter_vector, require_discretization
from .exponential import ExponentialVolatilityModel, ExponentialVolatilityParams
from .piecewise_constant import PiecewiseConstantVolatilityModel

__all__ = [
    "ExponentialVolatilityModel",
    "ExponentialVolatilityParams",
    "LIBORVolatilityModel",
    "PiecewiseConstantVolatilityModel",
    "as_parameter_vector",
    "as_volatility_fn",
    "caplet_volatility",
    "integrated_variance",
    "require_discretization",
    "volatility_matrix",
]
