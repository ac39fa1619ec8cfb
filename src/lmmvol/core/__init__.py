"""Core building blocks shared by the volatility models."""

from .random_variable import Array, RandomVariable
from .time_discretization import TimeDiscretization

__all__ = [
    "Array",
    "RandomVariable",
    "TimeDiscretization",
]
