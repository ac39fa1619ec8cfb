"""Pydantic-based configuration schemas for volatility models."""
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Iterable, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from lmmvol.core.time_discretization import TimeDiscretization
from lmmvol.models.volatility.base import LIBORVolatilityModel
from lmmvol.models.volatility.exponential import ExponentialVolatilityModel
from lmmvol.models.volatility.piecewise_constant import PiecewiseConstantVolatilityModel


class TimeGridSettings(BaseModel):
    """Time grid given either as explicit ``times`` or as ``start``/``end``/``steps``."""

    model_config = ConfigDict(extra="forbid")

    times: Optional[list[float]] = Field(default=None, description="Explicit time points")
    start: float = Field(default=0.0, description="First time point of a uniform grid")
    end: Optional[float] = Field(default=None, description="Last time point of a uniform grid")
    steps: Optional[int] = Field(default=None, gt=0, description="Number of uniform intervals")

    @field_validator("times")
    @classmethod
    def validate_times(cls, value: Optional[list[float]]) -> Optional[list[float]]:
        if value is None:
            return value
        if not value:
            raise ValueError("times must contain at least one point")
        if any(later <= earlier for earlier, later in zip(value, value[1:])):
            raise ValueError("times must be strictly increasing")
        return value

    @model_validator(mode="after")
    def validate_grid(self) -> "TimeGridSettings":
        if self.times is not None:
            if self.end is not None or self.steps is not None:
                raise ValueError("Specify either 'times' or 'end'/'steps', not both")
            return self
        if self.end is None or self.steps is None:
            raise ValueError("A time grid requires 'times' or both 'end' and 'steps'")
        if self.end <= self.start:
            raise ValueError("'end' must be greater than 'start'")
        return self

    @property
    def number_of_time_points(self) -> int:
        if self.times is not None:
            return len(self.times)
        return self.steps + 1

    def to_discretization(self) -> TimeDiscretization:
        if self.times is not None:
            return TimeDiscretization(self.times)
        return TimeDiscretization.uniform(self.start, self.end, self.steps)


class ExponentialSettings(BaseModel):
    """Parameters of the exponential form ``a * exp(-b * (T_j - t_i))``."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["exponential"] = "exponential"
    a: float = Field(description="Initial volatility level")
    b: float = Field(description="Exponential decay rate")
    calibrateable: bool = Field(default=True, description="Expose parameters for calibration")


class PiecewiseConstantSettings(BaseModel):
    """Volatility matrix over (simulation time, forward rate), or one flat level."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["piecewise_constant"] = "piecewise_constant"
    volatility: Union[float, list[list[float]]]
    calibrateable: bool = Field(default=True, description="Expose parameters for calibration")


VolatilitySettings = Annotated[
    Union[ExponentialSettings, PiecewiseConstantSettings],
    Field(discriminator="kind"),
]


class VolatilityModelConfig(BaseModel):
    """Top-level configuration describing one volatility model."""

    model_config = ConfigDict(extra="forbid")

    simulation_times: TimeGridSettings
    libor_periods: TimeGridSettings
    volatility: VolatilitySettings

    @model_validator(mode="after")
    def validate_matrix_shape(self) -> "VolatilityModelConfig":
        settings = self.volatility
        if isinstance(settings, PiecewiseConstantSettings) and isinstance(settings.volatility, list):
            expected = (
                self.simulation_times.number_of_time_points,
                self.libor_periods.number_of_time_points,
            )
            rows = len(settings.volatility)
            if rows != expected[0] or any(len(row) != expected[1] for row in settings.volatility):
                raise ValueError(f"Volatility matrix must have shape {expected}")
        return self

    def build_model(self) -> LIBORVolatilityModel:
        """Instantiate the configured volatility model."""
        simulation_times = self.simulation_times.to_discretization()
        libor_periods = self.libor_periods.to_discretization()
        settings = self.volatility
        if isinstance(settings, ExponentialSettings):
            return ExponentialVolatilityModel(
                simulation_times,
                libor_periods,
                a=settings.a,
                b=settings.b,
                is_calibrateable=settings.calibrateable,
            )
        return PiecewiseConstantVolatilityModel(
            simulation_times,
            libor_periods,
            settings.volatility,
            is_calibrateable=settings.calibrateable,
        )


class ConfigValidationError(RuntimeError):
    """Raised when one or more configuration files fail to load or validate.

    ``errors`` pairs each failing file with its pydantic ``ValidationError``,
    its YAML parse error or the ``ValueError`` for a non-mapping document.
    """

    def __init__(self, errors: list[tuple[Path, Exception]]):
        message_lines = ["Configuration validation failed:"]
        for path, error in errors:
            message_lines.append(f"- {path}: {error}")
        super().__init__("\n".join(message_lines))
        self.errors = errors


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration at {path} must contain a mapping")
    return data


def load_config(path: Path | str) -> VolatilityModelConfig:
    """Load a configuration file into a :class:`VolatilityModelConfig`."""
    target = Path(path)
    payload = _load_yaml(target)
    return VolatilityModelConfig.model_validate(payload)


def discover_config_files(paths: Iterable[Path | str]) -> list[Path]:
    """Discover YAML configuration files from provided paths."""
    discovered: list[Path] = []
    seen = set()
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_file() and path.suffix in {".yml", ".yaml"}:
            resolved = path.resolve()
            if resolved not in seen:
                discovered.append(resolved)
                seen.add(resolved)
        elif path.is_dir():
            for pattern in ("*.yml", "*.yaml"):
                for candidate in sorted(path.rglob(pattern)):
                    resolved = candidate.resolve()
                    if resolved not in seen:
                        discovered.append(resolved)
                        seen.add(resolved)
    return discovered


def collect_and_validate(paths: Iterable[Path | str]) -> list[VolatilityModelConfig]:
    """Validate all configuration files under the given paths."""
    files = discover_config_files(paths)
    errors: list[tuple[Path, Exception]] = []
    configs: list[VolatilityModelConfig] = []
    for file in files:
        try:
            configs.append(load_config(file))
        except (ValidationError, yaml.YAMLError, ValueError) as error:
            errors.append((file, error))
    if errors:
        raise ConfigValidationError(errors)
    return configs


__all__ = [
    "TimeGridSettings",
    "ExponentialSettings",
    "PiecewiseConstantSettings",
    "VolatilityModelConfig",
    "load_config",
    "discover_config_files",
    "collect_and_validate",
    "ConfigValidationError",
]
