from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pytest
from pydantic import ValidationError

from lmmvol.config.schemas import (
    ConfigValidationError,
    ExponentialSettings,
    PiecewiseConstantSettings,
    TimeGridSettings,
    VolatilityModelConfig,
    collect_and_validate,
    discover_config_files,
    load_config,
)
from lmmvol.models.volatility import ExponentialVolatilityModel, PiecewiseConstantVolatilityModel


def test_load_config_builds_exponential_model(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
simulation_times:
  times: [0.0, 1.0, 2.0]
libor_periods:
  start: 0.0
  end: 3.0
  steps: 3
volatility:
  kind: exponential
  a: 0.2
  b: 0.1
""".strip()
    )

    config = load_config(config_path)
    assert isinstance(config, VolatilityModelConfig)
    assert isinstance(config.volatility, ExponentialSettings)
    assert config.volatility.calibrateable is True

    model = config.build_model()
    assert isinstance(model, ExponentialVolatilityModel)
    assert float(model.get_volatility(0, 2)) == pytest.approx(0.2 * math.exp(-0.2), rel=1e-12)
    assert float(model.get_volatility(2, 1)) == 0.0


def test_piecewise_constant_config() -> None:
    config = VolatilityModelConfig(
        simulation_times=TimeGridSettings(times=[0.0, 1.0]),
        libor_periods=TimeGridSettings(times=[1.0, 2.0]),
        volatility={
            "kind": "piecewise_constant",
            "volatility": [[0.1, 0.2], [0.3, 0.4]],
            "calibrateable": False,
        },
    )
    assert isinstance(config.volatility, PiecewiseConstantSettings)

    model = config.build_model()
    assert isinstance(model, PiecewiseConstantVolatilityModel)
    assert model.get_parameters() is None
    np.testing.assert_allclose(
        np.asarray(model.volatility_matrix()), [[0.1, 0.2], [0.0, 0.4]]
    )


def test_piecewise_constant_matrix_shape_checked() -> None:
    with pytest.raises(ValidationError, match="shape"):
        VolatilityModelConfig(
            simulation_times=TimeGridSettings(times=[0.0, 1.0]),
            libor_periods=TimeGridSettings(times=[1.0, 2.0]),
            volatility={"kind": "piecewise_constant", "volatility": [[0.1, 0.2]]},
        )


def test_time_grid_requires_one_form() -> None:
    with pytest.raises(ValidationError):
        TimeGridSettings()
    with pytest.raises(ValidationError):
        TimeGridSettings(times=[0.0, 1.0], end=1.0, steps=2)
    with pytest.raises(ValidationError):
        TimeGridSettings(times=[1.0, 0.5])
    with pytest.raises(ValidationError):
        TimeGridSettings(start=1.0, end=0.5, steps=2)

    grid = TimeGridSettings(end=1.0, steps=4).to_discretization()
    assert grid.as_tuple() == (0.0, 0.25, 0.5, 0.75, 1.0)


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValidationError):
        VolatilityModelConfig(
            simulation_times={"times": [0.0]},
            libor_periods={"times": [1.0]},
            volatility={"kind": "sabr", "a": 0.2, "b": 0.1},
        )


def test_discover_config_files_deduplicates(tmp_path: Path) -> None:
    first = tmp_path / "a.yaml"
    second = tmp_path / "nested" / "b.yml"
    second.parent.mkdir()
    first.write_text("{}")
    second.write_text("{}")
    (tmp_path / "notes.txt").write_text("ignored")

    found = discover_config_files([tmp_path, first])
    # "*.yml" is scanned before "*.yaml"
    assert found == [second.resolve(), first.resolve()]


def test_collect_and_validate_detects_invalid(tmp_path: Path) -> None:
    good = tmp_path / "good.yaml"
    bad = tmp_path / "bad.yaml"
    good.write_text(
        """
simulation_times:
  times: [0.0, 0.5]
libor_periods:
  times: [0.5, 1.0]
volatility:
  kind: exponential
  a: 0.15
  b: 0.05
""".strip()
    )
    bad.write_text(
        """
simulation_times:
  steps: 0
libor_periods:
  times: [0.5, 1.0]
volatility:
  kind: exponential
  a: 0.15
""".strip()
    )

    with pytest.raises(ConfigValidationError) as exc:
        collect_and_validate([tmp_path])

    assert "bad.yaml" in str(exc.value)
    assert len(exc.value.errors) == 1


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_collect_and_validate_reports_every_unreadable_file(tmp_path: Path) -> None:
    (tmp_path / "good.yaml").write_text(
        "simulation_times:\n  times: [0.0, 0.5]\n"
        "libor_periods:\n  times: [0.5, 1.0]\n"
        "volatility:\n  kind: exponential\n  a: 0.15\n  b: 0.05\n"
    )
    (tmp_path / "list.yaml").write_text("- 1\n- 2\n")
    (tmp_path / "broken.yaml").write_text("a: [1, 2\n")
    (tmp_path / "unknown.yaml").write_text("volatility:\n  kind: sabr\n")

    with pytest.raises(ConfigValidationError) as exc:
        collect_and_validate([tmp_path])

    failed = {path.name for path, _ in exc.value.errors}
    assert failed == {"list.yaml", "broken.yaml", "unknown.yaml"}
    for name in failed:
        assert name in str(exc.value)


def test_example_configuration_is_valid() -> None:
    example_dir = Path(__file__).resolve().parent.parent / "examples" / "configs"
    configs = collect_and_validate([example_dir])
    assert len(configs) == 1
    assert isinstance(configs[0].build_model(), ExponentialVolatilityModel)
