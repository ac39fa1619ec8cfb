"""Demonstration of the exponential forward-rate volatility model.

This demo showcases:
1. Building a model from a YAML configuration
2. Reading instantaneous volatilities and caplet volatilities
3. Updating parameters on a clone, as a calibration loop would
"""

from pathlib import Path

from lmmvol.config import init_environment
from lmmvol.config.schemas import load_config
from lmmvol.models.volatility import caplet_volatility, volatility_matrix

CONFIG_PATH = Path(__file__).resolve().parent / "configs" / "exponential.yaml"


def demo_volatility_structure(model):
    print("\n" + "=" * 80)
    print("1. INSTANTANEOUS VOLATILITY σ_j(t_i)")
    print("=" * 80)

    matrix = volatility_matrix(model)
    periods = model.libor_period_discretization
    header = "".join(f"{f'T={T:.1f}':>10}" for T in periods)
    print(f"{'t':>6}{header}")
    for i, t in enumerate(model.time_discretization):
        if i % 4:
            continue
        row = "".join(f"{float(v):>10.4f}" for v in matrix[i])
        print(f"{t:>6.2f}{row}")


def demo_caplet_volatilities(model):
    print("\n" + "=" * 80)
    print("2. IMPLIED CAPLET VOLATILITIES")
    print("=" * 80)

    for j, T in enumerate(model.libor_period_discretization):
        if T <= 0.0:
            continue
        print(f"  Caplet fixing {T:.1f}Y: {caplet_volatility(model, j):.2%}")


def demo_parameter_update(model):
    print("\n" + "=" * 80)
    print("3. PARAMETER UPDATE ON A CLONE")
    print("=" * 80)

    candidate = model.with_parameters([0.25, 0.3])
    print(f"  Original parameters:  {[float(p) for p in model.get_parameters()]}")
    print(f"  Candidate parameters: {[float(p) for p in candidate.get_parameters()]}")
    print(f"  σ_5(t_0) original:  {float(model.get_volatility(0, 5)):.4f}")
    print(f"  σ_5(t_0) candidate: {float(candidate.get_volatility(0, 5)):.4f}")


def main():
    init_environment()
    model = load_config(CONFIG_PATH).build_model()
    demo_volatility_structure(model)
    demo_caplet_volatilities(model)
    demo_parameter_update(model)


if __name__ == "__main__":
    main()
