"""Configure test environment for importing the project package."""
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"

if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def simulation_times():
    """Simulation time grid t_i = 0, 1, 2."""
    from lmmvol.core.time_discretization import TimeDiscretization

    return TimeDiscretization([0.0, 1.0, 2.0])


@pytest.fixture
def libor_periods():
    """Forward-rate period grid T_j = 0, 1, 2, 3."""
    from lmmvol.core.time_discretization import TimeDiscretization

    return TimeDiscretization([0.0, 1.0, 2.0, 3.0])
