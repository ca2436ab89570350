import pytest

from laserflash.config import DEFAULT_SCHEME_CONFIG
from laserflash.problem import (
    DiathermicProblem,
    LinearisedProblem,
    NonlinearProblem,
    TranslucentProblem,
)


@pytest.fixture
def config():
    return DEFAULT_SCHEME_CONFIG


@pytest.fixture
def coarse_config():
    """Coarser grid for tests that only check structure."""
    return DEFAULT_SCHEME_CONFIG.with_changes(grid_density=16)


@pytest.fixture
def linearised_problem():
    return LinearisedProblem()


@pytest.fixture
def diathermic_problem():
    return DiathermicProblem(front_biot=0.1, diathermic_coefficient=0.1)


@pytest.fixture
def translucent_problem():
    return TranslucentProblem()


@pytest.fixture
def nonlinear_problem():
    return NonlinearProblem(
        front_biot=0.1,
        rear_biot=0.1,
        test_temperature=300.0,
        maximum_heating=5.0,
    )
