"""Tests for the problem statements."""
import pytest

from laserflash.errors import ConfigurationError
from laserflash.problem import (
    DiathermicProblem,
    InsulatorAbsorption,
    LinearisedProblem,
    NonlinearProblem,
    Problem,
    ProblemType,
    Pulse,
    TranslucentProblem,
    TriangularPulse,
)


class TestProblemStatements:

    def test_characteristic_time(self):
        problem = LinearisedProblem(thickness=2e-3, diffusivity=1e-5)
        assert problem.characteristic_time == pytest.approx(0.4)

    @pytest.mark.parametrize("problem_class, expected", [
        (LinearisedProblem, ProblemType.LINEARISED),
        (DiathermicProblem, ProblemType.DIATHERMIC),
        (TranslucentProblem, ProblemType.TRANSLUCENT),
        (NonlinearProblem, ProblemType.NONLINEAR),
    ])
    def test_type(self, problem_class, expected):
        assert problem_class().type == expected

    @pytest.mark.parametrize("kwargs", [
        {"front_biot": -0.1},
        {"rear_biot": -1.0},
        {"thickness": 0.0},
        {"diffusivity": -1.0},
        {"num_points": 1},
        {"maximum_temperature": 0.0},
        {"maximum_temperature": -2.0},
    ])
    def test_invalid_common_parameters(self, kwargs):
        with pytest.raises(ConfigurationError):
            LinearisedProblem(**kwargs)

    def test_diathermic_rear_biot_follows_front(self):
        problem = DiathermicProblem(front_biot=0.2)
        assert problem.rear_biot == 0.2
        assert DiathermicProblem(front_biot=0.2, rear_biot=0.2).rear_biot == 0.2

    def test_diathermic_rejects_unequal_biot(self):
        with pytest.raises(ConfigurationError, match="equal Biot"):
            DiathermicProblem(front_biot=0.2, rear_biot=2.0)

    def test_invalid_diathermic_coefficient(self):
        with pytest.raises(ConfigurationError):
            DiathermicProblem(diathermic_coefficient=1.5)

    def test_invalid_nonlinear_parameters(self):
        with pytest.raises(ConfigurationError):
            NonlinearProblem(test_temperature=0.0)
        with pytest.raises(ConfigurationError):
            NonlinearProblem(nonlinear_precision=0.0)


class TestProblemSerialization:

    def test_linearised_round_trip(self):
        problem = LinearisedProblem(
            front_biot=0.2, rear_biot=0.3, maximum_temperature=2.5,
            pulse=Pulse(width=0.01, shape=TriangularPulse()), num_points=50,
        )
        restored = Problem.from_dict(problem.to_dict())
        assert isinstance(restored, LinearisedProblem)
        assert restored.to_dict() == problem.to_dict()

    def test_diathermic_round_trip(self):
        problem = DiathermicProblem(front_biot=0.4, diathermic_coefficient=0.7)
        restored = Problem.from_dict(problem.to_dict())
        assert isinstance(restored, DiathermicProblem)
        assert restored.diathermic_coefficient == 0.7

    def test_translucent_round_trip(self):
        problem = TranslucentProblem(absorption=InsulatorAbsorption(30.0, 3.0, reflectance=0.2))
        restored = Problem.from_dict(problem.to_dict())
        assert isinstance(restored, TranslucentProblem)
        assert isinstance(restored.absorption, InsulatorAbsorption)
        assert restored.absorption.reflectance == 0.2

    def test_nonlinear_round_trip(self):
        problem = NonlinearProblem(test_temperature=800.0, maximum_heating=3.0, nonlinear_precision=1e-4)
        restored = Problem.from_dict(problem.to_dict())
        assert isinstance(restored, NonlinearProblem)
        assert restored.to_dict() == problem.to_dict()

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            Problem.from_dict({"type": "Two-dimensional"})
