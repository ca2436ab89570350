"""Tests for SchemeConfig."""
import dataclasses

import pytest

from laserflash.config import DEFAULT_SCHEME_CONFIG, SchemeConfig
from laserflash.errors import ConfigurationError, SolverError


class TestSchemeConfig:

    def test_default_values(self):
        config = SchemeConfig()
        assert config.grid_density == 30
        assert config.time_factor == 0.25
        assert config.time_limit == 1.0
        assert config.time_offset == 1e-7
        assert config.nonlinear_max_iterations == 100
        assert config.resolve_pulse is True
        assert config == DEFAULT_SCHEME_CONFIG

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_SCHEME_CONFIG.grid_density = 10

    def test_with_changes_returns_copy(self):
        changed = DEFAULT_SCHEME_CONFIG.with_changes(grid_density=50)
        assert changed.grid_density == 50
        assert DEFAULT_SCHEME_CONFIG.grid_density == 30

    def test_dict_round_trip(self):
        config = SchemeConfig(grid_density=40, time_factor=0.1, time_limit=3.0)
        assert SchemeConfig.from_dict(config.to_dict()) == config

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigurationError, match="grid_size"):
            SchemeConfig.from_dict({"grid_size": 10})

    @pytest.mark.parametrize("changes", [
        {"time_limit": 0.0},
        {"time_offset": 1.0},
        {"nonlinear_max_iterations": 0},
        {"max_pulse_refinements": -1},
    ])
    def test_invalid_values(self, changes):
        with pytest.raises(ConfigurationError):
            SchemeConfig(**changes)

    def test_configuration_error_taxonomy(self):
        assert issubclass(ConfigurationError, SolverError)
        assert issubclass(ConfigurationError, ValueError)
