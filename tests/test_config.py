"""
Unit tests for configuration constants and helpers.
"""

import pytest

from pathfinder import config


class TestPaths:
    """Test path configuration."""

    def test_project_root(self, project_root):
        """PROJECT_ROOT points at the repository root."""
        assert config.PROJECT_ROOT.resolve() == project_root.resolve()

    def test_sample_files_present(self):
        """Both bundled samples ship with the repository."""
        assert config.validate_data_files() == {"sample_grid": True, "sample_graph": True}
        assert config.get_missing_data_files() == []


class TestPlaybackConfig:
    """Test speed and delay settings."""

    def test_default_speed_in_range(self):
        assert config.MIN_SPEED <= config.DEFAULT_SPEED <= config.MAX_SPEED

    @pytest.mark.parametrize("speed,expected", [(-5, 203), (0, 203), (101, 5), (1000, 5)])
    def test_tick_delay_clamps_speed(self, speed, expected):
        """Out-of-range speeds are clamped before computing the delay."""
        assert config.tick_delay_ms(speed) == expected

    def test_delay_never_below_floor(self):
        assert min(config.tick_delay_ms(s) for s in range(1, 101)) == config.MIN_TICK_DELAY_MS


class TestAlgorithmConfig:
    def test_default_algorithm_known(self):
        assert config.DEFAULT_ALGORITHM in config.ALGORITHMS

    def test_weight_cycle_starts_at_default(self):
        assert config.WEIGHT_CYCLE[0] == config.DEFAULT_CELL_WEIGHT
