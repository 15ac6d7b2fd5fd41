"""
Tests for configuration loading.
"""

import pytest

from contour_interpolation.config import InterpolationConfig, load_config
from tests.fixtures.factories import CONTOUR_TOOL, SPLINE_TOOL

pytestmark = pytest.mark.unit


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("INTERPOLATION_TOOL_NAMES", "INTERPOLATION_LOG_LEVEL", "INTERPOLATION_LOG_JSON", "INTERPOLATION_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestInterpolationConfig:

    def test_defaults(self, clean_env):
        """Test load_config defaults."""
        config = load_config()

        assert config.tool_names == []
        assert config.log_level == "INFO"
        assert config.log_json is False
        assert config.log_file is None

    def test_reads_environment(self, clean_env, tmp_path):
        """Test load_config reads INTERPOLATION_* variables."""
        clean_env.setenv("INTERPOLATION_TOOL_NAMES", f"{CONTOUR_TOOL}, {SPLINE_TOOL},,{CONTOUR_TOOL}")
        clean_env.setenv("INTERPOLATION_LOG_LEVEL", "debug")
        clean_env.setenv("INTERPOLATION_LOG_JSON", "1")
        clean_env.setenv("INTERPOLATION_LOG_FILE", str(tmp_path / "interpolation.log"))

        config = load_config()

        assert config.tool_names == [CONTOUR_TOOL, SPLINE_TOOL]
        assert config.log_level == "DEBUG"
        assert config.log_json is True
        assert config.log_file == str(tmp_path / "interpolation.log")

    def test_overrides_win(self, clean_env):
        """Test keyword overrides beat the environment."""
        clean_env.setenv("INTERPOLATION_TOOL_NAMES", CONTOUR_TOOL)

        config = load_config(tool_names=[SPLINE_TOOL])

        assert config.tool_names == [SPLINE_TOOL]

    def test_list_input(self):
        """Test tool_names accepts a list."""
        assert InterpolationConfig(tool_names=[" a ", "b", "a"]).tool_names == ["a", "b"]
