"""Tests for src/config.py."""

from __future__ import annotations

import pytest

from src.config import Config, get_config


class TestConfig:
    """Tests for Config dataclass."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Config should have sensible defaults."""
        for name in (
            "ROBOFLOW_API_KEY",
            "ROBOFLOW_MODEL_ENDPOINT",
            "VISION_TIMEOUT",
            "VISION_MOCK_SEED",
            "DEFAULT_MIN_SIMILARITY",
            "MAX_UPLOAD_SIDE",
        ):
            monkeypatch.delenv(name, raising=False)
        config = Config()
        assert config.roboflow_api_key == ""
        assert config.roboflow_model_endpoint == (
            "https://detect.roboflow.com/pet-detection/1"
        )
        assert config.vision_timeout == 30.0
        assert config.vision_mock_seed is None
        assert config.default_min_similarity == 70.0
        assert config.max_upload_side == 1024

    def test_api_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """API key should read from ROBOFLOW_API_KEY env var."""
        monkeypatch.setenv("ROBOFLOW_API_KEY", "secret")
        assert Config().roboflow_api_key == "secret"

    def test_mock_seed_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Mock seed should parse VISION_MOCK_SEED as an int."""
        monkeypatch.setenv("VISION_MOCK_SEED", "42")
        assert Config().vision_mock_seed == 42

    def test_blank_mock_seed_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A blank VISION_MOCK_SEED should mean unseeded."""
        monkeypatch.setenv("VISION_MOCK_SEED", "  ")
        assert Config().vision_mock_seed is None

    def test_min_similarity_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default threshold should read from DEFAULT_MIN_SIMILARITY."""
        monkeypatch.setenv("DEFAULT_MIN_SIMILARITY", "55.5")
        assert Config().default_min_similarity == 55.5

    def test_frozen_dataclass(self) -> None:
        """Config should be immutable (frozen)."""
        config = Config()
        with pytest.raises(AttributeError):
            config.port = 1234  # type: ignore[misc]

    def test_get_config_returns_config(self) -> None:
        """get_config should return a Config instance."""
        config = get_config()
        assert isinstance(config, Config)
