"""Central application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _optional_int(name: str) -> int | None:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


@dataclass(frozen=True)
class Config:
    """Central application configuration.

    Reads from environment variables with sensible defaults.
    An empty Roboflow API key switches the vision client to mock mode.
    """

    # Roboflow vision endpoint
    roboflow_api_key: str = field(
        default_factory=lambda: os.getenv("ROBOFLOW_API_KEY", "")
    )
    roboflow_model_endpoint: str = field(
        default_factory=lambda: os.getenv(
            "ROBOFLOW_MODEL_ENDPOINT", "https://detect.roboflow.com/pet-detection/1"
        )
    )
    vision_timeout: float = field(
        default_factory=lambda: float(os.getenv("VISION_TIMEOUT", "30"))
    )
    vision_mock_seed: int | None = field(
        default_factory=lambda: _optional_int("VISION_MOCK_SEED")
    )
    max_upload_side: int = field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_SIDE", "1024"))
    )

    # Matching
    default_min_similarity: float = field(
        default_factory=lambda: float(os.getenv("DEFAULT_MIN_SIMILARITY", "70"))
    )

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


def get_config() -> Config:
    """Get application configuration.

    Returns:
        Config instance with values from environment or defaults.
    """
    return Config()
