"""Roboflow detection client with mock fallback."""

from __future__ import annotations

import io
import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import requests
from PIL import Image

from src.config import Config
from src.data.schemas import PetFeatures
from src.errors import UpstreamError
from src.vision.features import MOCK_FEATURES, compare_features, extract_pet_features

logger = logging.getLogger(__name__)

DEFAULT_MODEL_ENDPOINT = "https://detect.roboflow.com/pet-detection/1"


class VisionProvider(Protocol):
    """Turns pet photos into features and compares pairs of photos."""

    @property
    def is_mock(self) -> bool: ...

    def analyze_image(self, data: bytes, filename: str = "image.jpg") -> PetFeatures: ...

    def compare_images(self, first: bytes, second: bytes) -> float: ...

    def close(self) -> None: ...


class RoboflowClient:
    """Extract pet features from photos with a Roboflow detection model.

    Without an API key every analysis returns a random entry of the mock
    table. With a key, any failure of the remote call (network, non-2xx,
    malformed body, undecodable upload) also degrades to mock features and
    is only visible in the logs.

    Args:
        api_key: Roboflow API key. Empty means mock mode.
        endpoint: Model inference URL.
        timeout: Request timeout in seconds.
        max_side: Uploads are downscaled so their longest side fits this.
        rng: Random source for mock results; seed it for reproducibility.
        session: HTTP session, injectable for tests.
    """

    def __init__(
        self,
        api_key: str = "",
        endpoint: str = DEFAULT_MODEL_ENDPOINT,
        timeout: float = 30.0,
        max_side: int = 1024,
        rng: random.Random | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_side = max_side
        self.rng = rng or random.Random()
        self.session = session or requests.Session()

    @property
    def is_mock(self) -> bool:
        return not self.api_key

    def analyze_image(self, data: bytes, filename: str = "image.jpg") -> PetFeatures:
        """Extract breed, color and size from one photo.

        Args:
            data: Raw uploaded image bytes.
            filename: Original upload name, forwarded to the service.

        Returns:
            PetFeatures from the detection model, or mock features.
        """
        if self.is_mock:
            logger.info("No Roboflow API key configured, using mock features")
            return self.mock_features()

        try:
            return self._detect(data, filename)
        except UpstreamError as exc:
            logger.warning("Roboflow analysis failed, using mock features: %s", exc)
            return self.mock_features()

    def compare_images(self, first: bytes, second: bytes) -> float:
        """Similarity of two photos on a 0-100 scale.

        Both photos are analyzed concurrently. If the comparison itself
        fails, a random similarity in [60, 100) is returned.
        """
        try:
            with ThreadPoolExecutor(max_workers=2) as pool:
                first_future = pool.submit(self.analyze_image, first)
                second_future = pool.submit(self.analyze_image, second)
                first_features = first_future.result()
                second_features = second_future.result()
            return compare_features(first_features, second_features)
        except Exception:
            logger.warning(
                "Image comparison failed, using mock similarity", exc_info=True
            )
            return self.mock_similarity()

    def close(self) -> None:
        self.session.close()

    def mock_features(self) -> PetFeatures:
        return PetFeatures(**self.rng.choice(MOCK_FEATURES))

    def mock_similarity(self) -> float:
        return 60.0 + self.rng.random() * 40.0

    def _detect(self, data: bytes, filename: str) -> PetFeatures:
        payload = _prepare_upload(data, self.max_side)

        logger.info("Calling Roboflow model at %s", self.endpoint)
        try:
            response = self.session.post(
                self.endpoint,
                params={"api_key": self.api_key},
                files={"file": (filename, payload, "image/jpeg")},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as err:
            raise UpstreamError(f"Roboflow request failed: {err}") from err

        predictions = body.get("predictions") if isinstance(body, dict) else None
        if not isinstance(predictions, list):
            raise UpstreamError("Malformed Roboflow response: no predictions list")

        try:
            features = extract_pet_features(predictions)
        except (KeyError, TypeError, ValueError) as err:
            raise UpstreamError(f"Malformed Roboflow prediction: {err}") from err

        logger.info(
            "Roboflow returned %d detections, best confidence %.2f",
            len(predictions),
            features.confidence,
        )
        return features


def _prepare_upload(data: bytes, max_side: int) -> bytes:
    """Re-encode an upload as an RGB JPEG no larger than max_side.

    Raises:
        UpstreamError: If the bytes are not a readable image or exceed
            Pillow's decompression-bomb limit.
    """
    try:
        image = Image.open(io.BytesIO(data)).convert("RGB")
        image.thumbnail((max_side, max_side))
    except (OSError, Image.DecompressionBombError, ValueError) as err:
        raise UpstreamError(f"Unreadable image upload: {err}") from err

    buf = io.BytesIO()
    image.save(buf, format="JPEG")
    return buf.getvalue()


def create_vision_provider(config: Config) -> RoboflowClient:
    """Build the vision client described by the configuration."""
    return RoboflowClient(
        api_key=config.roboflow_api_key,
        endpoint=config.roboflow_model_endpoint,
        timeout=config.vision_timeout,
        max_side=config.max_upload_side,
        rng=random.Random(config.vision_mock_seed),
    )
