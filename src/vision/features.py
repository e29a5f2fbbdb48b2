"""Pet attributes from detections, and feature-to-feature similarity.

The feature comparison here is deliberately separate from the listing scorer
in ``src.matching.scorer``: weights are fractions of 1.0 normalised by the
number of attributes both sides carry, scaled by detection confidence, and
the similar-group tables are wider.
"""

from __future__ import annotations

import logging

from src.data.schemas import PetFeatures, PetSize
from src.matching.scorer import in_same_group

logger = logging.getLogger(__name__)

BREED_WEIGHT = 0.4
SIMILAR_BREED_WEIGHT = 0.25
COLOR_WEIGHT = 0.3
SIMILAR_COLOR_WEIGHT = 0.15
SIZE_WEIGHT = 0.2

FEATURE_SIMILAR_BREEDS: list[frozenset[str]] = [
    frozenset({"Golden Retriever", "Labrador", "Labrador Retriever"}),
    frozenset({"Bulldog Francés", "Bulldog Inglés", "Bulldog"}),
    frozenset({"Gato doméstico", "Gato Persa", "Gato Siamés"}),
]

FEATURE_SIMILAR_COLORS: list[frozenset[str]] = [
    frozenset({"Negro", "Negro y blanco", "Gris oscuro"}),
    frozenset({"Blanco", "Blanco y gris", "Crema"}),
    frozenset({"Dorado", "Amarillo", "Rubio"}),
    frozenset({"Marrón", "Chocolate", "Canela"}),
]

# Plausible results served when the vision service is unavailable
MOCK_FEATURES: list[dict] = [
    {"breed": "Golden Retriever", "color": "Dorado", "size": "large", "confidence": 0.94},
    {"breed": "Labrador", "color": "Chocolate", "size": "large", "confidence": 0.89},
    {"breed": "Bulldog Francés", "color": "Negro", "size": "small", "confidence": 0.76},
    {"breed": "Gato doméstico", "color": "Gris y blanco", "size": "small", "confidence": 0.87},
]

# Class-name keyword -> (breed, color, size); first matching rule wins
_BREED_RULES: list[tuple[tuple[str, ...], str, str | None, PetSize]] = [
    (("golden", "retriever"), "Golden Retriever", "Dorado", PetSize.LARGE),
    (("labrador",), "Labrador", None, PetSize.LARGE),
    (("bulldog",), "Bulldog Francés", None, PetSize.SMALL),
    (("cat", "gato"), "Gato doméstico", None, PetSize.SMALL),
]

# Applied in order, so a later keyword overrides an earlier one
_COLOR_RULES: list[tuple[str, str]] = [
    ("black", "Negro"),
    ("white", "Blanco"),
    ("brown", "Marrón"),
    ("golden", "Dorado"),
]


def extract_pet_features(predictions: list[dict]) -> PetFeatures:
    """Map the most confident detection to coarse pet attributes.

    Args:
        predictions: Detection dicts with at least ``class`` and ``confidence``.

    Returns:
        PetFeatures; ``confidence`` 0 and no attributes when nothing was detected.
    """
    if not predictions:
        return PetFeatures(confidence=0.0)

    best = max(predictions, key=lambda prediction: float(prediction["confidence"]))
    class_name = str(best["class"]).lower()

    breed = color = size = None
    for keywords, rule_breed, rule_color, rule_size in _BREED_RULES:
        if any(keyword in class_name for keyword in keywords):
            breed, color, size = rule_breed, rule_color, rule_size.value
            break

    for keyword, keyword_color in _COLOR_RULES:
        if keyword in class_name:
            color = keyword_color

    return PetFeatures(
        breed=breed,
        color=color,
        size=size,
        confidence=float(best["confidence"]),
    )


def compare_features(first: PetFeatures, second: PetFeatures) -> float:
    """Similarity of two feature sets on a 0-100 scale.

    Only attributes present on both sides count as factors. The weighted sum
    is scaled by the mean detection confidence and divided by the number of
    factors. With no shared factors the result is 0.
    """
    similarity = 0.0
    factors = 0

    if first.breed and second.breed:
        factors += 1
        if first.breed == second.breed:
            similarity += BREED_WEIGHT
        elif in_same_group(first.breed, second.breed, FEATURE_SIMILAR_BREEDS):
            similarity += SIMILAR_BREED_WEIGHT

    if first.color and second.color:
        factors += 1
        if first.color == second.color:
            similarity += COLOR_WEIGHT
        elif in_same_group(first.color, second.color, FEATURE_SIMILAR_COLORS):
            similarity += SIMILAR_COLOR_WEIGHT

    if first.size and second.size:
        factors += 1
        if first.size == second.size:
            similarity += SIZE_WEIGHT

    if factors == 0:
        logger.debug("No shared attributes to compare")
        return 0.0

    similarity *= (first.confidence + second.confidence) / 2
    return min(similarity / factors * 100, 100.0)
