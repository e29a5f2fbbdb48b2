"""Rule-based similarity between two pet listings.

Each rule adds points when both listings agree on an attribute. Rules are
evaluated in a fixed order (type, breed, size, color, location) and the
matched-feature descriptions follow that order. Attribute comparison is
exact string equality, optionally widened to membership in a curated group
of similar breeds or colors. There is no partial credit beyond these two
tiers and no edit-distance scoring.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from src.data.schemas import MatchConfidence

MAX_SIMILARITY = 100

TYPE_POINTS = 30
BREED_POINTS = 25
SIMILAR_BREED_POINTS = 15
SIZE_POINTS = 20
COLOR_POINTS = 15
SIMILAR_COLOR_POINTS = 8
LOCATION_POINTS = 10

HIGH_CONFIDENCE_THRESHOLD = 85
MEDIUM_CONFIDENCE_THRESHOLD = 70

SIMILAR_BREEDS: list[frozenset[str]] = [
    frozenset({"Golden Retriever", "Labrador", "Labrador Retriever"}),
    frozenset({"Bulldog Francés", "Bulldog Inglés"}),
    frozenset({"Gato Persa", "Gato Siamés", "Gato doméstico"}),
]

SIMILAR_COLORS: list[frozenset[str]] = [
    frozenset({"Negro", "Negro y blanco"}),
    frozenset({"Blanco", "Blanco y gris"}),
    frozenset({"Dorado", "Amarillo"}),
    frozenset({"Chocolate", "Marrón"}),
]


def in_same_group(first: str, second: str, groups: Sequence[frozenset[str]]) -> bool:
    """Return True if some group contains both values."""
    return any(first in group and second in group for group in groups)


def location_city(location: str) -> str:
    """Return the raw text after the first comma of a 'place, city' location.

    The segment is not stripped, so "Parque Central, Madrid" yields " Madrid".
    Locations without a comma have no city.
    """
    parts = location.split(",")
    return parts[1] if len(parts) > 1 else ""


def is_nearby(first: str, second: str) -> bool:
    """Mock proximity: either location contains the other's city segment."""
    first_city = location_city(first)
    second_city = location_city(second)
    return bool(second_city.strip()) and second_city in first or (
        bool(first_city.strip()) and first_city in second
    )


def score_pets(first: Any, second: Any) -> tuple[int, list[str]]:
    """Score how likely two listings describe the same animal.

    Works on PetRecord instances or any object exposing ``type``, ``breed``,
    ``size``, ``color`` and ``location``. Attributes that are missing, None
    or empty on either side add nothing.

    Args:
        first: One listing.
        second: The other listing.

    Returns:
        Tuple of (similarity clamped to 0-100, matched-feature descriptions).
    """
    similarity = 0
    features: list[str] = []

    first_type, second_type = _text(first, "type"), _text(second, "type")
    if first_type and first_type == second_type:
        similarity += TYPE_POINTS
        features.append(f"same type ({first_type})")

    first_breed, second_breed = _text(first, "breed"), _text(second, "breed")
    if first_breed and second_breed:
        if first_breed == second_breed:
            similarity += BREED_POINTS
            features.append(f"same breed ({first_breed})")
        elif in_same_group(first_breed, second_breed, SIMILAR_BREEDS):
            similarity += SIMILAR_BREED_POINTS
            features.append("similar breeds")

    first_size, second_size = _text(first, "size"), _text(second, "size")
    if first_size and first_size == second_size:
        similarity += SIZE_POINTS
        features.append(f"same size ({first_size})")

    first_color, second_color = _text(first, "color"), _text(second, "color")
    if first_color and second_color:
        if first_color == second_color:
            similarity += COLOR_POINTS
            features.append(f"same color ({first_color})")
        elif in_same_group(first_color, second_color, SIMILAR_COLORS):
            similarity += SIMILAR_COLOR_POINTS
            features.append("similar colors")

    if is_nearby(_text(first, "location"), _text(second, "location")):
        similarity += LOCATION_POINTS
        features.append("nearby location")

    return min(similarity, MAX_SIMILARITY), features


def confidence_for(similarity: float) -> MatchConfidence:
    """Bucket a 0-100 similarity: >= 85 high, >= 70 medium, else low."""
    if similarity >= HIGH_CONFIDENCE_THRESHOLD:
        return MatchConfidence.HIGH
    if similarity >= MEDIUM_CONFIDENCE_THRESHOLD:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


def _text(pet: Any, attr: str) -> str:
    value = getattr(pet, attr, None)
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
