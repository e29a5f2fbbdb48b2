"""Tests for src/matching/scorer.py."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.data.schemas import MatchConfidence, PetRecord
from src.data.store import PetStore
from src.matching.scorer import (
    SIMILAR_BREEDS,
    confidence_for,
    in_same_group,
    is_nearby,
    location_city,
    score_pets,
)


class TestScorePets:
    """Tests for listing-to-listing scoring."""

    def test_identical_attributes_score_100(self, make_pet) -> None:
        """Matching every rule should total exactly 100."""
        first = make_pet(id="a", status="lost")
        second = make_pet(id="b", status="found", location="Otra calle, Madrid")
        similarity, features = score_pets(first, second)
        assert similarity == 100
        assert features == [
            "same type (dog)",
            "same breed (Golden Retriever)",
            "same size (large)",
            "same color (Dorado)",
            "nearby location",
        ]

    def test_nothing_in_common_scores_zero(self, make_pet) -> None:
        """Unrelated listings should score 0 with no features."""
        first = make_pet(id="a")
        second = make_pet(
            id="b",
            type="cat",
            breed="Persa",
            color="Blanco",
            size="small",
            location="Barrio Gótico, Barcelona",
        )
        assert score_pets(first, second) == (0, [])

    def test_golden_vs_labrador(
        self, lost_golden: PetRecord, found_labrador: PetRecord
    ) -> None:
        """Similar breeds in the same city with different colors score 75."""
        similarity, features = score_pets(lost_golden, found_labrador)
        assert similarity == 30 + 15 + 20 + 10
        assert features == [
            "same type (dog)",
            "similar breeds",
            "same size (large)",
            "nearby location",
        ]

    def test_similar_colors(self, pet_store: PetStore) -> None:
        """Negro vs Negro y blanco should add the similar-color tier."""
        similarity, features = score_pets(pet_store.get("3"), pet_store.get("6"))
        assert similarity == 30 + 20 + 8 + 10
        assert "similar colors" in features

    def test_symmetric(self, pet_store: PetStore) -> None:
        """Argument order should never change the result."""
        pets = pet_store.all()
        for first in pets:
            for second in pets:
                assert score_pets(first, second) == score_pets(second, first)

    def test_empty_fields_never_score(self) -> None:
        """Empty or missing attributes should add nothing and never raise."""
        blank = SimpleNamespace(type="", breed="", color="", size=None, location="")
        assert score_pets(blank, blank) == (0, [])
        assert score_pets(SimpleNamespace(), SimpleNamespace()) == (0, [])

    def test_missing_breed_on_one_side(self, lost_golden: PetRecord) -> None:
        """A side without breed should only lose the breed rule."""
        other = SimpleNamespace(
            type="dog", breed=None, color="Dorado", size="large",
            location="Otra calle, Madrid",
        )
        similarity, features = score_pets(lost_golden, other)
        assert similarity == 30 + 20 + 15 + 10
        assert not any("breed" in feature for feature in features)

    def test_score_bounded(self, pet_store: PetStore) -> None:
        """Scores should stay within 0-100."""
        for first in pet_store:
            for second in pet_store:
                similarity, _ = score_pets(first, second)
                assert 0 <= similarity <= 100


class TestLocation:
    """Tests for the mock location proximity heuristic."""

    def test_city_keeps_leading_space(self) -> None:
        """City segment should be the raw text after the first comma."""
        assert location_city("Parque Central, Madrid") == " Madrid"

    def test_no_comma_has_no_city(self) -> None:
        """Locations without a comma should have no city."""
        assert location_city("Madrid") == ""

    def test_same_city_is_nearby(self) -> None:
        """Shared city segments should count as nearby."""
        assert is_nearby("Parque Central, Madrid", "Parque del Retiro, Madrid")

    def test_containment_either_way(self) -> None:
        """One side containing the other's city should be enough."""
        assert is_nearby("Centro de Madrid, España", "Retiro, Madrid")

    def test_different_cities(self) -> None:
        """Different cities should not be nearby."""
        assert not is_nearby("Calle Mayor, Barcelona", "Plaza España, Sevilla")

    def test_missing_city_never_nearby(self) -> None:
        """Locations without a city segment should never match."""
        assert not is_nearby("Madrid", "Madrid")
        assert not is_nearby("Parque,", "Plaza,")
        assert not is_nearby("", "")


class TestGroups:
    """Tests for similar-group membership."""

    def test_same_group(self) -> None:
        """Golden Retriever and Labrador share a group."""
        assert in_same_group("Golden Retriever", "Labrador", SIMILAR_BREEDS)

    def test_different_groups(self) -> None:
        """Labrador and Bulldog Francés share no group."""
        assert not in_same_group("Labrador", "Bulldog Francés", SIMILAR_BREEDS)

    def test_unknown_value(self) -> None:
        """Values outside every group never match."""
        assert not in_same_group("Persa", "Siamés", SIMILAR_BREEDS)


class TestConfidenceFor:
    """Tests for confidence bucketing."""

    @pytest.mark.parametrize(
        ("similarity", "expected"),
        [
            (100, MatchConfidence.HIGH),
            (85, MatchConfidence.HIGH),
            (84, MatchConfidence.MEDIUM),
            (84.9, MatchConfidence.MEDIUM),
            (70, MatchConfidence.MEDIUM),
            (69, MatchConfidence.LOW),
            (0, MatchConfidence.LOW),
        ],
    )
    def test_boundaries(self, similarity: float, expected: MatchConfidence) -> None:
        """Buckets should split at 70 and 85."""
        assert confidence_for(similarity) is expected

    def test_monotonic(self) -> None:
        """Higher similarity should never give a lower bucket."""
        order = [MatchConfidence.LOW, MatchConfidence.MEDIUM, MatchConfidence.HIGH]
        ranks = [order.index(confidence_for(value)) for value in range(101)]
        assert ranks == sorted(ranks)
