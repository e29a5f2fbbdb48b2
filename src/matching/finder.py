"""Rank opposite-status listings against a target listing."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from src.data.schemas import MatchResult, PetRecord, PetStatus
from src.data.store import PetStore
from src.matching.scorer import confidence_for, score_pets

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIMILARITY = 70.0

Scorer = Callable[[Any, Any], tuple[int, list[str]]]


class MatchFinder:
    """Find likely lost/found pairings for a listing.

    Every query recomputes from the store; results are not cached.

    Args:
        store: Listings to search.
        scorer: Pairwise scoring function returning (similarity, features).
    """

    def __init__(self, store: PetStore, scorer: Scorer = score_pets) -> None:
        self.store = store
        self.scorer = scorer

    def find_matches(
        self,
        target_id: str,
        min_similarity: float = DEFAULT_MIN_SIMILARITY,
    ) -> list[MatchResult]:
        """Score every opposite-status listing against the target.

        A candidate whose scoring raises is logged and skipped; the rest
        of the query still completes.

        Args:
            target_id: Id of the listing to match.
            min_similarity: Inclusive lower bound on similarity.

        Returns:
            Matches sorted by similarity, highest first. Ties keep store order.

        Raises:
            PetNotFoundError: If target_id is unknown.
        """
        target = self.store.get(target_id)
        opposite = target.status.opposite()
        candidates = [
            pet
            for pet in self.store
            if pet.id != target.id and pet.status == opposite
        ]
        logger.info(
            "Matching pet %s (%s) against %d candidates, min similarity %.1f",
            target.id,
            target.status.value,
            len(candidates),
            min_similarity,
        )

        matches: list[MatchResult] = []
        for candidate in candidates:
            try:
                similarity, features = self.scorer(target, candidate)
                if not similarity >= min_similarity:
                    continue
                matches.append(_build_match(target, candidate, similarity, features))
            except Exception:
                logger.exception(
                    "Failed to score candidate %s for pet %s", candidate.id, target.id
                )

        matches.sort(key=lambda match: match.similarity, reverse=True)
        logger.info("Found %d matches for pet %s", len(matches), target.id)
        return matches


def _build_match(
    target: PetRecord,
    candidate: PetRecord,
    similarity: int,
    features: list[str],
) -> MatchResult:
    if target.status == PetStatus.LOST:
        lost_pet, found_pet = target, candidate
    else:
        lost_pet, found_pet = candidate, target
    return MatchResult(
        lost_pet=lost_pet,
        found_pet=found_pet,
        similarity=similarity,
        matched_features=features,
        confidence=confidence_for(similarity),
    )
