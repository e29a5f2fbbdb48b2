"""Exception types shared by the store, matcher, vision client and API."""

from __future__ import annotations


class PetFinderError(Exception):
    """Base class for application errors."""


class PetNotFoundError(PetFinderError, LookupError):
    """No pet listing exists with the requested id."""

    def __init__(self, pet_id: str) -> None:
        super().__init__(f"Pet not found: {pet_id}")
        self.pet_id = pet_id


class UpstreamError(PetFinderError):
    """The external vision service failed or returned an unusable body.

    Never reaches API callers: the vision client swaps in fallback features.
    """
