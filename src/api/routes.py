"""FastAPI routes for matching, image analysis, listings and health check."""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from src.data.schemas import (
    AnalyzeResponse,
    CompareResponse,
    DateRange,
    ErrorResponse,
    MatchResponse,
    PetListResponse,
    PetResponse,
    PetSize,
    PetStatus,
    PetType,
    SearchFilters,
)
from src.errors import PetNotFoundError
from src.vision.roboflow_client import VisionProvider

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES: dict = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    """Build a JSON error body in the shape every endpoint shares."""
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.get("/matches", response_model=MatchResponse, responses=_ERROR_RESPONSES)
async def find_matches(
    request: Request,
    pet_id: str | None = Query(None, alias="petId"),
    min_similarity: float | None = Query(None, alias="minSimilarity"),
) -> MatchResponse | JSONResponse:
    """Rank opposite-status listings that may be the same animal.

    Args:
        request: FastAPI request with app state.
        pet_id: Id of the listing to match.
        min_similarity: Inclusive similarity threshold (default from config).

    Returns:
        MatchResponse as JSON, or an error body.
    """
    if not pet_id:
        return _error(400, "Pet ID is required")

    if min_similarity is None:
        min_similarity = request.app.state.config.default_min_similarity
    logger.info("Finding matches for pet %s, min similarity %.1f", pet_id, min_similarity)

    finder = request.app.state.finder
    try:
        matches = finder.find_matches(pet_id, min_similarity)
    except PetNotFoundError:
        return _error(404, "Pet not found")
    except Exception:
        logger.exception("Match query failed for pet %s", pet_id)
        return _error(500, "Failed to find matches")

    return MatchResponse(matches=matches, total=len(matches))


@router.post("/image/analyze", response_model=AnalyzeResponse, responses=_ERROR_RESPONSES)
async def analyze_image(
    request: Request,
    image: UploadFile | None = File(None),  # noqa: B008
) -> AnalyzeResponse | JSONResponse:
    """Extract breed, color and size from an uploaded pet photo.

    Args:
        request: FastAPI request with app state.
        image: Uploaded image file.

    Returns:
        AnalyzeResponse with features and whether they are mock data.
    """
    if image is None:
        return _error(400, "No image file provided")

    vision: VisionProvider = request.app.state.vision
    try:
        contents = await image.read()
        logger.info("Analyzing image %s (%d bytes)", image.filename, len(contents))
        features = await run_in_threadpool(
            vision.analyze_image, contents, image.filename or "image.jpg"
        )
    except Exception as exc:
        logger.exception("Image analysis failed")
        return _error(500, "Failed to analyze image", details=str(exc))

    return AnalyzeResponse(features=features, is_mock_data=vision.is_mock)


@router.post("/image/compare", response_model=CompareResponse, responses=_ERROR_RESPONSES)
async def compare_images(
    request: Request,
    image1: UploadFile | None = File(None),  # noqa: B008
    image2: UploadFile | None = File(None),  # noqa: B008
) -> CompareResponse | JSONResponse:
    """Score how likely two uploaded photos show the same pet.

    Returns:
        CompareResponse with a 0-100 similarity.
    """
    if image1 is None or image2 is None:
        return _error(400, "Two image files are required")

    vision: VisionProvider = request.app.state.vision
    try:
        first = await image1.read()
        second = await image2.read()
        similarity = await run_in_threadpool(vision.compare_images, first, second)
    except Exception as exc:
        logger.exception("Image comparison failed")
        return _error(500, "Failed to compare images", details=str(exc))

    logger.info("Image comparison similarity: %.1f", similarity)
    return CompareResponse(similarity=similarity)


@router.get("/pets", response_model=PetListResponse)
async def list_pets(
    request: Request,
    q: str = "",
    pet_type: list[PetType] = Query([], alias="type"),  # noqa: B008
    status: list[PetStatus] = Query([]),  # noqa: B008
    size: list[PetSize] = Query([]),  # noqa: B008
    location: str = "",
    date_range: DateRange | None = Query(None, alias="dateRange"),
) -> PetListResponse:
    """Search listings by text, type, status, size, location and report age."""
    filters = SearchFilters(
        query=q.strip(),
        types=pet_type,
        statuses=status,
        sizes=size,
        location=location.strip(),
        date_range=date_range,
    )
    pets = request.app.state.store.search(filters)
    return PetListResponse(pets=pets, total=len(pets))


@router.get("/pets/{pet_id}", response_model=PetResponse, responses=_ERROR_RESPONSES)
async def get_pet(request: Request, pet_id: str) -> PetResponse | JSONResponse:
    """Return a single listing."""
    try:
        pet = request.app.state.store.get(pet_id)
    except PetNotFoundError:
        return _error(404, "Pet not found")
    return PetResponse(pet=pet)


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint for monitoring.

    Returns:
        Dict with listing count and vision backend mode.
    """
    return {
        "status": "healthy",
        "pets": len(request.app.state.store),
        "vision": "mock" if request.app.state.vision.is_mock else "roboflow",
    }
