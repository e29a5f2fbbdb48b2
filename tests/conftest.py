"""Shared test fixtures for the pet matching test suite."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from PIL import Image

from src.data.schemas import PetRecord
from src.data.store import PetStore


def _pet(**overrides: object) -> PetRecord:
    data: dict = {
        "id": "x",
        "name": "Test",
        "type": "dog",
        "breed": "Golden Retriever",
        "color": "Dorado",
        "size": "large",
        "status": "lost",
        "location": "Parque Central, Madrid",
        "date": "2024-01-15",
        "description": "A test pet",
        "contact": {"name": "Owner", "phone": "+34 600 000 000"},
        "images": [],
    }
    data.update(overrides)
    return PetRecord(**data)


@pytest.fixture
def make_pet() -> Callable[..., PetRecord]:
    """Factory building a PetRecord with overridable fields."""
    return _pet


@pytest.fixture
def lost_golden() -> PetRecord:
    """Luna, a lost Golden Retriever in Madrid."""
    return _pet(
        id="1",
        name="Luna",
        description="Muy cariñosa, lleva collar azul con placa.",
        images=["/golden-retriever.png"],
    )


@pytest.fixture
def found_labrador() -> PetRecord:
    """Bella, a found chocolate Labrador in Madrid."""
    return _pet(
        id="4",
        name="Bella",
        breed="Labrador",
        color="Chocolate",
        status="found",
        location="Parque del Retiro, Madrid",
        date="2024-01-12",
    )


@pytest.fixture
def pet_store() -> PetStore:
    """The seeded demo store."""
    return PetStore.seeded()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small JPEG image as raw bytes."""
    img = Image.new("RGB", (100, 100), color="red")
    buf = io.BytesIO()
    img.save(buf, format="JPEG")
    return buf.getvalue()
