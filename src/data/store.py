"""Read-only in-memory store of pet listings."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Iterator

from src.data.schemas import DateRange, PetRecord, PetStatus, SearchFilters
from src.errors import PetNotFoundError

logger = logging.getLogger(__name__)

# Maximum report age in days for each date-range filter
DATE_RANGE_DAYS = {
    DateRange.TODAY: 0,
    DateRange.WEEK: 7,
    DateRange.MONTH: 30,
}

SEED_PETS: list[dict] = [
    {
        "id": "1",
        "name": "Luna",
        "type": "dog",
        "breed": "Golden Retriever",
        "color": "Dorado",
        "size": "large",
        "status": "lost",
        "location": "Parque Central, Madrid",
        "date": "2024-01-15",
        "description": "Muy cariñosa, lleva collar azul con placa. Responde a su nombre.",
        "contact": {
            "name": "María García",
            "phone": "+34 666 123 456",
            "whatsapp": "+34 666 123 456",
        },
        "images": ["/golden-retriever.png"],
    },
    {
        "id": "2",
        "name": "Michi",
        "type": "cat",
        "breed": "Siamés",
        "color": "Gris y blanco",
        "size": "medium",
        "status": "found",
        "location": "Calle Mayor, Barcelona",
        "date": "2024-01-14",
        "description": "Gato muy tranquilo, ojos azules. Encontrado cerca del mercado.",
        "contact": {"name": "Carlos López", "phone": "+34 677 987 654"},
        "images": ["/siamese-cat-gray-white.png"],
    },
    {
        "id": "3",
        "name": "Rocky",
        "type": "dog",
        "breed": "Bulldog Francés",
        "color": "Negro",
        "size": "small",
        "status": "lost",
        "location": "Plaza España, Sevilla",
        "date": "2024-01-13",
        "description": "Muy juguetón, tiene una mancha blanca en el pecho.",
        "contact": {
            "name": "Ana Martín",
            "phone": "+34 655 444 333",
            "whatsapp": "+34 655 444 333",
        },
        "images": ["/french-bulldog-black-white-chest.png"],
    },
    {
        "id": "4",
        "name": "Bella",
        "type": "dog",
        "breed": "Labrador",
        "color": "Chocolate",
        "size": "large",
        "status": "found",
        "location": "Parque del Retiro, Madrid",
        "date": "2024-01-12",
        "description": "Perra muy amigable, sin collar. Parece estar bien cuidada.",
        "contact": {"name": "Luis Fernández", "phone": "+34 644 555 777"},
        "images": ["/chocolate-labrador.png"],
    },
    {
        "id": "5",
        "name": "Whiskers",
        "type": "cat",
        "breed": "Persa",
        "color": "Blanco",
        "size": "small",
        "status": "lost",
        "location": "Barrio Gótico, Barcelona",
        "date": "2024-01-11",
        "description": "Gato persa de pelo largo, muy tímido. Lleva collar rosa.",
        "contact": {
            "name": "Elena Ruiz",
            "phone": "+34 633 888 999",
            "whatsapp": "+34 633 888 999",
        },
        "images": ["/white-persian-cat.png"],
    },
    {
        "id": "6",
        "name": "Desconocido",
        "type": "dog",
        "breed": "Mestizo pequeño",
        "color": "Negro y blanco",
        "size": "small",
        "status": "found",
        "location": "Centro, Sevilla",
        "date": "2024-01-14",
        "description": "Perro pequeño encontrado, muy cariñoso.",
        "contact": {"name": "Pedro Sánchez", "phone": "+34 622 111 222"},
        "images": [],
    },
]


class PetStore:
    """Fixed collection of pet listings.

    There is no mutation API: reporting a pet does not persist anywhere,
    and every query reads the same records for the life of the process.

    Args:
        records: Listings to serve. Ids must be unique.
    """

    def __init__(self, records: Iterable[PetRecord]) -> None:
        self._records: list[PetRecord] = list(records)
        self._by_id: dict[str, PetRecord] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise ValueError(f"Duplicate pet id: {record.id}")
            self._by_id[record.id] = record

    @classmethod
    def seeded(cls) -> PetStore:
        """Build the store from the bundled demo listings."""
        store = cls(PetRecord(**data) for data in SEED_PETS)
        logger.info("Loaded %d pet listings", len(store))
        return store

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PetRecord]:
        return iter(self._records)

    def all(self) -> list[PetRecord]:
        return list(self._records)

    def get(self, pet_id: str) -> PetRecord:
        """Look up a listing by id.

        Raises:
            PetNotFoundError: If no listing has this id.
        """
        try:
            return self._by_id[pet_id]
        except KeyError:
            raise PetNotFoundError(pet_id) from None

    def by_status(self, status: PetStatus) -> list[PetRecord]:
        return [record for record in self._records if record.status == status]

    def search(
        self,
        filters: SearchFilters,
        today: datetime.date | None = None,
    ) -> list[PetRecord]:
        """Filter listings by free text, enums, location and report age.

        Args:
            filters: Search criteria. Empty criteria match everything.
            today: Reference date for the date-range filter.

        Returns:
            Matching listings in store order.
        """
        today = today or datetime.date.today()
        return [
            record
            for record in self._records
            if _matches_filters(record, filters, today)
        ]


def _matches_filters(
    record: PetRecord, filters: SearchFilters, today: datetime.date
) -> bool:
    if filters.query:
        searchable = " ".join(
            [
                record.name,
                record.breed,
                record.color,
                record.location,
                record.description,
            ]
        ).lower()
        if filters.query.lower() not in searchable:
            return False

    if filters.types and record.type not in filters.types:
        return False
    if filters.statuses and record.status not in filters.statuses:
        return False
    if filters.sizes and record.size not in filters.sizes:
        return False

    if filters.location and filters.location.lower() not in record.location.lower():
        return False

    if filters.date_range is not None:
        age_days = (today - record.date).days
        if age_days > DATE_RANGE_DAYS[filters.date_range]:
            return False

    return True
