"""
Selección de propiedades a comparar ("canasta" de comparación).

Admite como máximo dos propiedades distintas.
"""

from typing import Optional

from nido.models import ListingRecord

MAX_COMPARED = 2


class CompareSelection:
    """Selección en memoria de hasta dos propiedades."""

    def __init__(self):
        self._listings: list[ListingRecord] = []

    def add(self, listing: ListingRecord) -> bool:
        """
        Agrega una propiedad.

        Returns:
            False si ya estaba o si la selección está llena
        """
        if listing.id in self or len(self._listings) >= MAX_COMPARED:
            return False
        self._listings.append(listing)
        return True

    def remove(self, listing_id: str) -> None:
        self._listings = [item for item in self._listings if item.id != listing_id]

    def get(self, listing_id: str) -> Optional[ListingRecord]:
        return next((item for item in self._listings if item.id == listing_id), None)

    def all(self) -> list[ListingRecord]:
        """Copia de la selección actual, en orden de agregado."""
        return list(self._listings)

    def clear(self) -> None:
        self._listings = []

    @property
    def is_ready(self) -> bool:
        return len(self._listings) == MAX_COMPARED

    def __contains__(self, listing_id: str) -> bool:
        return any(item.id == listing_id for item in self._listings)

    def __len__(self) -> int:
        return len(self._listings)
