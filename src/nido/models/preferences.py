"""
Perfil de preferencias inferido y filtro de catálogo derivado.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from nido.config import (
    DEFAULT_AREA_RANGE,
    DEFAULT_BEDROOMS_RANGE,
    DEFAULT_PRICE_RANGE,
)


class NumericRange(BaseModel):
    """Rango cerrado [min, max]."""

    min: float = Field(..., description="Límite inferior")
    max: float = Field(..., description="Límite superior")

    @model_validator(mode="after")
    def _check_bounds(self) -> "NumericRange":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) mayor que max ({self.max})")
        return self

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def as_tuple(self) -> tuple[float, float]:
        return (self.min, self.max)


def _default_range(bounds: tuple[float, float]):
    return lambda: NumericRange(min=bounds[0], max=bounds[1])


class PreferenceProfile(BaseModel):
    """
    Preferencias deducidas del historial de navegación.

    No se persiste: se recalcula en cada llamada. El perfil por
    defecto no filtra nada ("mostrar todo").
    """

    property_types: set[str] = Field(default_factory=set)
    locations: set[str] = Field(
        default_factory=set, description="Ciudades (primer segmento de la ubicación)"
    )
    price_range: NumericRange = Field(default_factory=_default_range(DEFAULT_PRICE_RANGE))
    area_range: NumericRange = Field(default_factory=_default_range(DEFAULT_AREA_RANGE))
    bedrooms_range: NumericRange = Field(
        default_factory=_default_range(DEFAULT_BEDROOMS_RANGE)
    )

    @classmethod
    def default(cls) -> "PreferenceProfile":
        """Perfil sin opinión, usado cuando no hay historial."""
        return cls()

    @property
    def is_default(self) -> bool:
        return self == PreferenceProfile.default()


class ListingFilter(BaseModel):
    """
    Criterios de búsqueda en el catálogo construidos desde un perfil.

    Un campo en None (o lista vacía) significa "sin restricción".
    """

    property_types: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_area: Optional[float] = None
    max_area: Optional[float] = None
    min_bedrooms: Optional[float] = None
    max_bedrooms: Optional[float] = None

    def matches(self, listing) -> bool:
        """
        Evalúa el filtro en memoria sobre un ListingRecord.

        Mismo predicado que la consulta a Supabase: pertenencia de tipo,
        substring de ubicación sin distinguir mayúsculas y rangos inclusivos.
        """
        if self.property_types and listing.property_type not in self.property_types:
            return False

        if self.locations:
            location = (listing.location or "").lower()
            if not any(city.lower() in location for city in self.locations):
                return False

        bounds = (
            (listing.price, self.min_price, self.max_price),
            (listing.area, self.min_area, self.max_area),
            (listing.bedrooms, self.min_bedrooms, self.max_bedrooms),
        )
        for value, low, high in bounds:
            if low is None and high is None:
                continue
            # En SQL una comparación contra NULL no matchea
            if value is None:
                return False
            if low is not None and value < low:
                return False
            if high is not None and value > high:
                return False

        return True
