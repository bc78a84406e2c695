"""
ListingRecord: snapshot de solo lectura de una propiedad del catálogo.

Se mapea a la tabla 'properties' de Supabase. Las columnas que el
núcleo no usa se ignoran.
"""

from typing import Any, Optional

import structlog
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

logger = structlog.get_logger()


class ListingRecord(BaseModel):
    """Propiedad tal como la devuelve el catálogo."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    # Identificadores
    id: str = Field(..., description="UUID de la propiedad")
    title: Optional[str] = Field(None, validation_alias=AliasChoices("title", "name"))

    # Precio
    price: Optional[float] = Field(None, description="Precio publicado")
    currency: Optional[str] = Field(None, description="Moneda del precio")

    # Superficie y ambientes
    area: Optional[float] = Field(None, description="Superficie en m²")
    square_meters: Optional[float] = Field(
        None, description="Columna alternativa de superficie"
    )
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None

    # Clasificación y ubicación
    property_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("property_type", "type")
    )
    location: Optional[str] = None
    city: Optional[str] = None

    # Detalles opcionales
    year_built: Optional[int] = None
    heating: Optional[str] = None
    parking: Optional[str] = Field(None, description="Texto libre: Garaža, 2 mjesta, ...")
    floor: Optional[int] = None
    total_floors: Optional[int] = None
    energy_certificate: Optional[str] = None
    features: Optional[list[str]] = None
    description: Optional[str] = None

    featured: bool = Field(default=False, description="Destacada por la agencia")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value) if value is not None else value

    @field_validator("parking", mode="before")
    @classmethod
    def _parking_as_str(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("featured", mode="before")
    @classmethod
    def _featured_default(cls, value):
        return bool(value)

    @classmethod
    def from_record(cls, record: Any) -> Optional["ListingRecord"]:
        """
        Construye un ListingRecord desde una fila de Supabase.

        Returns:
            El registro, o None si la fila no es válida
        """
        if isinstance(record, ListingRecord):
            return record
        if not isinstance(record, dict):
            return None
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            logger.warning(
                "Propiedad descartada",
                listing_id=record.get("id"),
                error=str(e),
            )
            return None

    @property
    def effective_area(self) -> Optional[float]:
        """Superficie, usando square_meters si falta area."""
        return self.area if self.area is not None else self.square_meters

    @property
    def floor_display(self) -> Optional[str]:
        """Piso como 'piso/total' (o solo 'piso')."""
        if self.floor is None:
            return None
        if self.total_floors:
            return f"{self.floor}/{self.total_floors}"
        return str(self.floor)
