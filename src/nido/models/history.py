"""
Historial de navegación: ViewedItem

Cada vista de una propiedad deja una entrada que luego sirve
como señal implícita de preferencias.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = structlog.get_logger()


def to_number(value: Any) -> Optional[float]:
    """
    Devuelve el valor como float si es un número real utilizable.

    Strings, booleanos, NaN, infinitos y negativos se descartan (None).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    return float(value)


def to_text(value: Any) -> Optional[str]:
    """Devuelve el string sin espacios sobrantes, o None si está vacío."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class ViewedItem(BaseModel):
    """
    Snapshot de una propiedad vista por un usuario.

    Se guarda en la tabla user_browsing_history (usuarios logueados)
    o en una cookie JSON (usuarios anónimos).
    """

    model_config = ConfigDict(extra="ignore")

    property_id: Optional[str] = Field(None, description="ID de la propiedad vista")
    property_type: Optional[str] = Field(None, description="Tipo: Stan, Kuća, ...")
    location: Optional[str] = Field(None, description="Texto libre 'Ciudad, Barrio'")
    bedrooms: Optional[float] = Field(None, description="Dormitorios")
    price: Optional[float] = Field(None, description="Precio publicado")
    area: Optional[float] = Field(None, description="Superficie en m²")
    viewed_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="Timestamp ISO de la vista",
    )

    @field_validator("property_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return to_text(str(value))
        return None

    @field_validator("property_type", "location", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return to_text(value)

    @field_validator("bedrooms", "price", "area", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Optional[float]:
        return to_number(value)

    @field_validator("viewed_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> str:
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, str) and value.strip():
            return value
        return datetime.now(timezone.utc).isoformat()

    @classmethod
    def from_record(cls, record: Any) -> Optional["ViewedItem"]:
        """
        Construye un ViewedItem desde un dict de la DB o de la cookie.

        Returns:
            El item, o None si el registro no es un dict
        """
        if isinstance(record, ViewedItem):
            return record
        if not isinstance(record, dict):
            return None
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            logger.warning("Entrada de historial descartada", error=str(e))
            return None

    @classmethod
    def from_listing(cls, property_id: str, listing: Any) -> "ViewedItem":
        """
        Snapshot de un ListingRecord (o dict) en el momento de la vista.

        Sin listing se registra igual la vista, con todos los datos en None.
        """
        if listing is None:
            return cls(property_id=property_id)
        data = listing if isinstance(listing, dict) else listing.model_dump()
        return cls(
            property_id=property_id,
            property_type=data.get("property_type") or data.get("type"),
            location=to_text(data.get("location")) or data.get("city"),
            bedrooms=data.get("bedrooms"),
            price=data.get("price"),
            area=data.get("area"),
        )

    def to_db_dict(self, user_id: str) -> dict:
        """Convierte a diccionario para upsert en Supabase."""
        data = self.model_dump()
        data["user_id"] = user_id
        # La columna bedrooms es entera
        if data["bedrooms"] is not None:
            data["bedrooms"] = int(data["bedrooms"])
        return data
