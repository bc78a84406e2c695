"""
Resultados del comparador de propiedades.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Winner(str, Enum):
    """Qué lado de la comparación es mejor."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class ComparisonMode(str, Enum):
    """Regla de comparación por atributo."""

    MISSING_VALUE = "missing-value"
    HIGHER_BETTER = "numeric-higher-better"
    LOWER_BETTER = "numeric-lower-better"
    YEAR = "year"
    ORDINAL_SCALE = "ordinal-scale"
    INFORMATIONAL = "informational"


class AttributeComparison(BaseModel):
    """Una fila de la tabla comparativa."""

    attribute: str = Field(..., description="Nombre del atributo")
    label: str = Field(..., description="Etiqueta para la UI")
    mode: ComparisonMode
    left: Any = None
    right: Any = None
    winner: Winner = Winner.NONE


class KeyDifferences(BaseModel):
    """
    Diferencias derivadas entre exactamente dos propiedades.

    Los campos de precio quedan en None si a alguna le falta el precio.
    """

    price_left: Optional[float] = None
    price_right: Optional[float] = None
    price_diff: Optional[float] = None
    price_diff_pct: Optional[int] = None
    price_winner: Winner = Winner.NONE

    area_left: float = 0.0
    area_right: float = 0.0
    area_diff: float = 0.0
    area_winner: Winner = Winner.NONE

    price_per_area_left: Optional[float] = None
    price_per_area_right: Optional[float] = None
    price_per_area_winner: Winner = Winner.NONE


class ComparisonResult(BaseModel):
    """Comparación completa lista para renderizar lado a lado."""

    left_id: Optional[str] = None
    right_id: Optional[str] = None
    rows: list[AttributeComparison] = Field(default_factory=list)
    differences: Optional[KeyDifferences] = None

    def row(self, attribute: str) -> Optional[AttributeComparison]:
        """Busca una fila por nombre de atributo."""
        for row in self.rows:
            if row.attribute == attribute:
                return row
        return None

    @property
    def is_display_only(self) -> bool:
        return self.differences is None
