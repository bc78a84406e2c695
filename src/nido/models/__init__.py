"""
Modelos de datos del sistema.

- ViewedItem: entrada del historial de navegación
- PreferenceProfile / ListingFilter: preferencias inferidas y su consulta
- ListingRecord: propiedad del catálogo
- ComparisonResult: comparación lado a lado
"""

from nido.models.history import ViewedItem
from nido.models.preferences import ListingFilter, NumericRange, PreferenceProfile
from nido.models.listing import ListingRecord
from nido.models.comparison import (
    AttributeComparison,
    ComparisonMode,
    ComparisonResult,
    KeyDifferences,
    Winner,
)

__all__ = [
    # Historial
    "ViewedItem",
    # Preferencias
    "NumericRange",
    "PreferenceProfile",
    "ListingFilter",
    # Catálogo
    "ListingRecord",
    # Comparación
    "Winner",
    "ComparisonMode",
    "AttributeComparison",
    "KeyDifferences",
    "ComparisonResult",
]
