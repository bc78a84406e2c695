"""
Comparador de propiedades.

Arma la tabla lado a lado: para cada atributo de una lista fija indica
qué propiedad es "mejor", más las diferencias clave de precio y superficie.
"""

from typing import Any, Optional, Sequence

import structlog

from nido.comparison.differences import key_differences
from nido.comparison.rules import compare_attribute
from nido.models import (
    AttributeComparison,
    ComparisonMode,
    ComparisonResult,
    ListingRecord,
    Winner,
)

logger = structlog.get_logger()


# (atributo, etiqueta, modo)
COMPARED_ATTRIBUTES = [
    ("price", "Cijena", ComparisonMode.LOWER_BETTER),
    ("property_type", "Tip nekretnine", ComparisonMode.INFORMATIONAL),
    ("location", "Lokacija", ComparisonMode.INFORMATIONAL),
    ("area", "Površina", ComparisonMode.HIGHER_BETTER),
    ("bedrooms", "Spavaće sobe", ComparisonMode.HIGHER_BETTER),
    ("bathrooms", "Kupaonice", ComparisonMode.HIGHER_BETTER),
    ("year_built", "Godina izgradnje", ComparisonMode.YEAR),
    ("heating", "Grijanje", ComparisonMode.INFORMATIONAL),
    ("floor", "Kat", ComparisonMode.INFORMATIONAL),
    ("energy_certificate", "Energetski certifikat", ComparisonMode.ORDINAL_SCALE),
    ("features", "Značajke", ComparisonMode.HIGHER_BETTER),
    ("description", "Opis", ComparisonMode.INFORMATIONAL),
]


def _attribute_value(listing: Optional[ListingRecord], attribute: str) -> Any:
    if listing is None:
        return None
    if attribute == "area":
        return listing.effective_area
    if attribute == "floor":
        return listing.floor_display
    return getattr(listing, attribute)


def _compare_row(attribute: str, left: Any, right: Any, mode: ComparisonMode) -> Winner:
    if attribute == "features":
        # Solo se compara la cantidad si ambas publican la lista
        if left is None or right is None:
            return Winner.NONE
        return compare_attribute(len(left), len(right), mode)
    return compare_attribute(left, right, mode)


def _build_rows(
    left: Optional[ListingRecord],
    right: Optional[ListingRecord],
    compare: bool,
) -> list[AttributeComparison]:
    rows = []
    for attribute, label, mode in COMPARED_ATTRIBUTES:
        left_value = _attribute_value(left, attribute)
        right_value = _attribute_value(right, attribute)
        winner = (
            _compare_row(attribute, left_value, right_value, mode)
            if compare
            else Winner.NONE
        )
        rows.append(
            AttributeComparison(
                attribute=attribute,
                label=label,
                mode=mode,
                left=left_value,
                right=right_value,
                winner=winner,
            )
        )
    return rows


def compare_listings(a: ListingRecord, b: ListingRecord) -> ComparisonResult:
    """
    Compara dos propiedades atributo por atributo.

    Returns:
        ComparisonResult con una fila por atributo y las diferencias clave
    """
    return ComparisonResult(
        left_id=a.id,
        right_id=b.id,
        rows=_build_rows(a, b, compare=True),
        differences=key_differences(a, b),
    )


def compare_selection(listings: Sequence[ListingRecord]) -> ComparisonResult:
    """
    Compara una selección que debería tener exactamente dos propiedades.

    Con menos de dos se devuelve un resultado solo de visualización
    (sin ganadores ni diferencias). Con más de dos se comparan las
    dos primeras.
    """
    listings = list(listings or [])

    if len(listings) > 2:
        logger.warning("Selección con más de dos propiedades", count=len(listings))

    if len(listings) >= 2:
        return compare_listings(listings[0], listings[1])

    left = listings[0] if listings else None
    return ComparisonResult(
        left_id=left.id if left else None,
        rows=_build_rows(left, None, compare=False),
    )
