"""
Comparación lado a lado de dos propiedades.
"""

from nido.comparison.rules import compare_attribute, energy_rank, is_missing
from nido.comparison.differences import key_differences, price_per_area
from nido.comparison.comparator import (
    COMPARED_ATTRIBUTES,
    compare_listings,
    compare_selection,
)
from nido.comparison.compare_store import CompareSelection

__all__ = [
    "compare_attribute",
    "energy_rank",
    "is_missing",
    "key_differences",
    "price_per_area",
    "COMPARED_ATTRIBUTES",
    "compare_listings",
    "compare_selection",
    "CompareSelection",
]
