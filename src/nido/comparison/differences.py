"""
Diferencias clave entre dos propiedades: precio, superficie y precio por m².
"""

import math
from typing import Optional

from nido.comparison.rules import compare_attribute
from nido.models import ComparisonMode, KeyDifferences, ListingRecord


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def price_per_area(price: Optional[float], area: Optional[float]) -> Optional[float]:
    """Precio por m², con superficie mínima de 1 para evitar dividir por cero."""
    if price is None:
        return None
    return price / max(area or 0.0, 1.0)


def key_differences(a: ListingRecord, b: ListingRecord) -> KeyDifferences:
    """
    Calcula las diferencias derivadas entre dos propiedades.

    Independiente de las reglas por atributo del comparador, salvo que
    reusa compare_attribute para decidir el ganador de cada diferencia.
    """
    area_left = a.effective_area or 0.0
    area_right = b.effective_area or 0.0

    diff = KeyDifferences(
        price_left=a.price,
        price_right=b.price,
        area_left=area_left,
        area_right=area_right,
        area_diff=area_left - area_right,
        area_winner=compare_attribute(area_left, area_right, ComparisonMode.HIGHER_BETTER),
    )

    if a.price is None or b.price is None:
        return diff

    price_diff = a.price - b.price
    highest = max(a.price, b.price)
    diff.price_diff = price_diff
    diff.price_diff_pct = _round_half_up(abs(price_diff) / highest * 100) if highest else 0
    diff.price_winner = compare_attribute(a.price, b.price, ComparisonMode.LOWER_BETTER)

    diff.price_per_area_left = price_per_area(a.price, area_left)
    diff.price_per_area_right = price_per_area(b.price, area_right)
    diff.price_per_area_winner = compare_attribute(
        diff.price_per_area_left,
        diff.price_per_area_right,
        ComparisonMode.LOWER_BETTER,
    )
    return diff
