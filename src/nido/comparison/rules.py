"""
Reglas de comparación por atributo.

Nunca lanzan: los datos faltantes o no comparables dan Winner.NONE.
"""

from numbers import Real
from typing import Any, Optional

import structlog

from nido.config import ENERGY_CERTIFICATE_SCALE, NOT_SPECIFIED
from nido.models import ComparisonMode, Winner

logger = structlog.get_logger()


def is_missing(value: Any) -> bool:
    """None, string vacío o el texto 'no especificado'."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip() or value.strip() == NOT_SPECIFIED
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value == value


def energy_rank(grade: Any) -> Optional[int]:
    """Posición en la escala A+..G (0 es la mejor), None si no se reconoce."""
    if not isinstance(grade, str):
        return None
    grade = grade.strip().upper()
    if grade not in ENERGY_CERTIFICATE_SCALE:
        return None
    return ENERGY_CERTIFICATE_SCALE.index(grade)


def _higher_wins(left, right) -> Winner:
    if left > right:
        return Winner.LEFT
    if right > left:
        return Winner.RIGHT
    return Winner.NONE


def compare_attribute(left: Any, right: Any, mode: ComparisonMode) -> Winner:
    """
    Compara dos valores de un mismo atributo.

    Si solo un lado tiene valor, gana ese lado sin comparar nada más.

    Args:
        left: Valor de la propiedad izquierda
        right: Valor de la propiedad derecha
        mode: Regla de comparación (ComparisonMode o su valor string)

    Returns:
        Winner.LEFT, Winner.RIGHT o Winner.NONE
    """
    try:
        mode = ComparisonMode(mode)
    except ValueError:
        logger.warning("Modo de comparación desconocido", mode=mode)
        return Winner.NONE

    if mode is ComparisonMode.INFORMATIONAL:
        return Winner.NONE

    left_missing, right_missing = is_missing(left), is_missing(right)
    if left_missing and right_missing:
        return Winner.NONE
    if left_missing:
        return Winner.RIGHT
    if right_missing:
        return Winner.LEFT

    if mode is ComparisonMode.MISSING_VALUE:
        return Winner.NONE

    if mode is ComparisonMode.ORDINAL_SCALE:
        left_rank, right_rank = energy_rank(left), energy_rank(right)
        if left_rank is None or right_rank is None:
            return Winner.NONE
        return _higher_wins(right_rank, left_rank)

    if not (_is_number(left) and _is_number(right)):
        return Winner.NONE

    if mode is ComparisonMode.LOWER_BETTER:
        return _higher_wins(right, left)

    # HIGHER_BETTER y YEAR
    return _higher_wins(left, right)
