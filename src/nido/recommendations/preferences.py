"""
Inferencia de preferencias a partir del historial de navegación.

Función pura: los datos incompletos o malformados se excluyen de la
estadística correspondiente, nunca se lanza una excepción.
"""

from typing import Any, Iterable, Optional

from nido.config import AVERAGE_BAND, BEDROOMS_SLACK
from nido.models import ListingFilter, NumericRange, PreferenceProfile, ViewedItem


def _as_items(history: Iterable[Any]) -> list[ViewedItem]:
    items = []
    for record in history or []:
        item = ViewedItem.from_record(record)
        if item is not None:
            items.append(item)
    return items


def city_from_location(location: Optional[str]) -> Optional[str]:
    """Primer segmento de 'Ciudad, Barrio'."""
    if not location:
        return None
    city = location.split(",")[0].strip()
    return city or None


def _band_around_mean(values: list[float]) -> NumericRange:
    mean = sum(values) / len(values)
    return NumericRange(
        min=max(0.0, mean * (1 - AVERAGE_BAND)),
        max=mean * (1 + AVERAGE_BAND),
    )


def infer_preferences(history: Iterable[Any]) -> PreferenceProfile:
    """
    Deriva un perfil de preferencias del historial.

    Args:
        history: Vistas recientes (más reciente primero), como ViewedItem
            o dicts. No se trunca ni se ordena: se usa todo lo recibido.

    Returns:
        PreferenceProfile; el perfil por defecto si no hay historial
    """
    items = _as_items(history)
    profile = PreferenceProfile.default()
    if not items:
        return profile

    profile.property_types = {i.property_type for i in items if i.property_type}
    profile.locations = {
        city for city in (city_from_location(i.location) for i in items) if city
    }

    prices = [i.price for i in items if i.price is not None]
    if prices:
        profile.price_range = _band_around_mean(prices)

    areas = [i.area for i in items if i.area is not None]
    if areas:
        profile.area_range = _band_around_mean(areas)

    bedrooms = [i.bedrooms for i in items if i.bedrooms is not None]
    if bedrooms:
        profile.bedrooms_range = NumericRange(
            min=max(0.0, min(bedrooms) - BEDROOMS_SLACK),
            max=max(bedrooms) + BEDROOMS_SLACK,
        )

    return profile


def build_listing_filter(profile: PreferenceProfile) -> ListingFilter:
    """
    Traduce un perfil a criterios de consulta del catálogo.

    Dormitorios solo se filtran si el mínimo del perfil es mayor a 0.
    """
    listing_filter = ListingFilter(
        property_types=sorted(profile.property_types),
        locations=sorted(profile.locations),
        min_price=profile.price_range.min,
        max_price=profile.price_range.max,
        min_area=profile.area_range.min,
        max_area=profile.area_range.max,
    )
    if profile.bedrooms_range.min > 0:
        listing_filter.min_bedrooms = profile.bedrooms_range.min
        listing_filter.max_bedrooms = profile.bedrooms_range.max
    return listing_filter
