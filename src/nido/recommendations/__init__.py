"""
Recomendaciones basadas en historial de navegación.

Infiere un perfil de preferencias y lo usa para filtrar el catálogo,
con fallback a propiedades destacadas.
"""

from nido.recommendations.preferences import (
    build_listing_filter,
    city_from_location,
    infer_preferences,
)
from nido.recommendations.history import (
    HistoryTracker,
    build_history_tracker,
    TrackResult,
    decode_history_cookie,
    encode_history_cookie,
    record_view,
)
from nido.recommendations.service import (
    RecommendationService,
    build_recommendation_service,
)

__all__ = [
    "infer_preferences",
    "build_listing_filter",
    "city_from_location",
    "record_view",
    "encode_history_cookie",
    "decode_history_cookie",
    "HistoryTracker",
    "build_history_tracker",
    "TrackResult",
    "RecommendationService",
    "build_recommendation_service",
]
