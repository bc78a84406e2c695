"""
Servicio de recomendaciones.

Flujo:
1. Obtener historial (DB para usuarios logueados, cookie para anónimos)
2. Inferir preferencias y construir el filtro de catálogo
3. Consultar el catálogo
4. Si no hay historial o hay pocos resultados, caer a destacadas
"""

from typing import Optional

import structlog

from nido.config import Settings, get_settings
from nido.models import ListingRecord
from nido.recommendations.history import decode_history_cookie
from nido.recommendations.preferences import build_listing_filter, infer_preferences

logger = structlog.get_logger()


class RecommendationService:
    """
    Recomendaciones basadas en historial de navegación.

    Los repositorios se inyectan. Nunca lanza excepciones: ante cualquier
    error de datos se degrada a propiedades destacadas.
    """

    def __init__(
        self,
        listing_repo,
        history_repo,
        limit: int = 8,
        history_limit: int = 10,
        fallback_min_ratio: float = 0.5,
    ):
        self.listing_repo = listing_repo
        self.history_repo = history_repo
        self.limit = limit
        self.history_limit = history_limit
        self.fallback_min_ratio = fallback_min_ratio

    def get_recommendations(
        self,
        user_id: Optional[str] = None,
        cookie_value: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[ListingRecord]:
        """
        Devuelve propiedades recomendadas.

        Args:
            user_id: Usuario logueado (None para anónimos)
            cookie_value: Valor de la cookie de historial para anónimos
            limit: Tamaño de página (por defecto el del servicio)

        Returns:
            Lista de ListingRecord, posiblemente vacía
        """
        limit = limit or self.limit

        if user_id:
            try:
                history = self.history_repo.get_recent(user_id, limit=self.history_limit)
            except Exception as e:
                logger.error("Error leyendo historial", user_id=user_id, error=str(e))
                return self.featured_fallback(limit)
        else:
            history = decode_history_cookie(cookie_value)[: self.history_limit]

        if not history:
            logger.info("Sin historial, usando destacadas", user_id=user_id)
            return self.featured_fallback(limit)

        profile = infer_preferences(history)
        listing_filter = build_listing_filter(profile)

        try:
            listings = self.listing_repo.search(listing_filter, limit=limit)
        except Exception as e:
            logger.error("Error buscando por preferencias", error=str(e))
            return self.featured_fallback(limit)

        if self.is_too_thin(listings, limit):
            logger.info(
                "Pocos resultados por preferencias, usando destacadas",
                found=len(listings),
                limit=limit,
            )
            return self.featured_fallback(limit)

        logger.info(
            "Recomendaciones por historial",
            user_id=user_id,
            history=len(history),
            found=len(listings),
        )
        return listings

    def is_too_thin(self, listings: list, limit: int) -> bool:
        """True si el resultado está vacío o por debajo de limit * ratio."""
        return not listings or len(listings) < limit * self.fallback_min_ratio

    def featured_fallback(self, limit: int) -> list[ListingRecord]:
        """Destacadas; si no hay, cualquier propiedad; si falla, lista vacía."""
        try:
            featured = self.listing_repo.get_featured(limit=limit)
            if featured:
                return featured
        except Exception as e:
            logger.error("Error obteniendo destacadas", error=str(e))

        try:
            return self.listing_repo.get_any(limit=limit)
        except Exception as e:
            logger.error("Error obteniendo propiedades", error=str(e))
            return []


def build_recommendation_service(
    settings: Optional[Settings] = None,
    client=None,
) -> RecommendationService:
    """
    Arma el servicio con repositorios de Supabase según la configuración.

    Sin client se usa el singleton de get_supabase_client.
    """
    from nido.database import BrowsingHistoryRepository, ListingRepository

    settings = settings or get_settings()
    return RecommendationService(
        listing_repo=ListingRepository(client),
        history_repo=BrowsingHistoryRepository(client),
        limit=settings.recommendation_limit,
        history_limit=settings.history_inference_limit,
        fallback_min_ratio=settings.fallback_min_ratio,
    )
