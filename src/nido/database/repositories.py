"""
Repositorios para operaciones CRUD en Supabase.

Cada repositorio maneja una tabla/entidad específica.
"""

from typing import Optional

import structlog

from nido.database.supabase_client import get_supabase_client, SupabaseClient
from nido.models import ListingFilter, ListingRecord, ViewedItem

logger = structlog.get_logger()


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client


class ListingRepository(BaseRepository):
    """Repositorio para el catálogo de propiedades."""

    TABLE = "properties"

    @staticmethod
    def _to_records(rows: list[dict]) -> list[ListingRecord]:
        records = [ListingRecord.from_record(row) for row in rows]
        return [record for record in records if record is not None]

    def search(self, listing_filter: ListingFilter, limit: int = 8) -> list[ListingRecord]:
        """
        Búsqueda por filtro derivado de preferencias.

        Returns:
            Lista de propiedades que cumplen el filtro
        """
        query = self.client.table(self.TABLE).select("*").limit(limit)

        if listing_filter.property_types:
            query = query.in_("property_type", listing_filter.property_types)

        if listing_filter.locations:
            # ilike para match parcial sobre el texto de ubicación
            location_filters = [
                f"location.ilike.%{location}%" for location in listing_filter.locations
            ]
            query = query.or_(",".join(location_filters))

        ranges = (
            ("price", listing_filter.min_price, listing_filter.max_price),
            ("bedrooms", listing_filter.min_bedrooms, listing_filter.max_bedrooms),
            ("area", listing_filter.min_area, listing_filter.max_area),
        )
        for column, low, high in ranges:
            if low is not None:
                query = query.gte(column, low)
            if high is not None:
                query = query.lte(column, high)

        rows = self.client.execute(query)
        logger.debug("Búsqueda por preferencias", results=len(rows))
        return self._to_records(rows)

    def get_featured(self, limit: int = 8) -> list[ListingRecord]:
        """Obtiene propiedades destacadas."""
        query = self.client.table(self.TABLE).select("*").eq("featured", True).limit(limit)
        return self._to_records(self.client.execute(query))

    def get_any(self, limit: int = 8) -> list[ListingRecord]:
        """Obtiene propiedades sin filtrar."""
        query = self.client.table(self.TABLE).select("*").limit(limit)
        return self._to_records(self.client.execute(query))

    def get_by_id(self, listing_id: str) -> Optional[ListingRecord]:
        """Obtiene una propiedad por su UUID."""
        query = self.client.table(self.TABLE).select("*").eq("id", listing_id).limit(1)
        rows = self.client.execute(query)
        return ListingRecord.from_record(rows[0]) if rows else None


class BrowsingHistoryRepository(BaseRepository):
    """Repositorio para el historial de navegación de usuarios logueados."""

    TABLE = "user_browsing_history"

    def get_recent(self, user_id: str, limit: int = 10) -> list[ViewedItem]:
        """Obtiene las vistas más recientes del usuario, la última primero."""
        query = (
            self.client.table(self.TABLE)
            .select("property_id, property_type, location, bedrooms, price, area, viewed_at")
            .eq("user_id", user_id)
            .order("viewed_at", desc=True)
            .limit(limit)
        )
        rows = self.client.execute(query)
        items = [ViewedItem.from_record(row) for row in rows]
        return [item for item in items if item is not None]

    def upsert_view(self, user_id: str, item: ViewedItem) -> dict:
        """Inserta o actualiza la vista de una propiedad (una fila por propiedad)."""
        data = item.to_db_dict(user_id)
        query = self.client.table(self.TABLE).upsert(
            data, on_conflict="user_id,property_id", ignore_duplicates=False
        )
        rows = self.client.execute(query)
        logger.info(
            "Vista registrada",
            user_id=user_id,
            property_id=item.property_id,
        )
        return rows[0] if rows else {}
