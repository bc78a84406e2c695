"""
Registro de vistas de propiedades.

Usuarios logueados: tabla user_browsing_history en Supabase.
Usuarios anónimos: cookie con un array JSON acotado.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote, unquote

import structlog

from nido.models import ViewedItem

logger = structlog.get_logger()

DEFAULT_HISTORY_CAP = 20
DEFAULT_COOKIE_NAME = "property_browsing_history"


def record_view(
    history: list[ViewedItem],
    item: ViewedItem,
    cap: int = DEFAULT_HISTORY_CAP,
) -> list[ViewedItem]:
    """
    Agrega una vista al principio del historial.

    Si la propiedad ya estaba, se mueve al frente con el timestamp
    nuevo. Se descartan las entradas más viejas por encima de `cap`.
    No modifica la lista recibida.
    """
    remaining = [
        entry
        for entry in history
        if item.property_id is None or entry.property_id != item.property_id
    ]
    return [item, *remaining][:cap]


def encode_history_cookie(items: list[ViewedItem]) -> str:
    """Serializa el historial como JSON URL-encoded."""
    payload = [item.model_dump() for item in items]
    return quote(json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def decode_history_cookie(value: Optional[str]) -> list[ViewedItem]:
    """
    Parsea el valor de la cookie de historial.

    Acepta JSON plano o URL-encoded. Ante cualquier dato malformado
    devuelve lista vacía.
    """
    if not value:
        return []
    try:
        payload = json.loads(unquote(value))
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Cookie de historial ilegible", error=str(e))
        return []

    if not isinstance(payload, list):
        return []

    items = []
    for record in payload:
        item = ViewedItem.from_record(record)
        if item is not None:
            items.append(item)
    return items


@dataclass
class TrackResult:
    """Resultado de registrar una vista."""

    success: bool
    cookie_value: Optional[str] = None
    cookie_name: Optional[str] = None
    max_age: Optional[int] = None  # segundos
    error: Optional[str] = None


class HistoryTracker:
    """
    Registra vistas de propiedades para usuarios logueados y anónimos.

    El repositorio se inyecta; solo se usa para usuarios logueados.
    """

    def __init__(
        self,
        history_repo,
        cookie_cap: int = DEFAULT_HISTORY_CAP,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        cookie_max_age_days: int = 7,
    ):
        self.history_repo = history_repo
        self.cookie_cap = cookie_cap
        self.cookie_name = cookie_name
        self.cookie_max_age = cookie_max_age_days * 24 * 60 * 60

    def track_view(
        self,
        property_id: str,
        listing: Any,
        user_id: Optional[str] = None,
        cookie_value: Optional[str] = None,
    ) -> TrackResult:
        """
        Registra que se vio una propiedad.

        Args:
            property_id: ID de la propiedad vista
            listing: ListingRecord (o dict) con los datos a guardar
            user_id: Usuario logueado, si hay sesión
            cookie_value: Valor actual de la cookie para anónimos

        Returns:
            TrackResult; para anónimos incluye el nuevo valor de cookie
        """
        try:
            item = ViewedItem.from_listing(property_id, listing)
        except Exception as e:
            logger.error("Error armando vista", property_id=property_id, error=str(e))
            return TrackResult(success=False, error="invalid listing")

        if user_id:
            try:
                self.history_repo.upsert_view(user_id, item)
            except Exception as e:
                logger.error(
                    "Error guardando vista en DB",
                    user_id=user_id,
                    property_id=property_id,
                    error=str(e),
                )
                return TrackResult(success=False, error="Failed to track property view")
            return TrackResult(success=True)

        history = decode_history_cookie(cookie_value)
        history = record_view(history, item, cap=self.cookie_cap)
        logger.debug("Vista registrada en cookie", property_id=property_id, size=len(history))
        return TrackResult(
            success=True,
            cookie_value=encode_history_cookie(history),
            cookie_name=self.cookie_name,
            max_age=self.cookie_max_age,
        )


def build_history_tracker(settings=None, client=None) -> HistoryTracker:
    """
    Arma el tracker con el repositorio de Supabase según la configuración.

    Sin client se usa el singleton de get_supabase_client.
    """
    from nido.config import get_settings
    from nido.database import BrowsingHistoryRepository

    settings = settings or get_settings()
    return HistoryTracker(
        history_repo=BrowsingHistoryRepository(client),
        cookie_cap=settings.history_cookie_limit,
        cookie_name=settings.history_cookie_name,
        cookie_max_age_days=settings.history_cookie_max_age_days,
    )
