"""
Cliente de Supabase.

Singleton para conexión a la base de datos. El núcleo de
recomendación y comparación no lo usa directamente: los
repositorios lo reciben inyectado o lo resuelven acá.
"""

from functools import lru_cache

import structlog
from supabase import create_client, Client
from tenacity import retry, stop_after_attempt, wait_exponential

from nido.config import get_settings

logger = structlog.get_logger()


class SupabaseClient:
    """Wrapper del cliente de Supabase con métodos de utilidad."""

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        """Acceso directo al cliente de Supabase."""
        return self._client

    def table(self, name: str):
        """Acceso a una tabla específica."""
        return self._client.table(name)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def execute(self, query) -> list:
        """
        Ejecuta una consulta PostgREST ya armada.

        Reintenta fallas transitorias y re-lanza el último error.

        Returns:
            Lista de filas
        """
        try:
            response = query.execute()
        except Exception as e:
            logger.warning("Error ejecutando consulta", error=str(e))
            raise
        return response.data or []


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """
    Obtiene el cliente de Supabase (singleton cacheado).

    Returns:
        SupabaseClient configurado

    Raises:
        ValueError: Si las credenciales no están configuradas
    """
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError(
            "SUPABASE_URL y SUPABASE_KEY son requeridos. "
            "Configura las variables de entorno."
        )

    # Usar service key si está disponible para operaciones admin
    key = settings.supabase_service_key or settings.supabase_key

    client = create_client(settings.supabase_url, key)
    logger.info("Cliente de Supabase inicializado", url=settings.supabase_url)

    return SupabaseClient(client)
